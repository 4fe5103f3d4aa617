"""Filesystem domain models for the validation gate and operations.

This module defines the expected path kinds checked by the gate and the
request type consumed by the append operation.
"""

import os
from dataclasses import dataclass
from enum import Enum

# Paths are accepted as strings or path-like objects and never cached
StrPath = str | os.PathLike[str]


class PathKind(str, Enum):
    """Kind of filesystem entry a caller expects a path to be.

    Attributes:
        FILE: Regular file.
        DIRECTORY: Directory.
    """

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class AppendRequest:
    """Request to append the content of one file to another.

    Attributes:
        target: File that is extended; created if it does not exist.
        source: Existing regular file whose bytes are appended. Left unmodified.
    """

    target: StrPath
    source: StrPath
