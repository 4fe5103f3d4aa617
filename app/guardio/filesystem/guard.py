"""Path validation gate run before every guarded filesystem call.

A path passes the gate when it is not empty, is not blocked by the deny
list and, if it exists, is of the kind the caller expects. Paths that do
not exist pass, so creation operations can target new paths.

The gate and the operation that follows it are not atomic: the path may
change between the metadata lookup and the native call.
"""

import logging
import os
import stat

from guardio.filesystem.errors import (
    EmptyPathError,
    ForbiddenPathError,
    KindMismatchError,
    MetadataError,
)
from guardio.filesystem.models import PathKind, StrPath
from guardio.filesystem.protected import DenyList, default_deny_list

logger = logging.getLogger(__name__)


def _describe_mode(mode: int) -> str:
    """Return a human-readable name for a stat mode."""
    if stat.S_ISDIR(mode):
        return "directory"
    if stat.S_ISREG(mode):
        return "regular file"
    if stat.S_ISFIFO(mode):
        return "fifo"
    if stat.S_ISSOCK(mode):
        return "socket"
    if stat.S_ISCHR(mode) or stat.S_ISBLK(mode):
        return "device"
    return "special file"


class PathGuard:
    """Validates paths against emptiness, a deny list and the expected kind.

    Attributes:
        _deny_list: Blocked directories and files consulted by every check.
    """

    def __init__(self, deny_list: DenyList | None = None) -> None:
        """Initialize the PathGuard.

        Args:
            deny_list: Deny list to enforce. Defaults to the running platform's tables.
        """
        self._deny_list = deny_list if deny_list is not None else default_deny_list()

    @property
    def deny_list(self) -> DenyList:
        return self._deny_list

    def validate(self, path: StrPath, expected: PathKind) -> None:
        """Check that downstream filesystem operations may proceed on a path.

        Args:
            path: Path to check. May be relative or absolute.
            expected: Kind the caller expects the path to be.

        Raises:
            EmptyPathError: If the path is an empty string.
            ForbiddenPathError: If the path is blocked by the deny list.
            KindMismatchError: If the path exists but is not of the expected kind.
            MetadataError: If the metadata lookup fails for a reason other
                than the path not existing, or a relative path cannot be
                resolved because the working directory is gone.
        """
        path = os.fspath(path)
        expected = PathKind(expected)
        if not path:
            raise EmptyPathError()

        try:
            entry = self._deny_list.match(path)
        except OSError as e:
            # Relative path with a vanished working directory
            raise MetadataError(path, e) from e
        if entry is not None:
            logger.debug("Rejected blocked path %s (entry %s)", path, entry)
            raise ForbiddenPathError(path, entry)

        try:
            mode = os.stat(path).st_mode
        except FileNotFoundError:
            return
        except OSError as e:
            raise MetadataError(path, e) from e

        if expected is PathKind.DIRECTORY and stat.S_ISDIR(mode):
            return
        if expected is PathKind.FILE and stat.S_ISREG(mode):
            return

        want = "directory" if expected is PathKind.DIRECTORY else "regular file"
        actual = _describe_mode(mode)
        logger.debug("Rejected %s: expected %s, found %s", path, want, actual)
        raise KindMismatchError(path, want, actual)

    def check_file(self, path: StrPath) -> None:
        """Validate a path that must behave like a regular file."""
        self.validate(path, PathKind.FILE)

    def check_dir(self, path: StrPath) -> None:
        """Validate a path that must behave like a directory."""
        self.validate(path, PathKind.DIRECTORY)


def check_file(path: StrPath) -> None:
    """Validate a file path with the running platform's deny list.

    Raises:
        PathValidationError: If the path does not pass the gate.
    """
    PathGuard().check_file(path)


def check_dir(path: StrPath) -> None:
    """Validate a directory path with the running platform's deny list.

    Raises:
        PathValidationError: If the path does not pass the gate.
    """
    PathGuard().check_dir(path)
