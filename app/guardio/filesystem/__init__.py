"""Guarded filesystem access module.

This module provides the path validation gate, the platform deny lists,
the guarded file operator, its error taxonomy and golden file fixtures.
"""

from guardio.filesystem.errors import (
    CloseError,
    CreateDirError,
    EmptyPathError,
    ForbiddenPathError,
    GoldenMismatchError,
    GuardError,
    KindMismatchError,
    MetadataError,
    NilHandleError,
    NilRequestError,
    NotExistentError,
    OpenError,
    OperationError,
    PathValidationError,
    ReadError,
    RemoveError,
    TimestampError,
    TruncateError,
    WriteError,
)
from guardio.filesystem.golden import (
    GOLDEN_DIR,
    GOLDEN_SUFFIX,
    Testcase,
    create_golden_file,
    eval_golden_file,
    golden_file_path,
)
from guardio.filesystem.guard import PathGuard, check_dir, check_file
from guardio.filesystem.models import AppendRequest, PathKind, StrPath
from guardio.filesystem.operator import FileOperator
from guardio.filesystem.protected import (
    UNIX_BLOCKED_DIRS,
    UNIX_BLOCKED_FILES,
    WINDOWS_BLOCKED_DIRS,
    WINDOWS_BLOCKED_FILES,
    DenyList,
    default_deny_list,
    is_blocked_path,
)

__all__ = [
    "GOLDEN_DIR",
    "GOLDEN_SUFFIX",
    "UNIX_BLOCKED_DIRS",
    "UNIX_BLOCKED_FILES",
    "WINDOWS_BLOCKED_DIRS",
    "WINDOWS_BLOCKED_FILES",
    "AppendRequest",
    "CloseError",
    "CreateDirError",
    "DenyList",
    "EmptyPathError",
    "FileOperator",
    "ForbiddenPathError",
    "GoldenMismatchError",
    "GuardError",
    "KindMismatchError",
    "MetadataError",
    "NilHandleError",
    "NilRequestError",
    "NotExistentError",
    "OpenError",
    "OperationError",
    "PathGuard",
    "PathKind",
    "PathValidationError",
    "ReadError",
    "RemoveError",
    "StrPath",
    "Testcase",
    "TimestampError",
    "TruncateError",
    "WriteError",
    "check_dir",
    "check_file",
    "create_golden_file",
    "default_deny_list",
    "eval_golden_file",
    "golden_file_path",
    "is_blocked_path",
]
