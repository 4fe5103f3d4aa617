"""Guarded filesystem operator.

Every operation runs the path validation gate with the matching expected
kind first and only then performs its native call. Native failures are
translated into OperationError subclasses that carry the operation name,
the path and the underlying OSError. Nothing is retried and partial
effects are not rolled back.

Files are opened read-write, positioned for append and created if they
do not exist. New files get 0644 and new directories 0755 permission
bits unless the GuardConfig says otherwise.
"""

import contextlib
import logging
import os
from pathlib import Path
from typing import BinaryIO

from guardio.configs.guard import GuardConfig, get_default_config, load_guard_config
from guardio.core.paths import get_guard_config_path
from guardio.filesystem.errors import (
    CloseError,
    CreateDirError,
    EmptyPathError,
    GuardError,
    MetadataError,
    NilHandleError,
    NilRequestError,
    NotExistentError,
    OpenError,
    ReadError,
    RemoveError,
    TimestampError,
    TruncateError,
    WriteError,
)
from guardio.filesystem.guard import PathGuard
from guardio.filesystem.models import AppendRequest, StrPath
from guardio.filesystem.protected import DenyList

logger = logging.getLogger(__name__)

# Read-write, append position, create if missing
OPEN_MODE = "a+b"


class FileOperator:
    """Performs filesystem operations behind the path validation gate.

    Attributes:
        _guard: Gate run before every native call.
        _config: Permission bits used for created files and directories.
    """

    def __init__(self, guard: PathGuard | None = None, config: GuardConfig | None = None) -> None:
        """Initialize the FileOperator.

        Args:
            guard: Validation gate. Defaults to a guard with the platform deny list.
            config: Guard settings. Defaults to the built-in settings.
        """
        self._config = config if config is not None else get_default_config()
        self._guard = guard if guard is not None else PathGuard()

    @classmethod
    def from_config(cls, config: GuardConfig) -> "FileOperator":
        """Create an operator whose deny list includes the config's extra entries.

        Configured entries are added to the platform tables; built-in
        entries cannot be removed.
        """
        deny_list = DenyList.for_platform().extended(
            dirs=config.extra_blocked_dirs,
            files=config.extra_blocked_files,
        )
        return cls(guard=PathGuard(deny_list), config=config)

    @classmethod
    def from_config_file(cls, path: Path | None = None) -> "FileOperator":
        """Create an operator from a TOML config file.

        Args:
            path: Config file to load. If None, uses the default config path.
                A missing file falls back to the default settings.

        Raises:
            GuardConfigError: If the file exists but cannot be read or validated.
        """
        config_path = path or get_guard_config_path()
        if config_path.exists():
            config = load_guard_config(config_path)
        else:
            logger.debug("No guard config at %s, using defaults", config_path)
            config = get_default_config()
        return cls.from_config(config)

    @property
    def guard(self) -> PathGuard:
        return self._guard

    @property
    def config(self) -> GuardConfig:
        return self._config

    # =========================================================================
    # Handles
    # =========================================================================

    def open_file(self, path: StrPath) -> BinaryIO:
        """Open a file for reading and appending, creating it if absent.

        Args:
            path: File to open.

        Returns:
            Binary file handle positioned at the end of the file.

        Raises:
            PathValidationError: If the path does not pass the gate.
            OpenError: If the file cannot be opened, e.g. its parent is missing.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        return self._open(path)

    def close_file(self, handle: BinaryIO | None) -> None:
        """Close a handle returned by open_file.

        Raises:
            NilHandleError: If the handle is None or already closed.
            CloseError: If closing fails.
        """
        if handle is None or handle.closed:
            raise NilHandleError(str(getattr(handle, "name", "")))
        try:
            handle.close()
        except OSError as e:
            raise CloseError(str(handle.name), e) from e

    def _open(self, path: str) -> BinaryIO:
        try:
            return open(path, OPEN_MODE, opener=self._opener)
        except OSError as e:
            raise OpenError(path, e) from e

    def _opener(self, path: str, flags: int) -> int:
        return os.open(path, flags, self._config.file_mode)

    def _write_and_close(self, handle: BinaryIO, path: str, data: bytes) -> None:
        """Write data to an open handle and close it.

        The handle is closed even when the write fails; a failing close
        never replaces the write error.
        """
        try:
            handle.write(data)
            handle.flush()
        except OSError as e:
            with contextlib.suppress(OSError):
                handle.close()
            raise WriteError(path, e) from e
        self.close_file(handle)

    # =========================================================================
    # Content
    # =========================================================================

    def write_str(self, path: StrPath, text: str) -> None:
        """Append text to a file, creating the file if absent.

        Args:
            path: File to write to.
            text: Text to append, encoded as UTF-8.

        Raises:
            PathValidationError: If the path does not pass the gate.
            OpenError: If the file cannot be opened.
            WriteError: If the text cannot be encoded as UTF-8 or writing fails.
            CloseError: If closing fails after a successful write.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        data = self._encode(path, text)
        self._write_and_close(self._open(path), path, data)

    def write_single_str(self, path: StrPath, text: str) -> None:
        """Replace the content of a file with text.

        The file is reset to empty (and created if absent) before writing,
        so its final content equals exactly the given text. Text that cannot
        be encoded is rejected before the file is touched.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        data = self._encode(path, text)
        self.reset(path)
        self._write_and_close(self._open(path), path, data)

    def _encode(self, path: str, text: str) -> bytes:
        try:
            return text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise WriteError(path, e) from e

    def read_file(self, path: StrPath) -> bytes:
        """Return the full content of a file.

        Raises:
            PathValidationError: If the path does not pass the gate.
            NotExistentError: If the file does not exist.
            ReadError: If the file cannot be read.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        return self._read(path)

    def _read(self, path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            raise NotExistentError(path) from e
        except OSError as e:
            raise ReadError(path, e) from e

    def append_file(self, request: AppendRequest | None) -> None:
        """Append the content of the source file to the target file.

        The target is created if absent and the source is left unmodified.
        If reading or writing fails after the target was opened, the
        target is not removed again and may remain empty.

        Args:
            request: Target and source paths.

        Raises:
            NilRequestError: If request is None.
            PathValidationError: If either path does not pass the gate.
            OpenError: If the target cannot be opened.
            NotExistentError: If the source does not exist.
            ReadError: If the source cannot be read.
            WriteError: If writing to the target fails.
        """
        if request is None:
            raise NilRequestError("append request")

        target = os.fspath(request.target)
        source = os.fspath(request.source)
        self._guard.check_file(target)
        self._guard.check_file(source)

        handle = self._open(target)
        try:
            data = self._read(source)
        except GuardError:
            with contextlib.suppress(OSError):
                handle.close()
            raise
        self._write_and_close(handle, target, data)
        logger.debug("Appended %d bytes of %s to %s", len(data), source, target)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def touch(self, path: StrPath) -> None:
        """Update the modification time of a file, creating it if absent.

        Raises:
            PathValidationError: If the path does not pass the gate.
            TimestampError: If the timestamps of an existing file cannot be updated.
            OpenError: If a missing file cannot be created.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        if self._exists(path):
            try:
                os.utime(path)
            except OSError as e:
                raise TimestampError(path, e) from e
            return
        self.close_file(self._open(path))
        logger.debug("Created empty file %s", path)

    def reset(self, path: StrPath) -> None:
        """Make a file exist and be empty.

        Raises:
            PathValidationError: If the path does not pass the gate.
            OpenError: If a missing file cannot be created.
            TruncateError: If truncation fails.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        if not self._exists(path):
            self.touch(path)
        try:
            os.truncate(path, 0)
        except OSError as e:
            raise TruncateError(path, e) from e

    def remove(self, path: StrPath) -> None:
        """Delete an existing file.

        Raises:
            PathValidationError: If the path does not pass the gate.
            NotExistentError: If the file does not exist.
            RemoveError: If deletion fails.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        if not self._exists(path):
            raise NotExistentError(path)
        try:
            os.remove(path)
        except OSError as e:
            raise RemoveError(path, e) from e
        logger.debug("Removed %s", path)

    def create_dir(self, path: StrPath) -> None:
        """Create a directory and any missing parents.

        Succeeds without changes if the directory already exists.

        Raises:
            PathValidationError: If the path does not pass the gate, including
                when it exists as something other than a directory.
            CreateDirError: If creation fails.
        """
        path = os.fspath(path)
        self._guard.check_dir(path)
        try:
            os.makedirs(path, mode=self._config.dir_mode, exist_ok=True)
        except OSError as e:
            raise CreateDirError(path, e) from e

    # =========================================================================
    # Inspection
    # =========================================================================

    def exists(self, path: StrPath) -> bool:
        """Check if a regular file exists.

        Returns:
            True if the file exists, False if it does not.

        Raises:
            PathValidationError: If the path does not pass the gate.
            MetadataError: If the lookup fails for another reason.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        return self._exists(path)

    def _exists(self, path: str) -> bool:
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise MetadataError(path, e) from e
        return True

    def size(self, path: StrPath) -> int:
        """Return the size of a regular file in bytes.

        Raises:
            PathValidationError: If the path does not pass the gate, including
                when it is a directory.
            NotExistentError: If the file does not exist.
            MetadataError: If the lookup fails for another reason.
        """
        path = os.fspath(path)
        self._guard.check_file(path)
        try:
            return os.stat(path).st_size
        except FileNotFoundError as e:
            raise NotExistentError(path) from e
        except OSError as e:
            raise MetadataError(path, e) from e

    def join_path(self, directory: StrPath, filename: str) -> str:
        """Join a directory and a file name into a validated file path.

        Args:
            directory: Directory part; must pass the gate as a directory.
            filename: File name relative to the directory.

        Returns:
            The joined path.

        Raises:
            EmptyPathError: If the file name is empty.
            PathValidationError: If the directory or the joined path does not pass the gate.
        """
        directory = os.fspath(directory)
        self._guard.check_dir(directory)
        if not filename:
            raise EmptyPathError("file name")
        joined = os.path.join(directory, filename)
        self._guard.check_file(joined)
        return joined
