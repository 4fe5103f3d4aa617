"""Blocked filesystem paths that guarded operations must never touch.

This module defines the platform tables of operating-system-critical
directories and files. A path is blocked when it equals a blocked file
or when it equals or is nested under a blocked directory. Both the
candidate and every table entry are canonicalized before comparison, so
equivalent spellings of the same path are treated identically. Entries
are canonicalized once, when the deny list is built.
"""

import ntpath
import os
import posixpath
from dataclasses import dataclass, field
from functools import cache
from types import ModuleType

# Directory subtrees blocked on Unix-like systems.
UNIX_BLOCKED_DIRS: tuple[str, ...] = (
    "/boot",
    "/dev",
    "/lost+found",
    "/proc",
)

# Exact paths blocked on Unix-like systems. Children remain accessible.
UNIX_BLOCKED_FILES: tuple[str, ...] = (
    "/",
    "/bin",
    "/etc",
    "/home",
    "/lib",
    "/media",
    "/mnt",
    "/opt",
    "/root",
    "/sbin",
    "/srv",
    "/tmp",
    "/usr",
    "/var",
)

WINDOWS_BLOCKED_DIRS: tuple[str, ...] = (
    "C:\\Windows\\System32",
    "C:\\System Volume Information",
    "C:\\Windows\\WinSxS",
    "C:\\Windows\\SysWOW64",
)

WINDOWS_BLOCKED_FILES: tuple[str, ...] = (
    "C:\\Program Files",
    "C:\\Program Files (x86)",
    "C:\\",
    "C:\\Windows",
    "C:\\pagefile.sys",
)

POSIX = "posix"
WINDOWS = "windows"

_FLAVOR_MODULES: dict[str, ModuleType] = {
    POSIX: posixpath,
    WINDOWS: ntpath,
}


def native_flavor() -> str:
    """Return the path flavor of the running platform."""
    return WINDOWS if os.name == "nt" else POSIX


@dataclass(frozen=True, slots=True)
class DenyList:
    """Immutable set of blocked directories and files for one platform.

    Attributes:
        blocked_dirs: Directory subtrees; the entry and everything below it is blocked.
        blocked_files: Exact paths that are blocked.
        flavor: Path flavor used for canonicalization ("posix" or "windows").
    """

    blocked_dirs: tuple[str, ...]
    blocked_files: tuple[str, ...]
    flavor: str = POSIX
    # (canonical form, entry as spelled) pairs, computed once
    _dir_keys: tuple[tuple[str, str], ...] = field(
        init=False, repr=False, compare=False, default=()
    )
    _file_keys: tuple[tuple[str, str], ...] = field(
        init=False, repr=False, compare=False, default=()
    )

    def __post_init__(self) -> None:
        if self.flavor not in _FLAVOR_MODULES:
            msg = f"Unknown path flavor: {self.flavor!r}"
            raise ValueError(msg)
        # Lists passed by callers are frozen into tuples
        object.__setattr__(self, "blocked_dirs", tuple(self.blocked_dirs))
        object.__setattr__(self, "blocked_files", tuple(self.blocked_files))
        object.__setattr__(
            self, "_dir_keys", tuple((self.canonicalize(e), e) for e in self.blocked_dirs)
        )
        object.__setattr__(
            self, "_file_keys", tuple((self.canonicalize(e), e) for e in self.blocked_files)
        )

    @classmethod
    def for_platform(cls, platform: str | None = None) -> "DenyList":
        """Create the deny list for a platform.

        Args:
            platform: "posix" or "windows". If None, the running platform is used.

        Returns:
            DenyList populated with the platform's built-in tables.

        Raises:
            ValueError: If the platform is unknown.
        """
        flavor = platform or native_flavor()
        if flavor == WINDOWS:
            return cls(WINDOWS_BLOCKED_DIRS, WINDOWS_BLOCKED_FILES, WINDOWS)
        if flavor == POSIX:
            return cls(UNIX_BLOCKED_DIRS, UNIX_BLOCKED_FILES, POSIX)
        msg = f"Unknown platform: {platform!r}"
        raise ValueError(msg)

    def extended(self, dirs: tuple[str, ...] = (), files: tuple[str, ...] = ()) -> "DenyList":
        """Return a new deny list with additional entries.

        Args:
            dirs: Extra directory subtrees to block.
            files: Extra exact paths to block.

        Returns:
            New DenyList; this instance is left unchanged.
        """
        return DenyList(
            blocked_dirs=self.blocked_dirs + tuple(dirs),
            blocked_files=self.blocked_files + tuple(files),
            flavor=self.flavor,
        )

    @property
    def _module(self) -> ModuleType:
        return _FLAVOR_MODULES[self.flavor]

    def canonicalize(self, path: str) -> str:
        """Reduce a path to its canonical form for comparison.

        Redundant separators, "." and ".." segments are resolved. On the
        native flavor relative paths are anchored at the current working
        directory. The Windows flavor compares case-insensitively.

        Args:
            path: Path to canonicalize.

        Returns:
            Canonical path string.
        """
        module = self._module
        cleaned = module.normpath(path)
        if module is os.path:
            cleaned = os.path.abspath(cleaned)
        # POSIX normpath keeps a leading "//"; it names the same root here
        if self.flavor == POSIX and cleaned.startswith("//"):
            cleaned = "/" + cleaned.lstrip("/")
        return module.normcase(cleaned)

    def match(self, path: str) -> str | None:
        """Find the blocked entry a path collides with.

        Args:
            path: Path to check.

        Returns:
            The blocked entry as spelled in the table, or None if the path is allowed.

        Raises:
            OSError: If a relative path cannot be anchored because the
                current working directory is gone.
        """
        candidate = self.canonicalize(path)
        sep = self._module.sep

        for key, entry in self._file_keys:
            if key == candidate:
                return entry

        for root, entry in self._dir_keys:
            if candidate == root or candidate.startswith(root.rstrip(sep) + sep):
                return entry

        return None

    def is_blocked(self, path: str) -> bool:
        """Check if a path is blocked."""
        return self.match(path) is not None


@cache
def default_deny_list() -> DenyList:
    """Return the deny list of the running platform.

    Built once on first use and shared afterwards.
    """
    return DenyList.for_platform()


def is_blocked_path(path: str) -> bool:
    """Check a path against the running platform's deny list.

    Args:
        path: Filesystem path to check.

    Returns:
        True if the path equals a blocked file or lies under a blocked directory.
    """
    return default_deny_list().is_blocked(path)
