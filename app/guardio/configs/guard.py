"""Guard configuration and settings.

This module provides the configuration model and I/O functions for the
guarded filesystem layer. The configuration can add blocked directories
and files on top of the built-in platform tables and override the
permission bits used when files and directories are created.

Configuration is stored in ~/.config/guardio/guard.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from guardio.core.paths import get_guard_config_path

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755


class GuardConfig(BaseModel):
    """Configuration for guarded filesystem operations.

    Attributes:
        extra_blocked_dirs: Directory subtrees blocked in addition to the platform table.
        extra_blocked_files: Exact paths blocked in addition to the platform table.
        file_mode: Permission bits for newly created files (before umask).
        dir_mode: Permission bits for newly created directories (before umask).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    extra_blocked_dirs: Annotated[
        tuple[str, ...],
        Field(description="Additional blocked directory subtrees"),
    ] = ()
    extra_blocked_files: Annotated[
        tuple[str, ...],
        Field(description="Additional blocked exact paths"),
    ] = ()
    file_mode: Annotated[
        int,
        Field(ge=0, le=0o777, description="Permission bits for new files"),
    ] = DEFAULT_FILE_MODE
    dir_mode: Annotated[
        int,
        Field(ge=0, le=0o777, description="Permission bits for new directories"),
    ] = DEFAULT_DIR_MODE

    @field_validator("extra_blocked_dirs", "extra_blocked_files")
    @classmethod
    def validate_entries(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject empty deny list entries."""
        for entry in v:
            if not entry.strip():
                msg = "blocked entries must not be empty"
                raise ValueError(msg)
        return v

    @field_validator("file_mode", "dir_mode", mode="before")
    @classmethod
    def parse_octal(cls, v: object) -> object:
        """Accept permission bits written as octal strings (e.g. "0644")."""
        if isinstance(v, str):
            text = v.strip().lower().removeprefix("0o")
            try:
                return int(text, 8)
            except ValueError:
                msg = f"invalid octal permission bits '{v}'"
                raise ValueError(msg) from None
        return v


class GuardConfigError(Exception):
    """Base exception for guard configuration errors."""


class GuardConfigNotFoundError(GuardConfigError):
    """Raised when the guard config file is not found."""


class GuardConfigParseError(GuardConfigError):
    """Raised when the guard config file cannot be parsed."""


def load_guard_config(path: Path | None = None) -> GuardConfig:
    """Load guard configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated GuardConfig object.

    Raises:
        GuardConfigNotFoundError: If the config file doesn't exist.
        GuardConfigParseError: If the TOML syntax is invalid.
        GuardConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_guard_config_path()

    if not config_path.exists():
        raise GuardConfigNotFoundError(f"Guard config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise GuardConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise GuardConfigError(f"Failed to read guard config: {e}") from e

    try:
        config = GuardConfig.model_validate(data)
    except ValidationError as e:
        raise GuardConfigError(f"Invalid guard config content: {e}") from e

    logger.debug("Loaded guard config from %s", config_path)
    return config


def save_guard_config(config: GuardConfig, path: Path | None = None) -> Path:
    """Save guard configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The GuardConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        GuardConfigError: If the file cannot be written.
    """
    config_path = path or get_guard_config_path()

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise GuardConfigError(f"Failed to write guard config: {e}") from e

    return config_path


def _config_to_dict(config: GuardConfig) -> dict[str, object]:
    """Convert GuardConfig to a dictionary for TOML serialization.

    Only includes non-default values to keep the file clean. Permission
    bits are written as octal strings.

    Args:
        config: The GuardConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {}

    if config.extra_blocked_dirs:
        result["extra_blocked_dirs"] = list(config.extra_blocked_dirs)

    if config.extra_blocked_files:
        result["extra_blocked_files"] = list(config.extra_blocked_files)

    if config.file_mode != DEFAULT_FILE_MODE:
        result["file_mode"] = f"{config.file_mode:04o}"

    if config.dir_mode != DEFAULT_DIR_MODE:
        result["dir_mode"] = f"{config.dir_mode:04o}"

    return result


def get_default_config() -> GuardConfig:
    """Create a default GuardConfig.

    Returns:
        GuardConfig with built-in deny lists only and 0644/0755 permission bits.
    """
    return GuardConfig()
