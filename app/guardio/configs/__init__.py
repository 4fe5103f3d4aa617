"""Guard configuration module.

This module provides the configuration model and TOML I/O for the
guarded filesystem layer.
"""

from guardio.configs.guard import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    GuardConfig,
    GuardConfigError,
    GuardConfigNotFoundError,
    GuardConfigParseError,
    get_default_config,
    load_guard_config,
    save_guard_config,
)

__all__ = [
    "DEFAULT_DIR_MODE",
    "DEFAULT_FILE_MODE",
    "GuardConfig",
    "GuardConfigError",
    "GuardConfigNotFoundError",
    "GuardConfigParseError",
    "get_default_config",
    "load_guard_config",
    "save_guard_config",
]
