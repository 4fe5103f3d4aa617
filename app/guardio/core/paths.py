"""Location of the guard configuration file.

The file lives in the XDG config directory: $XDG_CONFIG_HOME/guardio/
when that variable holds an absolute path, ~/.config/guardio/ otherwise.
"""

import os
from pathlib import Path

APP_NAME = "guardio"
GUARD_CONFIG_FILENAME = "guard.toml"


def get_config_dir() -> Path:
    """Return the guardio configuration directory."""
    xdg_home = os.environ.get("XDG_CONFIG_HOME", "")
    # Relative values are invalid under the XDG rules and ignored
    base = Path(xdg_home) if os.path.isabs(xdg_home) else Path.home() / ".config"
    return base / APP_NAME


def get_guard_config_path() -> Path:
    """Return the path of guard.toml inside the configuration directory."""
    return get_config_dir() / GUARD_CONFIG_FILENAME
