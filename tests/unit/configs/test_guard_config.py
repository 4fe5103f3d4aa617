"""Unit tests for GuardConfig and related functions.

Tests for the guard configuration module that provides the Pydantic
model and TOML I/O for deny list extensions and permission bits.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
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
from guardio.core.paths import get_guard_config_path
from pydantic import ValidationError


class TestGuardConfig:
    """Tests for GuardConfig Pydantic model."""

    def test_default_values(self) -> None:
        """GuardConfig has correct default values."""
        config = GuardConfig()

        assert config.extra_blocked_dirs == ()
        assert config.extra_blocked_files == ()
        assert config.file_mode == 0o644
        assert config.dir_mode == 0o755

    def test_custom_values(self) -> None:
        config = GuardConfig(
            extra_blocked_dirs=("/srv/data",),
            extra_blocked_files=("/srv/key",),
            file_mode=0o600,
            dir_mode=0o700,
        )

        assert config.extra_blocked_dirs == ("/srv/data",)
        assert config.extra_blocked_files == ("/srv/key",)
        assert config.file_mode == 0o600
        assert config.dir_mode == 0o700

    def test_list_entries_become_tuples(self) -> None:
        config = GuardConfig.model_validate({"extra_blocked_dirs": ["/a", "/b"]})

        assert config.extra_blocked_dirs == ("/a", "/b")

    @pytest.mark.parametrize("value", ["0600", "0o600", "600"])
    def test_octal_strings(self, value: str) -> None:
        assert GuardConfig.model_validate({"file_mode": value}).file_mode == 0o600

    def test_invalid_octal_string(self) -> None:
        with pytest.raises(ValidationError):
            GuardConfig.model_validate({"file_mode": "rw-r--r--"})

    def test_mode_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            GuardConfig(dir_mode=0o1777)

    def test_empty_entry_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GuardConfig(extra_blocked_dirs=("  ",))

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            GuardConfig.model_validate({"allow_everything": True})

    def test_frozen(self) -> None:
        config = GuardConfig()

        with pytest.raises(ValidationError):
            config.file_mode = 0o600  # type: ignore[misc]


class TestLoadGuardConfig:
    """Tests for load_guard_config."""

    def test_load(self, tmp_path: Path) -> None:
        config_path = tmp_path / "guard.toml"
        config_path.write_text(
            'extra_blocked_dirs = ["/srv/data"]\nfile_mode = "0600"\ndir_mode = 448\n'
        )

        config = load_guard_config(config_path)

        assert config.extra_blocked_dirs == ("/srv/data",)
        assert config.file_mode == 0o600
        assert config.dir_mode == 0o700

    def test_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(GuardConfigNotFoundError):
            load_guard_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "guard.toml"
        config_path.write_text("extra_blocked_dirs = [\n")

        with pytest.raises(GuardConfigParseError):
            load_guard_config(config_path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        config_path = tmp_path / "guard.toml"
        config_path.write_text("file_mode = 4096\n")

        with pytest.raises(GuardConfigError):
            load_guard_config(config_path)

    def test_default_path(self, tmp_path: Path) -> None:
        """Without a path the XDG config location is used."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            config_dir = tmp_path / "guardio"
            config_dir.mkdir()
            (config_dir / "guard.toml").write_text('extra_blocked_files = ["/srv/key"]\n')

            config = load_guard_config()

        assert config.extra_blocked_files == ("/srv/key",)


class TestSaveGuardConfig:
    """Tests for save_guard_config."""

    def test_save_and_load(self, tmp_path: Path) -> None:
        config = GuardConfig(extra_blocked_dirs=("/srv/data",), file_mode=0o600)
        config_path = tmp_path / "nested" / "guard.toml"

        saved = save_guard_config(config, config_path)

        assert saved == config_path
        assert load_guard_config(config_path) == config

    def test_defaults_written_empty(self, tmp_path: Path) -> None:
        """Only non-default values are written."""
        config_path = save_guard_config(GuardConfig(), tmp_path / "guard.toml")

        assert config_path.read_text() == ""

    def test_modes_written_as_octal(self, tmp_path: Path) -> None:
        config_path = save_guard_config(GuardConfig(dir_mode=0o700), tmp_path / "guard.toml")

        assert 'dir_mode = "0700"' in config_path.read_text()

    def test_write_failure_cleans_up(self, tmp_path: Path) -> None:
        config_path = tmp_path / "guard.toml"

        with patch("guardio.configs.guard.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(GuardConfigError):
                save_guard_config(GuardConfig(dir_mode=0o700), config_path)

        assert list(tmp_path.iterdir()) == []

    def test_default_path(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            saved = save_guard_config(GuardConfig())
            expected = get_guard_config_path()

        assert saved == expected
        assert saved.exists()


class TestDefaultConfig:
    """Tests for get_default_config."""

    def test_defaults(self) -> None:
        config = get_default_config()

        assert config.file_mode == DEFAULT_FILE_MODE
        assert config.dir_mode == DEFAULT_DIR_MODE
