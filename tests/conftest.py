"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from guardio.filesystem.operator import FileOperator


@pytest.fixture
def operator() -> FileOperator:
    """FileOperator with the platform deny list and default settings."""
    return FileOperator()


@pytest.fixture
def tmp_file(tmp_path: Path) -> Path:
    """Existing empty regular file inside a temporary directory."""
    path = tmp_path / "existing.txt"
    path.write_bytes(b"")
    return path


@pytest.fixture
def missing_file(tmp_path: Path) -> Path:
    """Path of a file that does not exist yet."""
    return tmp_path / "missing.txt"
