"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

# Base timestamp for generated files (2024-01-15 10:00:00 UTC)
BASE_MTIME = 1_705_312_800.0

MakeFile = Callable[..., Path]


@pytest.fixture
def make_file() -> MakeFile:
    """Factory creating a file with a given size and age.

    ``age`` is the number of hours before BASE_MTIME; a larger age means
    an older file.
    """

    def _make(root: Path, relpath: str, size: int, age: float = 0.0) -> Path:
        path = root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        mtime = BASE_MTIME - age * 3600
        os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so no user config is read."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "dircull"
