"""Test configuration for pytest."""
from __future__ import annotations

import os
from collections.abc import Callable
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def change_to_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, Any, None]:
    """Change to temporary directory for each test."""
    original_dir = os.getcwd()
    monkeypatch.chdir(tmp_path)
    for var in ['ORGANIZE_PICS_DRY_RUN', 'ORGANIZE_PICS_VERBOSE', 'ORGANIZE_PICS_QUIET']:
        monkeypatch.delenv(var, raising=False)
    yield
    os.chdir(original_dir)


@pytest.fixture
def pictures(tmp_path: Path) -> Path:
    """Directory to organize, separate from the working directory."""
    directory = tmp_path / 'pictures'
    directory.mkdir()
    return directory


@pytest.fixture
def make_files(pictures: Path) -> Callable[..., list[Path]]:
    """Create files in the pictures directory, content defaulting to the name."""

    def make(*names: str) -> list[Path]:
        paths = []
        for name in names:
            path = pictures / name
            path.write_text(name)
            paths.append(path)
        return paths

    return make
