"""
Shared fixtures for the git-sync tests.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _restore_logging():
    """setup_logging() replaces the root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def mirror_root(tmp_path: Path) -> Path:
    """An existing, empty mirror top-level directory."""
    root = tmp_path / "mirror"
    root.mkdir()
    return root


def write_config(path: Path, *urls: str) -> Path:
    """Write a repository list, one URL per line."""
    path.write_text("\n".join(urls) + "\n", encoding="utf-8")
    return path
