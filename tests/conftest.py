"""Shared pytest fixtures for repository-local test data."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def basic_repo_root(fixtures_root: Path) -> Path:
    """Return the primary fixture repository path."""
    return fixtures_root / "repos" / "basic"


@pytest.fixture()
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes UTF-8 text under ``tmp_path``."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
