"""Lint orchestration package."""

from __future__ import annotations

from typing import Any

__all__ = ["build_catalog", "lint_workspace"]


def __getattr__(name: str) -> Any:
    """Lazily expose linter APIs to avoid import cycles at package import time."""
    if name == "lint_workspace":
        from .orchestrator import lint_workspace

        return lint_workspace
    if name == "build_catalog":
        from .catalog import build_catalog

        return build_catalog
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
