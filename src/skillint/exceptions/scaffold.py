"""Scaffolding-related exceptions."""

from __future__ import annotations

from skillint.exceptions.base import SkillintError


class ScaffoldError(SkillintError, ValueError):
    """Raised when a new skill directory cannot be created."""
