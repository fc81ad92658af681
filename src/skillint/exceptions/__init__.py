"""Shared exception hierarchy for Skillint."""

from __future__ import annotations

from .base import SkillintError
from .config import ConfigError
from .parsing import SkillParseError
from .scaffold import ScaffoldError

__all__ = ["ConfigError", "ScaffoldError", "SkillParseError", "SkillintError"]
