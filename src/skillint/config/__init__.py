"""Configuration loading, validation, and normalization for Skillint.

This package facade re-exports the public names used across the linter.
"""

from __future__ import annotations

from skillint.config.loader import load_config
from skillint.config.model import SkillintConfig
from skillint.config.validator import suggest_key, validate_config_file

__all__ = [
    "SkillintConfig",
    "load_config",
    "suggest_key",
    "validate_config_file",
]
