"""Typed configuration structures for Skillint settings."""

from __future__ import annotations

from dataclasses import dataclass

from skillint.constants.config import (
    DEFAULT_DESCRIPTION_MAX_LENGTH,
    DEFAULT_INVOCATION_MIN,
    DEFAULT_NAME_MAX_LENGTH,
    DEFAULT_REQUIRED_FIELDS,
)
from skillint.types.common import Severity


@dataclass(frozen=True)
class FrontmatterPolicy:
    """Field requirements applied to SKILL.md front matter."""

    required: tuple[str, ...] = DEFAULT_REQUIRED_FIELDS
    allowed_extra: tuple[str, ...] = ()
    name_max_length: int = DEFAULT_NAME_MAX_LENGTH
    description_max_length: int = DEFAULT_DESCRIPTION_MAX_LENGTH
    invocation_min: int = DEFAULT_INVOCATION_MIN

    @property
    def known_keys(self) -> frozenset[str]:
        """Keys accepted without an unknown-key finding."""
        return frozenset((*self.required, *self.allowed_extra))


@dataclass(frozen=True)
class RulesConfig:
    """Rule enablement toggles."""

    enabled: tuple[str, ...] = ()
    disabled: tuple[str, ...] = ()


@dataclass(frozen=True)
class RuleOverrideConfig:
    """Per-rule override settings from ``skillint.yaml``."""

    severity: Severity | None = None
