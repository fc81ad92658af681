"""Shared type aliases for Skillint."""

from .common import DocumentKind, LinkKind, RuleDisableSource, RuleScope, Severity
from .config import FrontmatterPolicy, RuleOverrideConfig, RulesConfig

__all__ = [
    "DocumentKind",
    "FrontmatterPolicy",
    "LinkKind",
    "RuleDisableSource",
    "RuleOverrideConfig",
    "RuleScope",
    "RulesConfig",
    "Severity",
]
