"""Config data model for Skillint."""

from __future__ import annotations

from dataclasses import dataclass, field

from skillint.constants.config import (
    DEFAULT_COMPANION_FILES,
    DEFAULT_DOC_GLOBS,
    DEFAULT_EXCLUDE_GLOBS,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_SKILL_GLOBS,
)
from skillint.constants.rules import DEFAULT_RULES
from skillint.types import FrontmatterPolicy, RuleOverrideConfig, RulesConfig


@dataclass(frozen=True)
class SkillintConfig:
    """Resolved linter config."""

    skill_globs: tuple[str, ...] = DEFAULT_SKILL_GLOBS
    doc_globs: tuple[str, ...] = DEFAULT_DOC_GLOBS
    exclude_globs: tuple[str, ...] = DEFAULT_EXCLUDE_GLOBS
    companion_files: tuple[str, ...] = DEFAULT_COMPANION_FILES
    max_file_mb: int = DEFAULT_MAX_FILE_MB
    frontmatter: FrontmatterPolicy = FrontmatterPolicy()
    rules: RulesConfig = RulesConfig()
    rule_overrides: dict[str, RuleOverrideConfig] = field(default_factory=dict)

    @property
    def effective_rule_ids(self) -> tuple[str, ...]:
        """Rules enabled by config, in canonical order."""
        enabled = self.rules.enabled or DEFAULT_RULES
        disabled = set(self.rules.disabled)
        return tuple(rule_id for rule_id in DEFAULT_RULES if rule_id in enabled and rule_id not in disabled)
