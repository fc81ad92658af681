"""Config loading and normalization for Skillint."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from skillint.config.model import SkillintConfig
from skillint.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_COMPANION_FILES,
    DEFAULT_DOC_GLOBS,
    DEFAULT_EXCLUDE_GLOBS,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_REQUIRED_FIELDS,
    DEFAULT_SKILL_GLOBS,
    RULE_OVERRIDE_ALLOWED_SEVERITIES,
)
from skillint.constants.rules import DEFAULT_RULES
from skillint.constants.validation import FRONTMATTER_INT_KEYS
from skillint.exceptions import ConfigError
from skillint.types import FrontmatterPolicy, RuleOverrideConfig, RulesConfig


def load_config(root: Path, config_path: Path | None = None) -> SkillintConfig:
    """Load and validate linter config from ``skillint.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return SkillintConfig()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file at {path}: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    max_file_mb = raw.get("max_file_mb", DEFAULT_MAX_FILE_MB)
    if isinstance(max_file_mb, bool) or not isinstance(max_file_mb, int) or max_file_mb <= 0:
        raise ConfigError("max_file_mb must be a positive integer")

    companion_files = tuple(
        name.strip()
        for name in _ensure_string_list(raw.get("companion_files", list(DEFAULT_COMPANION_FILES)), "companion_files")
        if name.strip()
    )

    return SkillintConfig(
        skill_globs=tuple(_ensure_string_list(raw.get("skill_globs", list(DEFAULT_SKILL_GLOBS)), "skill_globs")),
        doc_globs=tuple(_ensure_string_list(raw.get("doc_globs", list(DEFAULT_DOC_GLOBS)), "doc_globs")),
        exclude_globs=tuple(
            _ensure_string_list(raw.get("exclude_globs", list(DEFAULT_EXCLUDE_GLOBS)), "exclude_globs")
        ),
        companion_files=companion_files,
        max_file_mb=max_file_mb,
        frontmatter=_build_frontmatter_policy(_ensure_mapping(raw.get("frontmatter"), "frontmatter")),
        rules=_build_rules_config(_ensure_mapping(raw.get("rules"), "rules")),
        rule_overrides=_build_rule_overrides(_ensure_mapping(raw.get("rule_overrides"), "rule_overrides")),
    )


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _build_frontmatter_policy(raw: dict[str, Any]) -> FrontmatterPolicy:
    """Build a FrontmatterPolicy from the raw ``frontmatter`` YAML block."""
    limits: dict[str, int] = {}
    for key, minimum in FRONTMATTER_INT_KEYS.items():
        if key not in raw:
            continue
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
            raise ConfigError(f"frontmatter.{key} must be an integer >= {minimum}")
        limits[key] = value

    required = tuple(
        _ensure_string_list(raw.get("required", list(DEFAULT_REQUIRED_FIELDS)), "frontmatter.required")
    )
    allowed_extra = tuple(_ensure_string_list(raw.get("allowed_extra", []), "frontmatter.allowed_extra"))
    return FrontmatterPolicy(required=required, allowed_extra=allowed_extra, **limits)


def _build_rules_config(raw: dict[str, Any]) -> RulesConfig:
    """Build a RulesConfig, rejecting unknown rule ids."""
    enabled = tuple(_ensure_string_list(raw.get("enabled", []), "rules.enabled"))
    disabled = tuple(_ensure_string_list(raw.get("disabled", []), "rules.disabled"))
    unknown = sorted(set(enabled + disabled) - set(DEFAULT_RULES))
    if unknown:
        raise ConfigError(f"Unknown rule id(s) in rules: {', '.join(unknown)}")
    overlap = sorted(set(enabled) & set(disabled))
    if overlap:
        raise ConfigError(f"Rules both enabled and disabled: {', '.join(overlap)}")
    return RulesConfig(enabled=enabled, disabled=disabled)


def _build_rule_overrides(raw: dict[str, Any]) -> dict[str, RuleOverrideConfig]:
    overrides: dict[str, RuleOverrideConfig] = {}
    for rule_id, override_raw in sorted(raw.items(), key=lambda item: str(item[0])):
        if not isinstance(rule_id, str):
            raise ConfigError(f"rule_overrides keys must be rule id strings, got {rule_id!r}")
        if not isinstance(override_raw, dict):
            raise ConfigError(f"rule_overrides.{rule_id} must be a mapping")
        severity = override_raw.get("severity")
        if severity is not None and severity not in RULE_OVERRIDE_ALLOWED_SEVERITIES:
            raise ConfigError(
                f"rule_overrides.{rule_id}.severity must be one of "
                f"{sorted(RULE_OVERRIDE_ALLOWED_SEVERITIES)}, got {severity!r}"
            )
        overrides[rule_id] = RuleOverrideConfig(severity=severity)
    return overrides
