"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid enum value
CFG007: str = "CFG007"  # value out of range
CFG008: str = "CFG008"  # contradictory rule config
CFG009: str = "CFG009"  # invalid nested mapping
CFG010: str = "CFG010"  # root directory not found

ALL_CFG_CODES: tuple[str, ...] = (
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    CFG010,
)

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "skill_globs",
        "doc_globs",
        "exclude_globs",
        "companion_files",
        "max_file_mb",
        "frontmatter",
        "rules",
        "rule_overrides",
    }
)

ALLOWED_FRONTMATTER_KEYS: frozenset[str] = frozenset(
    {
        "required",
        "allowed_extra",
        "name_max_length",
        "description_max_length",
        "invocation_min",
    }
)
ALLOWED_RULES_KEYS: frozenset[str] = frozenset({"enabled", "disabled"})

LIST_OF_STRINGS_KEYS: tuple[str, ...] = (
    "skill_globs",
    "doc_globs",
    "exclude_globs",
    "companion_files",
)

FRONTMATTER_INT_KEYS: dict[str, int] = {
    "name_max_length": 1,
    "description_max_length": 1,
    "invocation_min": 0,
}
