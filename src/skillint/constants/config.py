"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "skillint.yaml"
DEFAULT_MAX_FILE_MB: int = 2

DEFAULT_SKILL_GLOBS: tuple[str, ...] = ("**/SKILL.md",)
DEFAULT_DOC_GLOBS: tuple[str, ...] = ("docs/**/*.md",)
DEFAULT_EXCLUDE_GLOBS: tuple[str, ...] = (
    ".git/**",
    "**/node_modules/**",
    "**/.venv/**",
)
DEFAULT_COMPANION_FILES: tuple[str, ...] = ("reference.md", "examples.md")

DEFAULT_REQUIRED_FIELDS: tuple[str, ...] = ("name", "description", "invocation")
DEFAULT_NAME_MAX_LENGTH: int = 64
DEFAULT_DESCRIPTION_MAX_LENGTH: int = 1024
DEFAULT_INVOCATION_MIN: int = 1

RULE_OVERRIDE_ALLOWED_KEYS: frozenset[str] = frozenset({"severity"})
RULE_OVERRIDE_ALLOWED_SEVERITIES: frozenset[str] = frozenset({"high", "medium", "low"})

RULE_DISABLE_SOURCE_CONFIG: str = "config"
RULE_DISABLE_SOURCE_CLI_DISABLE: str = "cli-disable"
RULE_DISABLE_SOURCE_CLI_ONLY: str = "cli-only"
