"""Collect-all validation of ``skillint.yaml``.

``load_config`` stops at the first problem. This module instead walks the
whole file and reports every problem it can find, so ``skillint
validate-config`` can show a complete list in one run.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from skillint.constants.config import (
    CONFIG_FILENAME,
    RULE_OVERRIDE_ALLOWED_KEYS,
    RULE_OVERRIDE_ALLOWED_SEVERITIES,
)
from skillint.constants.rules import DEFAULT_RULES
from skillint.constants.validation import (
    ALLOWED_CONFIG_KEYS,
    ALLOWED_FRONTMATTER_KEYS,
    ALLOWED_RULES_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    FRONTMATTER_INT_KEYS,
    LIST_OF_STRINGS_KEYS,
)
from skillint.exceptions.validation import ValidationError


@dataclass
class _ErrorLog:
    """Accumulates errors for a single config file."""

    path: str
    errors: list[ValidationError] = field(default_factory=list)

    def add(self, code: str, field_name: str, message: str, *, hint: str = "", **position: int | None) -> None:
        self.errors.append(
            ValidationError(code=code, path=self.path, field=field_name, message=message, hint=hint, **position)
        )

    def unknown_keys(self, block: dict[Any, Any], allowed: frozenset[str], prefix: str = "") -> None:
        """Record CFG004 for every key of *block* outside *allowed*."""
        for key in sorted(block, key=str):
            if key in allowed:
                continue
            where = f" in `{prefix}`" if prefix else ""
            self.add(
                CFG004,
                f"{prefix}.{key}" if prefix else str(key),
                f"unknown key `{key}`{where}",
                hint=suggest_key(str(key), allowed),
            )

    def mapping(self, value: Any, field_name: str) -> dict[str, Any] | None:
        """Return *value* when it is a mapping, recording CFG009 otherwise."""
        if value is None:
            return None
        if not isinstance(value, dict):
            self.add(CFG009, field_name, f"`{field_name}` must be a mapping")
            return None
        return value

    def integer(self, value: Any, field_name: str, minimum: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            self.add(CFG005, field_name, f"invalid type for `{field_name}`", hint="expected an integer")
        elif value < minimum:
            self.add(CFG007, field_name, f"`{field_name}` must be >= {minimum}, got {value}")

    def string_list(self, value: Any, field_name: str, *, expected: str = "a list of strings") -> bool:
        if _is_string_list(value):
            return True
        self.add(CFG005, field_name, f"invalid type for `{field_name}`", hint=f"expected {expected}")
        return False


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate a skillint.yaml file and return every problem found.

    Never raises. A missing default config is not an error; a missing explicit
    one (``config_explicit=True``) is CFG001.
    """
    path = config_path.resolve() if config_path else root.resolve() / CONFIG_FILENAME
    log = _ErrorLog(path=str(path))

    if not path.exists():
        if config_explicit:
            log.add(CFG001, "", f"config file not found: {path}")
        return log.errors

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        log.add(CFG002, "", f"config file is not valid UTF-8: {exc}")
        return log.errors
    except OSError as exc:
        log.add(CFG001, "", f"cannot read config file: {exc}")
        return log.errors

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        log.add(
            CFG002,
            "",
            f"invalid YAML: {exc}",
            line=(mark.line + 1) if mark is not None else None,
            column=(mark.column + 1) if mark is not None else None,
        )
        return log.errors

    if raw is None:
        return log.errors
    if not isinstance(raw, dict):
        log.add(CFG003, "", f"config must be a YAML mapping, got {type(raw).__name__}")
        return log.errors

    log.unknown_keys(raw, ALLOWED_CONFIG_KEYS)

    if "max_file_mb" in raw:
        value = raw["max_file_mb"]
        if isinstance(value, bool) or not isinstance(value, int):
            log.add(CFG005, "max_file_mb", "invalid type for `max_file_mb`", hint="expected a positive integer")
        elif value <= 0:
            log.add(CFG007, "max_file_mb", f"`max_file_mb` must be a positive integer, got {value}")

    for key in LIST_OF_STRINGS_KEYS:
        if key in raw:
            log.string_list(raw[key], key)

    _check_frontmatter(log, log.mapping(raw.get("frontmatter"), "frontmatter"))
    _check_rules(log, log.mapping(raw.get("rules"), "rules"))
    _check_rule_overrides(log, log.mapping(raw.get("rule_overrides"), "rule_overrides"))
    return log.errors


def _is_string_list(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


def _check_frontmatter(log: _ErrorLog, block: dict[str, Any] | None) -> None:
    if block is None:
        return
    log.unknown_keys(block, ALLOWED_FRONTMATTER_KEYS, "frontmatter")
    for key in ("required", "allowed_extra"):
        if key in block:
            log.string_list(block[key], f"frontmatter.{key}")
    for key, minimum in FRONTMATTER_INT_KEYS.items():
        if key in block:
            log.integer(block[key], f"frontmatter.{key}", minimum)


def _check_rules(log: _ErrorLog, block: dict[str, Any] | None) -> None:
    if block is None:
        return
    log.unknown_keys(block, ALLOWED_RULES_KEYS, "rules")

    selected: dict[str, set[str]] = {}
    for key in ("enabled", "disabled"):
        if key not in block or not log.string_list(block[key], f"rules.{key}", expected="a list of rule ids"):
            continue
        selected[key] = set(block[key] or [])
        for rule_id in sorted(selected[key] - set(DEFAULT_RULES)):
            log.add(
                CFG006,
                f"rules.{key}",
                f"unknown rule id `{rule_id}`",
                hint=suggest_key(rule_id, frozenset(DEFAULT_RULES)),
            )

    overlap = selected.get("enabled", set()) & selected.get("disabled", set())
    if overlap:
        log.add(CFG008, "rules", f"rules both enabled and disabled: {', '.join(sorted(overlap))}")


def _check_rule_overrides(log: _ErrorLog, block: dict[str, Any] | None) -> None:
    if block is None:
        return
    allowed = ", ".join(sorted(RULE_OVERRIDE_ALLOWED_SEVERITIES))
    for rule_id in sorted(block, key=str):
        if not isinstance(rule_id, str):
            log.add(CFG005, "rule_overrides", f"rule id `{rule_id}` must be a string")
            continue
        prefix = f"rule_overrides.{rule_id}"
        override = block[rule_id]
        if not isinstance(override, dict):
            log.add(CFG009, prefix, f"`{prefix}` must be a mapping")
            continue
        log.unknown_keys(override, RULE_OVERRIDE_ALLOWED_KEYS, prefix)
        severity = override.get("severity")
        if severity is not None and severity not in RULE_OVERRIDE_ALLOWED_SEVERITIES:
            log.add(
                CFG006,
                f"{prefix}.severity",
                f"invalid value for `{prefix}.severity`",
                hint=f"expected one of: {allowed}; got: {severity!r}",
            )


def suggest_key(key: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean' hint for a mistyped key, or an empty string."""
    matches = difflib.get_close_matches(key, sorted(allowed), n=1, cutoff=0.6)
    return f"did you mean `{matches[0]}`?" if matches else ""
