"""Plain-text renderers for ``skillint catalog`` and ``skillint rules``."""

from __future__ import annotations

import json

from skillint.model import CatalogEntry


def render_catalog_table(entries: list[CatalogEntry]) -> str:
    """Render catalog entries as an aligned text table."""
    if not entries:
        return "No skills found."

    w_name = max(len("Name"), *(len(entry.name) for entry in entries))
    lines = [f"{'Name':<{w_name}}  {'Valid':<5}  Invocation"]
    lines.append(f"{'-' * w_name}  {'-' * 5}  {'-' * 10}")
    for entry in entries:
        valid = "yes" if entry.valid else "no"
        lines.append(f"{entry.name:<{w_name}}  {valid:<5}  {', '.join(entry.invocation) or '-'}")
        if entry.description:
            lines.append(f"{'':<{w_name}}  {'':<5}  {entry.description}")
        for problem in entry.problems:
            lines.append(f"{'':<{w_name}}  {'':<5}  ! {problem}")
    return "\n".join(lines)


def render_catalog_json(entries: list[CatalogEntry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], indent=2)


def render_rules_table(rules: list[dict[str, str]]) -> str:
    """Render the rule catalogue as ``RULE_ID  severity  scope  summary`` rows."""
    w_rule = max(len(rule["rule_id"]) for rule in rules)
    return "\n".join(
        f"{rule['rule_id']:<{w_rule}}  {rule['severity']:<6}  {rule['scope']:<8}  {rule['summary']}" for rule in rules
    )
