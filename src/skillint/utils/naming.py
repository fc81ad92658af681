"""String normalization helpers for skill names and heading anchors."""

from __future__ import annotations

from skillint.constants.discovery import SKILL_NAME_FALLBACK
from skillint.constants.naming import (
    ANCHOR_STRIP_PATTERN,
    COLLAPSE_DASH_PATTERN,
    KEBAB_CASE_PATTERN,
    NON_OUTPUT_NAME_PATTERN,
)


def sanitize_output_name(raw_name: str) -> str:
    """Normalize names for stable output directory paths."""
    normalized = raw_name.strip().lower()
    normalized = NON_OUTPUT_NAME_PATTERN.sub("-", normalized)
    normalized = COLLAPSE_DASH_PATTERN.sub("-", normalized)
    normalized = normalized.strip("-._")
    return normalized or SKILL_NAME_FALLBACK


def is_kebab_case(name: str) -> bool:
    """Return True for lowercase ``words-joined-by-dashes`` names."""
    return bool(KEBAB_CASE_PATTERN.match(name))


def heading_anchor(text: str) -> str:
    """Return the GitHub-style anchor slug for a heading text.

    Markup characters and punctuation are dropped, the text is lowercased and
    each space becomes a hyphen. Repeated headings are disambiguated by the
    parser, not here.
    """
    stripped = ANCHOR_STRIP_PATTERN.sub("", text.strip().lower())
    return stripped.replace(" ", "-")
