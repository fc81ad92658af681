"""Regex constants for name normalization."""

from __future__ import annotations

import re
from re import Pattern

NON_OUTPUT_NAME_PATTERN: Pattern[str] = re.compile(r"[^a-z0-9._-]+")
COLLAPSE_DASH_PATTERN: Pattern[str] = re.compile(r"-{2,}")
KEBAB_CASE_PATTERN: Pattern[str] = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# GitHub heading anchors keep word characters, spaces and hyphens only.
ANCHOR_STRIP_PATTERN: Pattern[str] = re.compile(r"[^\w\- ]+", re.UNICODE)
