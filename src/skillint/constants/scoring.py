"""Constants for severity ranking."""

from __future__ import annotations

SEVERITY_RANK: dict[str, int] = {"low": 0, "medium": 1, "high": 2}
SEVERITY_ORDER: tuple[str, ...] = ("high", "medium", "low")
TOP_FINDINGS_DEFAULT_LIMIT: int = 5
FINDING_ID_HEX_LENGTH: int = 16
