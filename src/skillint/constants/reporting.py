"""Report file names, output formats and terminal styling."""

from __future__ import annotations

SCHEMA_VERSION: str = "1.0.0"

FINDINGS_FILENAME: str = "findings.json"
SUMMARY_FILENAME: str = "summary.json"
CSV_FINDINGS_FILENAME: str = "findings.csv"
SARIF_FINDINGS_FILENAME: str = "findings.sarif"

# (prefix, suffix) of the temp file each writer renames into place.
TEMP_FILE_AFFIXES: dict[str, tuple[str, str]] = {
    "json": (".tmp-", ".json"),
    "csv": (".tmp-", ".csv"),
    "sarif": (".tmp-", ".sarif"),
}

VALID_OUTPUT_FORMATS: frozenset[str] = frozenset(TEMP_FILE_AFFIXES)
DEFAULT_OUTPUT_FORMAT: str = "json"
VALID_GROUP_BY: tuple[str, ...] = ("skill", "rule")

CSV_COLUMNS: tuple[str, ...] = (
    "id",
    "skill",
    "rule_id",
    "severity",
    "path",
    "line",
    "title",
    "description",
    "recommendation",
)

SARIF_VERSION: str = "2.1.0"
SARIF_SCHEMA_URI: str = "https://docs.oasis-open.org/sarif/sarif/v2.1.0/cos02/schemas/sarif-schema-2.1.0.json"
SARIF_TOOL_NAME: str = "skillint"
SARIF_LEVELS: dict[str, str] = {"high": "error", "medium": "warning", "low": "note"}

ANSI_RESET: str = "\033[0m"
ANSI_DIM: str = "\033[2m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"

SEVERITY_COLORS: dict[str, str] = {"high": ANSI_RED, "medium": ANSI_YELLOW, "low": ANSI_GREEN}
STATUS_COLORS: dict[str, str] = {"fail": ANSI_RED, "warn": ANSI_YELLOW, "pass": ANSI_GREEN}

# Findings table: (heading, width) per column.
TABLE_COLUMNS: tuple[tuple[str, int], ...] = (("Skill", 25), ("Rule", 24), ("Severity", 8))
HEADER_LABEL_WIDTH: int = 12
TOP_RULES_LIMIT: int = 5
RULE_LIST_LIMIT: int = 6
