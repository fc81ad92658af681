"""Flat CSV export of every finding in a lint run."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from skillint.constants.reporting import CSV_COLUMNS, CSV_FINDINGS_FILENAME, TEMP_FILE_AFFIXES
from skillint.io import write_text_atomic
from skillint.linter.stats import finding_sort_key
from skillint.model import Finding


def _row(finding: Finding) -> dict[str, object]:
    return {
        "id": finding.id,
        "skill": finding.skill,
        "rule_id": finding.rule_id,
        "severity": finding.severity,
        "path": finding.evidence.path,
        "line": "" if finding.evidence.line is None else finding.evidence.line,
        "title": finding.title,
        "description": finding.description,
        "recommendation": finding.recommendation,
    }


def render_csv_string(findings: list[Finding]) -> str:
    """Render findings as CSV with a header row, most severe first."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    writer.writerows(_row(finding) for finding in sorted(findings, key=finding_sort_key))
    return buffer.getvalue()


def write_csv_findings(out_root: Path, findings: list[Finding]) -> Path:
    path = out_root / CSV_FINDINGS_FILENAME
    prefix, suffix = TEMP_FILE_AFFIXES["csv"]
    write_text_atomic(path=path, content=render_csv_string(findings), temp_prefix=prefix, temp_suffix=suffix)
    return path
