"""Per-document ``findings.json`` and ``summary.json`` writers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from skillint.constants.reporting import FINDINGS_FILENAME, SCHEMA_VERSION, SUMMARY_FILENAME, TEMP_FILE_AFFIXES
from skillint.io import write_json_atomic
from skillint.linter.stats import rule_counts, severity_counts, sorted_top_findings, status_for
from skillint.model import Finding, Summary


def write_skill_reports(
    out_root: Path,
    skill_name: str,
    findings: list[Finding],
    *,
    all_findings: list[Finding] | None = None,
    output_filter: dict[str, object] | None = None,
) -> Summary:
    """Write ``<out_root>/<skill_name>/{findings,summary}.json`` and return the summary.

    *findings* is what lands in ``findings.json``. When *all_findings* is
    given the summary counts come from it instead, so a display filter never
    hides totals.
    """
    ordered = sorted(findings, key=lambda finding: finding.id)
    summary = build_summary(skill_name, ordered, all_findings=all_findings, output_filter=output_filter)

    report_dir = out_root / skill_name
    _write(report_dir / FINDINGS_FILENAME, [finding.to_dict() for finding in ordered])
    _write(report_dir / SUMMARY_FILENAME, summary.to_dict())
    return summary


def build_summary(
    skill_name: str,
    findings: list[Finding],
    *,
    all_findings: list[Finding] | None = None,
    output_filter: dict[str, object] | None = None,
) -> Summary:
    counted = findings if all_findings is None else all_findings
    return Summary(
        schema_version=SCHEMA_VERSION,
        skill=skill_name,
        status=status_for(counted),
        finding_count=len(counted),
        counts_by_severity=severity_counts(counted),
        counts_by_rule=rule_counts(counted),
        top_findings=tuple(_top_entry(finding) for finding in sorted_top_findings(counted)),
        shown_finding_count=None if all_findings is None else len(findings),
        output_filter=output_filter,
    )


def _top_entry(finding: Finding) -> dict[str, Any]:
    payload = finding.to_dict()
    return {key: payload[key] for key in ("id", "rule_id", "title", "severity", "evidence")}


def _write(path: Path, payload: object) -> None:
    prefix, suffix = TEMP_FILE_AFFIXES["json"]
    write_json_atomic(path=path, payload=payload, temp_prefix=prefix, temp_suffix=suffix)
