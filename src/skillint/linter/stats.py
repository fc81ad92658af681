"""Counting and ordering utilities for findings and summaries."""

from __future__ import annotations

from collections import Counter

from skillint.constants.scoring import SEVERITY_RANK, TOP_FINDINGS_DEFAULT_LIMIT
from skillint.model import Finding
from skillint.types import Severity


def severity_counts(findings: list[Finding]) -> dict[Severity, int]:
    """Count findings by severity with stable keys."""
    counts = Counter(finding.severity for finding in findings)
    return {
        "high": int(counts.get("high", 0)),
        "medium": int(counts.get("medium", 0)),
        "low": int(counts.get("low", 0)),
    }


def rule_counts(findings: list[Finding]) -> dict[str, int]:
    """Count findings per rule id, sorted by rule id."""
    counts = Counter(finding.rule_id for finding in findings)
    return {rule_id: int(count) for rule_id, count in sorted(counts.items())}


def finding_sort_key(finding: Finding) -> tuple[int, str, int, str]:
    """Order by severity (highest first), then path, line and id."""
    return (
        -SEVERITY_RANK[finding.severity],
        finding.evidence.path,
        finding.evidence.line or 0,
        finding.id,
    )


def sorted_top_findings(
    findings: list[Finding],
    limit: int = TOP_FINDINGS_DEFAULT_LIMIT,
) -> list[Finding]:
    """Return the most severe findings sorted deterministically."""
    return sorted(findings, key=finding_sort_key)[:limit]


def status_for(findings: list[Finding]) -> str:
    """``fail`` when any high finding exists, ``warn`` for other findings, else ``pass``."""
    if any(finding.severity == "high" for finding in findings):
        return "fail"
    if findings:
        return "warn"
    return "pass"
