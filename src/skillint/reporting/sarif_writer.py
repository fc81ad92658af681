"""SARIF 2.1.0 export so code-scanning UIs can show lint findings inline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from skillint import __version__
from skillint.constants.reporting import (
    SARIF_FINDINGS_FILENAME,
    SARIF_LEVELS,
    SARIF_SCHEMA_URI,
    SARIF_TOOL_NAME,
    SARIF_VERSION,
    TEMP_FILE_AFFIXES,
)
from skillint.detectors.registry import RULE_CLASSES
from skillint.io import write_text_atomic
from skillint.linter.stats import finding_sort_key, rule_counts
from skillint.model import Finding


def _level(severity: str) -> str:
    return SARIF_LEVELS.get(severity, "note")


def _physical_location(finding: Finding) -> dict[str, Any]:
    location: dict[str, Any] = {"artifactLocation": {"uri": finding.evidence.path}}
    if finding.evidence.line is not None:
        location["region"] = {"startLine": finding.evidence.line}
    return location


def _result(finding: Finding) -> dict[str, Any]:
    properties: dict[str, Any] = {"skill": finding.skill, "recommendation": finding.recommendation}
    if finding.severity_override is not None:
        properties["severity_override"] = finding.to_dict()["severity_override"]
    return {
        "ruleId": finding.rule_id,
        "level": _level(finding.severity),
        "message": {"text": f"{finding.title}: {finding.description}"},
        "locations": [{"physicalLocation": _physical_location(finding)}],
        "partialFingerprints": {"findingId": finding.id},
        "properties": properties,
    }


def _rule_descriptors(findings: list[Finding]) -> list[dict[str, Any]]:
    """Describe each rule id that appears in *findings*, sorted by id.

    Registered rules carry their summary and default level. Anything else
    (``PARSE_ERROR``) falls back to the first finding title seen.
    """
    first_titles: dict[str, str] = {}
    for finding in findings:
        first_titles.setdefault(finding.rule_id, finding.title)

    descriptors: list[dict[str, Any]] = []
    for rule_id in sorted(first_titles):
        rule = RULE_CLASSES.get(rule_id)
        if rule is None:
            descriptors.append({"id": rule_id, "shortDescription": {"text": first_titles[rule_id]}})
            continue
        descriptors.append(
            {
                "id": rule_id,
                "shortDescription": {"text": rule.summary},
                "defaultConfiguration": {"level": _level(rule.default_severity)},
            }
        )
    return descriptors


def build_sarif_envelope(
    findings: list[Finding],
    *,
    rule_distribution: dict[str, int] | None = None,
    filter_metadata: dict[str, object] | None = None,
) -> dict[str, Any]:
    """Build a SARIF log with a single run holding *findings*.

    *rule_distribution* lets the caller report counts for the unfiltered run
    while *findings* holds only the shown subset.
    """
    ordered = sorted(findings, key=finding_sort_key)
    properties: dict[str, object] = {"ruleDistribution": rule_distribution or rule_counts(ordered)}
    if filter_metadata is not None:
        properties["filter"] = filter_metadata

    driver = {"name": SARIF_TOOL_NAME, "version": __version__, "rules": _rule_descriptors(ordered)}
    return {
        "$schema": SARIF_SCHEMA_URI,
        "version": SARIF_VERSION,
        "runs": [{"tool": {"driver": driver}, "results": [_result(f) for f in ordered], "properties": properties}],
    }


def write_sarif_findings(
    out_root: Path,
    findings: list[Finding],
    *,
    rule_distribution: dict[str, int] | None = None,
    filter_metadata: dict[str, object] | None = None,
) -> Path:
    path = out_root / SARIF_FINDINGS_FILENAME
    envelope = build_sarif_envelope(findings, rule_distribution=rule_distribution, filter_metadata=filter_metadata)
    prefix, suffix = TEMP_FILE_AFFIXES["sarif"]
    write_text_atomic(
        path=path,
        content=json.dumps(envelope, indent=2) + "\n",
        temp_prefix=prefix,
        temp_suffix=suffix,
    )
    return path
