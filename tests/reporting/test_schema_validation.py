"""Tests for JSON Schema validation of findings and summary outputs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import pytest

from skillint.constants.reporting import SCHEMA_VERSION
from skillint.linter import lint_workspace
from skillint.model import Evidence, Finding, SeverityOverride
from skillint.reporting.filters import OutputFilters, build_filter_metadata
from skillint.reporting.writer import build_summary, write_skill_reports
from skillint.types import Severity

SCHEMAS_DIR: Path = Path(__file__).resolve().parents[2] / "schemas"
FINDINGS_SCHEMA_PATH: Path = SCHEMAS_DIR / "findings.schema.json"
SUMMARY_SCHEMA_PATH: Path = SCHEMAS_DIR / "summary.schema.json"


def _load_schema(path: Path) -> dict[str, Any]:
    """Load a JSON Schema file from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def _make_finding(
    *,
    fid: str = "f-001",
    rule_id: str = "LINK_BROKEN",
    severity: Severity = "high",
    skill: str = "test-skill",
    path: str = "SKILL.md",
    line: int | None = 1,
) -> Finding:
    """Create a minimal Finding for testing."""
    return Finding(
        id=fid,
        severity=severity,
        title=f"{rule_id} finding",
        description=f"Description for {rule_id}",
        evidence=Evidence(path=path, line=line, snippet="snippet"),
        skill=skill,
        rule_id=rule_id,
        recommendation=f"Fix {rule_id}",
    )


@pytest.fixture()
def findings_schema() -> dict[str, Any]:
    """Load the findings JSON Schema."""
    return _load_schema(FINDINGS_SCHEMA_PATH)


@pytest.fixture()
def summary_schema() -> dict[str, Any]:
    """Load the summary JSON Schema."""
    return _load_schema(SUMMARY_SCHEMA_PATH)


@pytest.fixture()
def sample_findings() -> list[Finding]:
    """Create a set of findings spanning all severities."""
    return [
        _make_finding(fid="f-001", rule_id="DESCRIPTION_FIELD", severity="high"),
        _make_finding(fid="f-002", rule_id="LINK_BROKEN", severity="medium"),
        _make_finding(fid="f-003", rule_id="CODE_FENCE", severity="low"),
    ]


def test_findings_schema_is_valid_json_schema(findings_schema: dict[str, Any]) -> None:
    """Findings schema itself must be a valid JSON Schema document."""
    jsonschema.Draft202012Validator.check_schema(findings_schema)


def test_summary_schema_is_valid_json_schema(summary_schema: dict[str, Any]) -> None:
    """Summary schema itself must be a valid JSON Schema document."""
    jsonschema.Draft202012Validator.check_schema(summary_schema)


def test_findings_payload_validates(
    sample_findings: list[Finding],
    findings_schema: dict[str, Any],
) -> None:
    """Serialized findings array must conform to the findings schema."""
    payload = [f.to_dict() for f in sample_findings]
    jsonschema.validate(instance=payload, schema=findings_schema)


def test_finding_with_severity_override_validates(findings_schema: dict[str, Any]) -> None:
    finding = Finding(
        id="f-009",
        severity="low",
        title="Broken link",
        description="Link target `x.md` does not exist.",
        evidence=Evidence(path="skills/a/SKILL.md", line=3, snippet="[x](x.md)"),
        skill="a",
        rule_id="LINK_BROKEN",
        recommendation="Fix the link target or remove the link.",
        severity_override=SeverityOverride(
            original="medium",
            applied="low",
            reason="rule_overrides.LINK_BROKEN.severity",
        ),
    )
    jsonschema.validate(instance=[finding.to_dict()], schema=findings_schema)


def test_summary_payload_validates(
    sample_findings: list[Finding],
    summary_schema: dict[str, Any],
) -> None:
    """Built summary must conform to the summary schema."""
    summary = build_summary("test-skill", sample_findings)
    jsonschema.validate(instance=summary.to_dict(), schema=summary_schema)


def test_summary_status_reflects_worst_severity(sample_findings: list[Finding]) -> None:
    assert build_summary("s", sample_findings).status == "fail"
    assert build_summary("s", sample_findings[1:]).status == "warn"
    assert build_summary("s", []).status == "pass"


def test_summary_contains_schema_version(sample_findings: list[Finding]) -> None:
    """Summary output must include schema_version matching the constant."""
    payload = build_summary("test-skill", sample_findings).to_dict()
    assert payload["schema_version"] == SCHEMA_VERSION


def test_summary_counts_by_severity_and_rule(sample_findings: list[Finding]) -> None:
    payload = build_summary("test-skill", sample_findings).to_dict()
    assert payload["counts"] == {
        "by_severity": {"high": 1, "medium": 1, "low": 1},
        "by_rule": {"CODE_FENCE": 1, "DESCRIPTION_FIELD": 1, "LINK_BROKEN": 1},
    }
    assert [item["id"] for item in payload["top_findings"]] == ["f-001", "f-002", "f-003"]


def test_summary_top_findings_capped_at_five(summary_schema: dict[str, Any]) -> None:
    findings = [_make_finding(fid=f"f-{index:03d}", severity="low", line=index) for index in range(1, 9)]
    payload = build_summary("test-skill", findings).to_dict()

    assert payload["finding_count"] == 8
    assert len(payload["top_findings"]) == 5
    jsonschema.validate(instance=payload, schema=summary_schema)


def test_filtered_summary_keeps_real_totals(
    sample_findings: list[Finding],
    summary_schema: dict[str, Any],
) -> None:
    filters = OutputFilters(min_severity="high")
    shown = sample_findings[:1]
    summary = build_summary(
        "test-skill",
        shown,
        all_findings=sample_findings,
        output_filter=build_filter_metadata(total=3, shown=1, filters=filters),
    )
    payload = summary.to_dict()

    assert payload["finding_count"] == 3
    assert payload["shown_finding_count"] == 1
    assert payload["output_filter"] == {"min_severity": "high", "shown": 1, "total": 3, "filtered": 2}
    jsonschema.validate(instance=payload, schema=summary_schema)


def test_empty_findings_validates(findings_schema: dict[str, Any]) -> None:
    """An empty findings array must be valid."""
    jsonschema.validate(instance=[], schema=findings_schema)


def test_empty_findings_summary_validates(summary_schema: dict[str, Any]) -> None:
    """Summary built from zero findings must be valid."""
    summary = build_summary("empty-skill", [])
    jsonschema.validate(instance=summary.to_dict(), schema=summary_schema)


def test_finding_with_null_line_validates(findings_schema: dict[str, Any]) -> None:
    """A finding with null evidence line must be valid."""
    payload = [_make_finding(line=None).to_dict()]
    jsonschema.validate(instance=payload, schema=findings_schema)


def test_findings_missing_required_field_rejected(findings_schema: dict[str, Any]) -> None:
    """A finding missing a required field must fail validation."""
    payload = [{"id": "f-001", "severity": "high"}]
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=payload, schema=findings_schema)


def test_summary_missing_schema_version_rejected(summary_schema: dict[str, Any]) -> None:
    """A summary without schema_version must fail validation."""
    payload = {
        "skill": "test",
        "status": "pass",
        "finding_count": 0,
        "counts": {"by_severity": {"high": 0, "medium": 0, "low": 0}, "by_rule": {}},
        "top_findings": [],
    }
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=payload, schema=summary_schema)


def test_summary_invalid_status_rejected(summary_schema: dict[str, Any]) -> None:
    """A summary with an unknown status value must fail validation."""
    payload = {
        "schema_version": SCHEMA_VERSION,
        "skill": "test",
        "status": "critical",
        "finding_count": 0,
        "counts": {"by_severity": {"high": 0, "medium": 0, "low": 0}, "by_rule": {}},
        "top_findings": [],
    }
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=payload, schema=summary_schema)


def test_write_skill_reports_outputs_valid_schema(
    tmp_path: Path,
    sample_findings: list[Finding],
    findings_schema: dict[str, Any],
    summary_schema: dict[str, Any],
) -> None:
    """Written findings.json and summary.json must conform to schemas."""
    write_skill_reports(tmp_path, "test-skill", sample_findings)

    findings_data = json.loads((tmp_path / "test-skill" / "findings.json").read_text(encoding="utf-8"))
    summary_data = json.loads((tmp_path / "test-skill" / "summary.json").read_text(encoding="utf-8"))

    jsonschema.validate(instance=findings_data, schema=findings_schema)
    jsonschema.validate(instance=summary_data, schema=summary_schema)
    assert [item["id"] for item in findings_data] == ["f-001", "f-002", "f-003"]


def test_fixture_lint_outputs_validate(
    tmp_path: Path,
    basic_repo_root: Path,
    findings_schema: dict[str, Any],
    summary_schema: dict[str, Any],
) -> None:
    """Every report written for the fixture corpus conforms to the schemas."""
    out = tmp_path / "out"
    lint_workspace(root=basic_repo_root, out=out)

    report_dirs = sorted(path for path in out.iterdir() if path.is_dir())
    assert report_dirs
    for report_dir in report_dirs:
        findings_data = json.loads((report_dir / "findings.json").read_text(encoding="utf-8"))
        summary_data = json.loads((report_dir / "summary.json").read_text(encoding="utf-8"))
        jsonschema.validate(instance=findings_data, schema=findings_schema)
        jsonschema.validate(instance=summary_data, schema=summary_schema)
        assert summary_data["skill"] == report_dir.name
