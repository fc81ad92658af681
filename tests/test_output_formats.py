"""Tests for CSV and SARIF output format writers and CLI format parsing."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path

import pytest

from skillint.cli.main import build_parser, main
from skillint.constants.reporting import CSV_COLUMNS
from skillint.model import Evidence, Finding
from skillint.reporting.csv_writer import render_csv_string, write_csv_findings
from skillint.reporting.sarif_writer import build_sarif_envelope, write_sarif_findings
from skillint.types import Severity


def _make_finding(
    *,
    rule_id: str = "LINK_BROKEN",
    severity: Severity = "high",
    skill: str = "test-skill",
    fid: str = "f-001",
    path: str = "SKILL.md",
    line: int | None = 1,
    description: str | None = None,
) -> Finding:
    return Finding(
        id=fid,
        severity=severity,
        title=f"{rule_id} finding",
        description=description if description is not None else f"Description for {rule_id}",
        evidence=Evidence(path=path, line=line, snippet="snippet"),
        skill=skill,
        rule_id=rule_id,
        recommendation=f"Fix {rule_id}",
    )


@pytest.fixture()
def sample_findings() -> list[Finding]:
    return [
        _make_finding(fid="f-003", rule_id="CODE_FENCE", severity="low"),
        _make_finding(fid="f-001", rule_id="DESCRIPTION_FIELD", severity="high"),
        _make_finding(fid="f-002", rule_id="LINK_BROKEN", severity="medium"),
    ]


class TestOutputFormatParsing:
    """CLI --output-format parsing and validation."""

    def test_default_format_is_json(self, tmp_path: Path) -> None:
        args = build_parser().parse_args(["lint", "-r", str(tmp_path)])
        assert args.output_format == "json"

    def test_multi_format_accepted(self, tmp_path: Path) -> None:
        args = build_parser().parse_args(["lint", "-r", str(tmp_path), "--output-format", "json,csv,sarif"])
        assert args.output_format == "json,csv,sarif"

    def test_invalid_format_rejected(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["lint", "-r", str(tmp_path), "--output-format", "xml"])
        assert code == 2
        assert "unknown output format(s): xml" in capsys.readouterr().err

    def test_empty_token_rejected(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["lint", "-r", str(tmp_path), "--output-format", "json,,csv"])
        assert code == 2
        assert "empty or malformed" in capsys.readouterr().err


class TestCsvWriter:
    def test_csv_header_columns(self, sample_findings: list[Finding]) -> None:
        reader = csv.reader(io.StringIO(render_csv_string(sample_findings)))
        assert tuple(next(reader)) == CSV_COLUMNS

    def test_csv_rows_sorted_by_severity(self, sample_findings: list[Finding]) -> None:
        rows = list(csv.DictReader(io.StringIO(render_csv_string(sample_findings))))
        assert [row["id"] for row in rows] == ["f-001", "f-002", "f-003"]
        assert rows[0]["severity"] == "high"

    def test_csv_null_line_renders_empty(self) -> None:
        rows = list(csv.DictReader(io.StringIO(render_csv_string([_make_finding(line=None)]))))
        assert rows[0]["line"] == ""

    def test_csv_escapes_commas_in_description(self) -> None:
        finding = _make_finding(description='Link "a, b" is broken, twice')
        rows = list(csv.DictReader(io.StringIO(render_csv_string([finding]))))
        assert rows[0]["description"] == 'Link "a, b" is broken, twice'

    def test_csv_write_file(self, tmp_path: Path, sample_findings: list[Finding]) -> None:
        path = write_csv_findings(tmp_path, sample_findings)
        assert path == tmp_path / "findings.csv"
        assert path.read_bytes().decode("utf-8") == render_csv_string(sample_findings)


class TestSarifWriter:
    def test_sarif_envelope_version(self, sample_findings: list[Finding]) -> None:
        envelope = build_sarif_envelope(sample_findings)
        assert envelope["version"] == "2.1.0"
        assert envelope["$schema"].endswith("sarif-schema-2.1.0.json")

    def test_sarif_tool_name(self, sample_findings: list[Finding]) -> None:
        driver = build_sarif_envelope(sample_findings)["runs"][0]["tool"]["driver"]
        assert driver["name"] == "skillint"

    def test_sarif_severity_mapping(self, sample_findings: list[Finding]) -> None:
        results = build_sarif_envelope(sample_findings)["runs"][0]["results"]
        assert [result["level"] for result in results] == ["error", "warning", "note"]

    def test_sarif_result_has_location_and_fingerprint(self, sample_findings: list[Finding]) -> None:
        result = build_sarif_envelope(sample_findings)["runs"][0]["results"][0]
        location = result["locations"][0]["physicalLocation"]
        assert location["artifactLocation"]["uri"] == "SKILL.md"
        assert location["region"] == {"startLine": 1}
        assert result["partialFingerprints"] == {"findingId": "f-001"}
        assert result["message"]["text"] == "DESCRIPTION_FIELD finding: Description for DESCRIPTION_FIELD"

    def test_sarif_rules_use_rule_summaries(self, sample_findings: list[Finding]) -> None:
        rules = build_sarif_envelope(sample_findings)["runs"][0]["tool"]["driver"]["rules"]
        assert [rule["id"] for rule in rules] == ["CODE_FENCE", "DESCRIPTION_FIELD", "LINK_BROKEN"]
        link_rule = rules[2]
        assert link_rule["shortDescription"]["text"] == "relative link points at a missing file or heading anchor"
        assert link_rule["defaultConfiguration"] == {"level": "warning"}

    def test_sarif_unknown_rule_falls_back_to_title(self) -> None:
        rules = build_sarif_envelope([_make_finding(rule_id="PARSE_ERROR")])["runs"][0]["tool"]["driver"]["rules"]
        assert rules == [{"id": "PARSE_ERROR", "shortDescription": {"text": "PARSE_ERROR finding"}}]

    def test_sarif_null_line_omits_region(self) -> None:
        result = build_sarif_envelope([_make_finding(line=None)])["runs"][0]["results"][0]
        assert "region" not in result["locations"][0]["physicalLocation"]

    def test_sarif_empty_findings(self) -> None:
        run = build_sarif_envelope([])["runs"][0]
        assert run["results"] == []
        assert run["tool"]["driver"]["rules"] == []
        assert run["properties"] == {"ruleDistribution": {}}

    def test_sarif_run_properties_include_distribution_and_filter_metadata(
        self,
        sample_findings: list[Finding],
    ) -> None:
        filter_metadata: dict[str, object] = {"min_severity": "high", "shown": 1, "total": 3, "filtered": 2}
        envelope = build_sarif_envelope(
            sample_findings[1:2],
            rule_distribution={"CODE_FENCE": 1, "DESCRIPTION_FIELD": 1, "LINK_BROKEN": 1},
            filter_metadata=filter_metadata,
        )
        properties = envelope["runs"][0]["properties"]
        assert properties["ruleDistribution"] == {"CODE_FENCE": 1, "DESCRIPTION_FIELD": 1, "LINK_BROKEN": 1}
        assert properties["filter"] == filter_metadata

    def test_sarif_write_file(self, tmp_path: Path, sample_findings: list[Finding]) -> None:
        path = write_sarif_findings(tmp_path, sample_findings)
        assert path == tmp_path / "findings.sarif"
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert len(payload["runs"][0]["results"]) == 3
