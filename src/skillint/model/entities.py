"""Dataclasses for parsed documents, skill packages, findings and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skillint.types import DocumentKind, LinkKind, RuleDisableSource, Severity


@dataclass(frozen=True)
class Heading:
    """An ATX heading with its GitHub-style anchor slug."""

    level: int
    text: str
    anchor: str
    line: int


@dataclass(frozen=True)
class Link:
    """A Markdown link found outside code."""

    text: str
    target: str
    line: int
    kind: LinkKind = "inline"


@dataclass(frozen=True)
class CodeFence:
    """A fenced code block; ``end_line`` is None when the fence never closes."""

    start_line: int
    end_line: int | None
    marker: str
    info: str


@dataclass(frozen=True)
class ParsedDocument:
    """Structured view of a Markdown file."""

    file_path: Path
    raw_text: str
    body: str
    body_start_line: int
    lines: tuple[str, ...]
    headings: tuple[Heading, ...] = ()
    links: tuple[Link, ...] = ()
    fences: tuple[CodeFence, ...] = ()
    frontmatter: dict[str, Any] | None = None
    frontmatter_present: bool = False
    frontmatter_key_lines: dict[str, int] = field(default_factory=dict)

    @property
    def anchors(self) -> frozenset[str]:
        """All heading anchors defined in the document."""
        return frozenset(heading.anchor for heading in self.headings)

    def line_text(self, line: int) -> str:
        """Return the raw text of a 1-based line, or an empty string."""
        if 1 <= line <= len(self.lines):
            return self.lines[line - 1]
        return ""


@dataclass(frozen=True)
class CompanionFile:
    """A companion document found next to a SKILL.md."""

    expected_name: str
    path: Path

    @property
    def misnamed(self) -> bool:
        """Whether the file matches the convention only case-insensitively."""
        return self.path.name != self.expected_name


@dataclass(frozen=True)
class SkillPackage:
    """A skill directory: SKILL.md plus the companion files next to it."""

    name: str
    skill_file: Path
    companions: tuple[CompanionFile, ...] = ()

    @property
    def directory(self) -> Path:
        """The directory holding the skill."""
        return self.skill_file.parent


@dataclass(frozen=True)
class Evidence:
    """Location and snippet supporting a finding."""

    path: str
    line: int | None
    snippet: str


@dataclass(frozen=True)
class FindingCandidate:
    """Raw detector output before id assignment and severity policy."""

    rule_id: str
    severity: Severity
    title: str
    description: str
    evidence: Evidence
    recommendation: str


@dataclass(frozen=True)
class SeverityOverride:
    """Audit record of a config-driven severity change."""

    original: Severity
    applied: Severity
    reason: str


@dataclass(frozen=True)
class Finding:
    """A stable, serializable lint finding."""

    id: str
    severity: Severity
    title: str
    description: str
    evidence: Evidence
    skill: str
    rule_id: str
    recommendation: str
    severity_override: SeverityOverride | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize finding to a JSON-compatible dict."""
        payload: dict[str, Any] = {
            "id": self.id,
            "severity": self.severity,
            "title": self.title,
            "description": self.description,
            "evidence": {
                "path": self.evidence.path,
                "line": self.evidence.line,
                "snippet": self.evidence.snippet,
            },
            "skill": self.skill,
            "rule_id": self.rule_id,
            "recommendation": self.recommendation,
        }
        if self.severity_override is not None:
            payload["severity_override"] = {
                "original": self.severity_override.original,
                "applied": self.severity_override.applied,
                "reason": self.severity_override.reason,
            }
        return payload


@dataclass(frozen=True)
class DocumentTarget:
    """One file queued for linting with its owning skill name."""

    name: str
    path: Path
    kind: DocumentKind
    package: SkillPackage | None = None


@dataclass(frozen=True)
class Summary:
    """Per-document summary persisted next to its findings."""

    schema_version: str
    skill: str
    status: str
    finding_count: int
    counts_by_severity: dict[Severity, int]
    counts_by_rule: dict[str, int]
    top_findings: tuple[dict[str, Any], ...]
    shown_finding_count: int | None = None
    output_filter: dict[str, object] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize summary to a JSON-compatible dict."""
        payload: dict[str, Any] = {
            "schema_version": self.schema_version,
            "skill": self.skill,
            "status": self.status,
            "finding_count": self.finding_count,
            "counts": {
                "by_severity": dict(self.counts_by_severity),
                "by_rule": dict(self.counts_by_rule),
            },
            "top_findings": list(self.top_findings),
        }
        if self.shown_finding_count is not None:
            payload["shown_finding_count"] = self.shown_finding_count
        if self.output_filter is not None:
            payload["output_filter"] = self.output_filter
        return payload


@dataclass(frozen=True)
class LintResult:
    """Aggregate result of a workspace lint."""

    skill_count: int
    document_count: int
    total_findings: int
    counts_by_severity: dict[Severity, int]
    findings: tuple[Finding, ...]
    duration_seconds: float
    warnings: tuple[str, ...] = ()
    counts_by_rule: dict[str, int] = field(default_factory=dict)
    rules_executed: tuple[str, ...] = ()
    rules_disabled: tuple[str, ...] = ()
    disable_sources: dict[str, RuleDisableSource] = field(default_factory=dict)
    active_rule_overrides: dict[str, Severity] = field(default_factory=dict)

    @property
    def files_linted(self) -> int:
        """Total number of Markdown files inspected."""
        return self.skill_count + self.document_count


@dataclass(frozen=True)
class CatalogEntry:
    """Discovery metadata for one skill, as a routing tool would read it."""

    name: str
    description: str
    invocation: tuple[str, ...]
    path: str
    companions: tuple[str, ...]
    valid: bool
    problems: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize entry to a JSON-compatible dict."""
        return {
            "name": self.name,
            "description": self.description,
            "invocation": list(self.invocation),
            "path": self.path,
            "companions": list(self.companions),
            "valid": self.valid,
            "problems": list(self.problems),
        }
