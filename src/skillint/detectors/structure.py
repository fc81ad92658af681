"""Detectors for document body structure and skill companion files."""

from __future__ import annotations

from typing import ClassVar

from skillint.constants.rules import BODY_EMPTY, CODE_FENCE, COMPANION_FILE
from skillint.detectors.base import ALL_DOCUMENT_KINDS, Detector
from skillint.detectors.common import line_evidence, relative_path
from skillint.detectors.context import LintContext
from skillint.detectors.links import resolve_link_path
from skillint.model import CompanionFile, DocumentTarget, Evidence, FindingCandidate, ParsedDocument
from skillint.types import Severity


class BodyEmptyDetector(Detector):
    """Flag SKILL.md files with front matter but no guidance text."""

    rule_id = BODY_EMPTY
    default_severity: ClassVar[Severity] = "medium"
    summary = "SKILL.md has no body text after the front matter"

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        if parsed.body.strip():
            return []
        line = min(parsed.body_start_line, max(len(parsed.lines), 1))
        return [
            FindingCandidate(
                rule_id=self.rule_id,
                severity=self.default_severity,
                title="Empty skill body",
                description="SKILL.md contains no Markdown content after the front matter.",
                evidence=line_evidence(context, parsed, line),
                recommendation="Add a title and the conventions the skill teaches.",
            )
        ]


class CodeFenceDetector(Detector):
    """Flag unterminated fences and fences without a language tag."""

    rule_id = CODE_FENCE
    default_severity: ClassVar[Severity] = "medium"
    summary = "code fence is never closed, or has no language tag"
    applies_to = ALL_DOCUMENT_KINDS

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        candidates: list[FindingCandidate] = []
        for fence in parsed.fences:
            evidence = line_evidence(context, parsed, fence.start_line)
            if fence.end_line is None:
                candidates.append(
                    FindingCandidate(
                        rule_id=self.rule_id,
                        severity="medium",
                        title="Unterminated code fence",
                        description=f"Fence `{fence.marker}` opened on line {fence.start_line} is never closed.",
                        evidence=evidence,
                        recommendation=f"Close the block with a matching `{fence.marker}` line.",
                    )
                )
            if not fence.info:
                candidates.append(
                    FindingCandidate(
                        rule_id=self.rule_id,
                        severity="low",
                        title="Code fence without language",
                        description=f"Fence opened on line {fence.start_line} declares no language.",
                        evidence=evidence,
                        recommendation="Add a language tag such as ```go, ```ts or ```text.",
                    )
                )
        return candidates


class CompanionFileDetector(Detector):
    """Check reference/examples companions of a skill."""

    rule_id = COMPANION_FILE
    default_severity: ClassVar[Severity] = "low"
    summary = "companion file is misnamed, empty, or not linked from SKILL.md"

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        if target.package is None:
            return []
        linked = {
            resolved
            for link in parsed.links
            if (resolved := resolve_link_path(link.target, parsed.file_path, context.root)) is not None
        }

        candidates: list[FindingCandidate] = []
        for companion in target.package.companions:
            evidence = Evidence(path=relative_path(context, companion.path), line=None, snippet="")
            if companion.misnamed:
                candidates.append(
                    self._candidate(
                        evidence,
                        "Misnamed companion file",
                        f"`{companion.path.name}` should be named `{companion.expected_name}`.",
                        f"Rename the file to `{companion.expected_name}`.",
                    )
                )
            if _is_blank(companion):
                candidates.append(
                    self._candidate(
                        evidence,
                        "Empty companion file",
                        f"`{companion.path.name}` has no content.",
                        "Fill in the companion or delete it.",
                    )
                )
            if companion.path not in linked:
                candidates.append(
                    self._candidate(
                        line_evidence(context, parsed, None),
                        "Companion not linked",
                        f"SKILL.md never links to `{companion.path.name}`.",
                        f"Add a link such as [{companion.expected_name}]({companion.path.name}) to SKILL.md.",
                    )
                )
        return candidates

    def _candidate(self, evidence: Evidence, title: str, description: str, recommendation: str) -> FindingCandidate:
        return FindingCandidate(
            rule_id=self.rule_id,
            severity=self.default_severity,
            title=title,
            description=description,
            evidence=evidence,
            recommendation=recommendation,
        )


def _is_blank(companion: CompanionFile) -> bool:
    try:
        return not companion.path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return False
