"""Detectors that compare front matter across every skill in the workspace."""

from __future__ import annotations

from typing import ClassVar

from skillint.constants.rules import DUPLICATE_NAME, INVOCATION_OVERLAP
from skillint.detectors.base import CorpusDetector
from skillint.detectors.common import frontmatter_line, line_evidence
from skillint.detectors.context import LintContext
from skillint.model import DocumentTarget, FindingCandidate, ParsedDocument
from skillint.types import Severity
from skillint.utils import sanitize_output_name


class DuplicateNameDetector(CorpusDetector):
    """Flag skills that declare the same name as another skill."""

    rule_id = DUPLICATE_NAME
    default_severity: ClassVar[Severity] = "high"
    summary = "two or more skills declare the same `name`"

    def run(
        self,
        *,
        skills: list[tuple[DocumentTarget, ParsedDocument]],
        context: LintContext,
    ) -> list[tuple[str, FindingCandidate]]:
        groups: dict[str, list[tuple[DocumentTarget, ParsedDocument]]] = {}
        for target, parsed in skills:
            value = (parsed.frontmatter or {}).get("name")
            if isinstance(value, str) and value.strip():
                groups.setdefault(sanitize_output_name(value), []).append((target, parsed))

        results: list[tuple[str, FindingCandidate]] = []
        for declared, members in sorted(groups.items()):
            if len(members) < 2:
                continue
            for target, parsed in members:
                others = sorted(
                    line_evidence(context, other_parsed, None).path
                    for other_target, other_parsed in members
                    if other_target is not target
                )
                results.append(
                    (
                        target.name,
                        FindingCandidate(
                            rule_id=self.rule_id,
                            severity=self.default_severity,
                            title="Duplicate skill name",
                            description=f"Name {declared!r} is also declared by {', '.join(others)}.",
                            evidence=line_evidence(context, parsed, frontmatter_line(parsed, "name")),
                            recommendation="Give every skill a unique `name`.",
                        ),
                    )
                )
        return results


class InvocationOverlapDetector(CorpusDetector):
    """Flag trigger keywords that route to more than one skill."""

    rule_id = INVOCATION_OVERLAP
    default_severity: ClassVar[Severity] = "low"
    summary = "one invocation keyword triggers more than one skill"

    def run(
        self,
        *,
        skills: list[tuple[DocumentTarget, ParsedDocument]],
        context: LintContext,
    ) -> list[tuple[str, FindingCandidate]]:
        owners: dict[str, list[tuple[DocumentTarget, ParsedDocument]]] = {}
        for target, parsed in skills:
            keywords = (parsed.frontmatter or {}).get("invocation")
            if not isinstance(keywords, list):
                continue
            folded = {entry.strip().casefold() for entry in keywords if isinstance(entry, str) and entry.strip()}
            for keyword in folded:
                owners.setdefault(keyword, []).append((target, parsed))

        results: list[tuple[str, FindingCandidate]] = []
        for keyword, members in sorted(owners.items()):
            if len(members) < 2:
                continue
            for target, parsed in members:
                others = sorted(other.name for other, _ in members if other is not target)
                results.append(
                    (
                        target.name,
                        FindingCandidate(
                            rule_id=self.rule_id,
                            severity=self.default_severity,
                            title="Shared invocation keyword",
                            description=f"Keyword {keyword!r} also triggers {', '.join(others)}.",
                            evidence=line_evidence(context, parsed, frontmatter_line(parsed, "invocation")),
                            recommendation="Make trigger keywords specific to one skill.",
                        ),
                    )
                )
        return results
