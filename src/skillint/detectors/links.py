"""Relative-link checking between Markdown documents."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar
from urllib.parse import unquote

from skillint.constants.discovery import MARKDOWN_SUFFIX
from skillint.constants.parsing import URL_SCHEME_PATTERN
from skillint.constants.rules import LINK_BROKEN
from skillint.detectors.base import ALL_DOCUMENT_KINDS, Detector
from skillint.detectors.common import line_evidence
from skillint.detectors.context import LintContext
from skillint.model import DocumentTarget, FindingCandidate, Link, ParsedDocument
from skillint.types import Severity


def is_external(target: str) -> bool:
    """Return True for targets with a URL scheme or a protocol-relative host."""
    return bool(URL_SCHEME_PATTERN.match(target)) or target.startswith("//")


def split_target(target: str) -> tuple[str, str]:
    """Split a link target into a decoded path part and fragment."""
    path_part, _, fragment = target.partition("#")
    path_part = path_part.partition("?")[0]
    return unquote(path_part), unquote(fragment)


def resolve_link_path(target: str, source: Path, root: Path) -> Path | None:
    """Resolve a local link target to an absolute path.

    Targets starting with ``/`` are taken relative to *root*. Returns None for
    external URLs and same-document anchors.
    """
    if is_external(target):
        return None
    path_part, _fragment = split_target(target)
    if not path_part:
        return None
    if path_part.startswith("/"):
        return (root / path_part.lstrip("/")).resolve()
    return (source.parent / path_part).resolve()


class BrokenLinkDetector(Detector):
    """Flag relative links whose file or heading anchor does not exist."""

    rule_id = LINK_BROKEN
    default_severity: ClassVar[Severity] = "medium"
    summary = "relative link points at a missing file or heading anchor"
    applies_to = ALL_DOCUMENT_KINDS

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        candidates: list[FindingCandidate] = []
        for link in parsed.links:
            problem = self._problem(link, parsed, context)
            if problem is None:
                continue
            title, description = problem
            candidates.append(
                FindingCandidate(
                    rule_id=self.rule_id,
                    severity=self.default_severity,
                    title=title,
                    description=description,
                    evidence=line_evidence(context, parsed, link.line),
                    recommendation="Fix the link target or remove the link.",
                )
            )
        return candidates

    def _problem(self, link: Link, parsed: ParsedDocument, context: LintContext) -> tuple[str, str] | None:
        if is_external(link.target):
            return None
        path_part, fragment = split_target(link.target)

        if not path_part:
            if fragment and not _has_anchor(parsed.anchors, fragment):
                return "Missing anchor", f"Heading anchor `#{fragment}` does not exist in this document."
            return None

        resolved = resolve_link_path(link.target, parsed.file_path, context.root)
        if resolved is None:
            return None
        if not resolved.exists():
            return "Broken link", f"Link target `{path_part}` does not exist."
        if fragment and link.kind != "image" and resolved.is_file() and resolved.suffix.lower() == MARKDOWN_SUFFIX:
            anchors = context.anchors.anchors_for(resolved)
            if anchors is not None and not _has_anchor(anchors, fragment):
                return "Missing anchor", f"Heading anchor `#{fragment}` does not exist in `{path_part}`."
        return None


def _has_anchor(anchors: frozenset[str], fragment: str) -> bool:
    return fragment in anchors or fragment.lower() in anchors
