"""Shared helpers for detector implementations."""

from __future__ import annotations

from pathlib import Path

from skillint.constants.parsing import SNIPPET_MAX_LENGTH
from skillint.detectors.context import LintContext
from skillint.model import Evidence, FindingCandidate, ParsedDocument


def relative_path(context: LintContext, path: Path) -> str:
    """Render *path* relative to the lint root when possible."""
    try:
        return path.resolve().relative_to(context.root).as_posix()
    except ValueError:
        return path.as_posix()


def line_evidence(context: LintContext, parsed: ParsedDocument, line: int | None) -> Evidence:
    """Build evidence for a document line."""
    snippet = parsed.line_text(line).strip()[:SNIPPET_MAX_LENGTH] if line is not None else ""
    return Evidence(path=relative_path(context, parsed.file_path), line=line, snippet=snippet)


def frontmatter_line(parsed: ParsedDocument, key: str) -> int:
    """Line of a frontmatter key, falling back to the opening delimiter."""
    return parsed.frontmatter_key_lines.get(key, 1)


def dedupe_candidates(candidates: list[FindingCandidate]) -> list[FindingCandidate]:
    """Drop duplicate candidates sharing rule, location, and description."""
    seen: set[tuple[str, str, int | None, str]] = set()
    deduped: list[FindingCandidate] = []

    for candidate in candidates:
        key = (
            candidate.rule_id,
            candidate.evidence.path,
            candidate.evidence.line,
            candidate.description,
        )
        if key in seen:
            continue
        seen.add(key)
        deduped.append(candidate)

    return deduped
