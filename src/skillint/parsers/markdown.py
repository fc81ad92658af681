"""Line-oriented Markdown structure parser for headings, links and code fences."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from skillint.constants.parsing import (
    ATX_HEADING_PATTERN,
    FENCE_OPEN_PATTERN,
    INLINE_CODE_PATTERN,
    INLINE_LINK_PATTERN,
    REFERENCE_DEFINITION_PATTERN,
)
from skillint.exceptions import SkillParseError
from skillint.model import CodeFence, Heading, Link, ParsedDocument
from skillint.utils import heading_anchor


@dataclass
class MarkdownStructure:
    """Mutable accumulator for one pass over Markdown body lines."""

    headings: list[Heading] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    fences: list[CodeFence] = field(default_factory=list)


def read_markdown_text(path: Path) -> str:
    """Read a Markdown file as UTF-8 with any leading BOM removed."""
    try:
        raw_text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SkillParseError(f"{path} is not valid UTF-8 text: {exc.reason}") from exc
    except OSError as exc:
        raise SkillParseError(f"Cannot read {path}: {exc}") from exc
    return raw_text.lstrip("\ufeff")


def parse_markdown_file(path: Path) -> ParsedDocument:
    """Parse a plain Markdown document (no front-matter handling)."""
    text = read_markdown_text(path)
    lines = text.splitlines()
    structure = scan_markdown_lines(lines, first_line=1)
    return ParsedDocument(
        file_path=path,
        raw_text=text,
        body=text.strip(),
        body_start_line=1,
        lines=tuple(lines),
        headings=tuple(structure.headings),
        links=tuple(structure.links),
        fences=tuple(structure.fences),
    )


def scan_markdown_lines(lines: list[str], *, first_line: int) -> MarkdownStructure:
    """Collect headings, links and fences from *lines*.

    ``first_line`` is the 1-based source line number of ``lines[0]``. Content
    inside fenced code blocks contributes neither headings nor links.
    """
    structure = MarkdownStructure()
    anchor_counts: dict[str, int] = {}
    open_fence: tuple[str, int, int, str] | None = None

    for offset, line in enumerate(lines):
        number = first_line + offset
        fence_match = FENCE_OPEN_PATTERN.match(line)

        if open_fence is not None:
            marker, length, start, info = open_fence
            if (
                fence_match is not None
                and fence_match.group(1)[0] == marker
                and len(fence_match.group(1)) >= length
                and not fence_match.group(2).strip()
            ):
                structure.fences.append(CodeFence(start_line=start, end_line=number, marker=marker * length, info=info))
                open_fence = None
            continue

        if fence_match is not None:
            marker_run = fence_match.group(1)
            info = fence_match.group(2).strip()
            # A backtick fence cannot carry backticks in its info string.
            if not (marker_run[0] == "`" and "`" in info):
                open_fence = (marker_run[0], len(marker_run), number, info)
                continue

        heading_match = ATX_HEADING_PATTERN.match(line)
        if heading_match is not None:
            text = _strip_inline_markup(heading_match.group(2) or "")
            anchor = _unique_anchor(heading_anchor(text), anchor_counts)
            structure.headings.append(
                Heading(level=len(heading_match.group(1)), text=text, anchor=anchor, line=number)
            )

        definition = REFERENCE_DEFINITION_PATTERN.match(line)
        if definition is not None:
            structure.links.append(Link(text=definition.group(1), target=definition.group(2), line=number, kind="reference"))
            continue

        without_code = INLINE_CODE_PATTERN.sub("", line)
        for link_match in INLINE_LINK_PATTERN.finditer(without_code):
            target = link_match.group(3).strip()
            if not target:
                continue
            structure.links.append(
                Link(
                    text=link_match.group(2),
                    target=target,
                    line=number,
                    kind="image" if link_match.group(1) else "inline",
                )
            )

    if open_fence is not None:
        marker, length, start, info = open_fence
        structure.fences.append(CodeFence(start_line=start, end_line=None, marker=marker * length, info=info))

    return structure


def _strip_inline_markup(text: str) -> str:
    """Reduce inline links to their text and drop code-span backticks."""
    text = INLINE_LINK_PATTERN.sub(lambda match: match.group(2), text)
    return text.replace("`", "").strip()


def _unique_anchor(anchor: str, counts: dict[str, int]) -> str:
    seen = counts.get(anchor, 0)
    counts[anchor] = seen + 1
    if seen == 0:
        return anchor
    return f"{anchor}-{seen}"
