"""Parser for SKILL.md files with YAML frontmatter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from skillint.constants.parsing import FRONTMATTER_ALT_DELIMITER, FRONTMATTER_DELIMITER
from skillint.exceptions import SkillParseError
from skillint.model import ParsedDocument
from skillint.parsers.markdown import read_markdown_text, scan_markdown_lines


def parse_skill_markdown_file(path: Path) -> ParsedDocument:
    """Parse a SKILL.md file and extract frontmatter plus body structure."""
    text = read_markdown_text(path)
    lines = text.splitlines()

    frontmatter: dict[str, Any] | None = None
    key_lines: dict[str, int] = {}
    frontmatter_present = False
    body_lines = lines

    if lines and lines[0].strip() == FRONTMATTER_DELIMITER:
        frontmatter_end = find_frontmatter_end(lines)
        if frontmatter_end is None:
            raise SkillParseError(f"Unterminated frontmatter block in {path}")

        frontmatter_present = True
        frontmatter_text = "\n".join(lines[1:frontmatter_end])
        try:
            frontmatter_payload = yaml.safe_load(frontmatter_text) if frontmatter_text.strip() else None
        except yaml.YAMLError as exc:
            raise SkillParseError(f"Failed to parse frontmatter in {path}: {exc}") from exc

        if frontmatter_payload is None:
            frontmatter = None
        elif isinstance(frontmatter_payload, dict):
            frontmatter = frontmatter_payload
            key_lines = _frontmatter_key_lines(frontmatter_text)
        else:
            raise SkillParseError(f"Frontmatter in {path} must be a YAML mapping")

        body_lines = lines[frontmatter_end + 1 :]

    body_start = len(lines) - len(body_lines) + 1
    structure = scan_markdown_lines(body_lines, first_line=body_start)

    return ParsedDocument(
        file_path=path,
        raw_text=text,
        body="\n".join(body_lines).strip(),
        body_start_line=body_start,
        lines=tuple(lines),
        headings=tuple(structure.headings),
        links=tuple(structure.links),
        fences=tuple(structure.fences),
        frontmatter=frontmatter,
        frontmatter_present=frontmatter_present,
        frontmatter_key_lines=key_lines,
    )


def find_frontmatter_end(lines: list[str]) -> int | None:
    """Index of the line closing the block opened on line 0, or None."""
    for index in range(1, len(lines)):
        if lines[index].strip() in {FRONTMATTER_DELIMITER, FRONTMATTER_ALT_DELIMITER}:
            return index
    return None


def _frontmatter_key_lines(frontmatter_text: str) -> dict[str, int]:
    """Map each top-level frontmatter key to its 1-based line in the file.

    The block starts on file line 2, directly after the opening delimiter.
    """
    node = yaml.compose(frontmatter_text, Loader=yaml.SafeLoader)
    if not isinstance(node, yaml.MappingNode):
        return {}
    key_lines: dict[str, int] = {}
    for key_node, _value_node in node.value:
        if isinstance(key_node, yaml.ScalarNode):
            key_lines.setdefault(str(key_node.value), key_node.start_mark.line + 2)
    return key_lines
