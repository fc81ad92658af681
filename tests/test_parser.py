"""Tests for SKILL.md and plain Markdown parsing."""

from pathlib import Path

import pytest

from skillint.exceptions import SkillParseError
from skillint.parsers import parse_markdown_file, parse_skill_markdown_file


def test_parse_skill_records_frontmatter_and_key_lines(basic_repo_root: Path) -> None:
    parsed = parse_skill_markdown_file(basic_repo_root / "skills" / "error-handling" / "SKILL.md")

    assert parsed.frontmatter == {
        "name": "error-handling",
        "description": "Conventions for wrapping, returning and logging errors.",
        "invocation": ["error", "wrap"],
    }
    assert parsed.frontmatter_present is True
    assert parsed.frontmatter_key_lines == {"name": 2, "description": 3, "invocation": 4}
    assert parsed.body_start_line == 8


def test_parse_skill_collects_headings_links_and_fences(basic_repo_root: Path) -> None:
    parsed = parse_skill_markdown_file(basic_repo_root / "skills" / "error-handling" / "SKILL.md")

    assert [(h.level, h.anchor, h.line) for h in parsed.headings] == [(1, "error-handling", 9), (2, "rules", 14)]
    assert [(link.target, link.line) for link in parsed.links] == [
        ("reference.md#wrapping-errors", 12),
        ("examples.md", 12),
        ("/docs/developer/standard/time.md#storing-timestamps", 20),
    ]
    assert len(parsed.fences) == 1
    fence = parsed.fences[0]
    assert (fence.start_line, fence.end_line, fence.marker, fence.info) == (16, 18, "```", "go")


def test_parse_skill_raises_for_invalid_frontmatter(tmp_path: Path) -> None:
    invalid_md = tmp_path / "SKILL.md"
    invalid_md.write_text("""---\nname: [broken\n---\n# Broken\n""", encoding="utf-8")

    with pytest.raises(SkillParseError):
        parse_skill_markdown_file(invalid_md)


def test_parse_skill_raises_for_unterminated_frontmatter(tmp_path: Path) -> None:
    invalid_md = tmp_path / "SKILL.md"
    invalid_md.write_text("""---\nname: missing-end\n# Broken\n""", encoding="utf-8")

    with pytest.raises(SkillParseError, match="Unterminated"):
        parse_skill_markdown_file(invalid_md)


def test_parse_skill_raises_for_non_mapping_frontmatter(tmp_path: Path) -> None:
    skill_md = tmp_path / "SKILL.md"
    skill_md.write_text("""---\n- just\n- a list\n---\n# Title\n""", encoding="utf-8")

    with pytest.raises(SkillParseError, match="mapping"):
        parse_skill_markdown_file(skill_md)


def test_parse_skill_raises_for_non_utf8(tmp_path: Path) -> None:
    skill_md = tmp_path / "SKILL.md"
    skill_md.write_bytes(b"---\nname: caf\xe9\n---\n")

    with pytest.raises(SkillParseError, match="UTF-8"):
        parse_skill_markdown_file(skill_md)


def test_parse_skill_allows_empty_frontmatter(tmp_path: Path) -> None:
    skill_md = tmp_path / "SKILL.md"
    skill_md.write_text("""---\n---\n# Title\n""", encoding="utf-8")

    parsed = parse_skill_markdown_file(skill_md)

    assert parsed.frontmatter is None
    assert parsed.frontmatter_present is True
    assert parsed.body == "# Title"


def test_parse_skill_without_frontmatter_keeps_whole_body(tmp_path: Path) -> None:
    skill_md = tmp_path / "SKILL.md"
    skill_md.write_text("# Title\n\nText.\n", encoding="utf-8")

    parsed = parse_skill_markdown_file(skill_md)

    assert parsed.frontmatter is None
    assert parsed.frontmatter_present is False
    assert parsed.body_start_line == 1
    assert parsed.headings[0].line == 1


def test_parse_skill_strips_bom_and_accepts_dot_terminator(tmp_path: Path) -> None:
    skill_md = tmp_path / "SKILL.md"
    skill_md.write_text("\ufeff---\nname: bom\n...\n# Title\n", encoding="utf-8")

    parsed = parse_skill_markdown_file(skill_md)

    assert parsed.frontmatter == {"name": "bom"}
    assert parsed.frontmatter_key_lines["name"] == 2


def test_parse_markdown_ignores_links_in_code(tmp_path: Path) -> None:
    doc = tmp_path / "doc.md"
    doc.write_text(
        "\n".join(
            [
                "# Doc",
                "",
                "Inline `[not a link](nowhere.md)` and [real](real.md).",
                "",
                "~~~~markdown",
                "[inside fence](fence.md)",
                "~~~",
                "still inside, the closing run is too short",
                "~~~~",
                "",
                "[ref]: ./reference.md",
                "![diagram](img/diagram.png)",
            ]
        ),
        encoding="utf-8",
    )

    parsed = parse_markdown_file(doc)

    assert [(link.target, link.kind) for link in parsed.links] == [
        ("real.md", "inline"),
        ("./reference.md", "reference"),
        ("img/diagram.png", "image"),
    ]
    assert len(parsed.fences) == 1
    assert parsed.fences[0].start_line == 5
    assert parsed.fences[0].end_line == 9
    assert parsed.fences[0].info == "markdown"


def test_parse_markdown_disambiguates_duplicate_anchors(tmp_path: Path) -> None:
    doc = tmp_path / "doc.md"
    doc.write_text("# Usage\n\n## Usage\n\n## Usage\n\n## `code` and [link](x.md)!\n", encoding="utf-8")

    parsed = parse_markdown_file(doc)

    assert [heading.anchor for heading in parsed.headings] == ["usage", "usage-1", "usage-2", "code-and-link"]
    assert parsed.anchors == frozenset({"usage", "usage-1", "usage-2", "code-and-link"})


def test_parse_markdown_records_unterminated_fence(tmp_path: Path) -> None:
    doc = tmp_path / "doc.md"
    doc.write_text("# Doc\n\n```python\nprint('x')\n", encoding="utf-8")

    parsed = parse_markdown_file(doc)

    assert parsed.fences[0].end_line is None
    assert parsed.fences[0].info == "python"
