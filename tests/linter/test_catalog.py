"""Tests for the skill catalog listing."""

from __future__ import annotations

from pathlib import Path

from skillint.config import SkillintConfig
from skillint.linter.catalog import build_catalog


def test_build_catalog_lists_every_skill(basic_repo_root: Path) -> None:
    entries = build_catalog(basic_repo_root, SkillintConfig())

    assert [entry.name for entry in entries] == [
        "bad-yaml",
        "broken_skill",
        "datetime",
        "error-handling",
        "no-frontmatter",
    ]


def test_build_catalog_valid_entry(basic_repo_root: Path) -> None:
    entry = next(entry for entry in build_catalog(basic_repo_root, SkillintConfig()) if entry.name == "error-handling")

    assert entry.valid is True
    assert entry.problems == ()
    assert entry.description == "Conventions for wrapping, returning and logging errors."
    assert entry.invocation == ("error", "wrap")
    assert entry.path == "skills/error-handling/SKILL.md"
    assert entry.companions == ("skills/error-handling/reference.md", "skills/error-handling/examples.md")
    assert entry.to_dict()["invocation"] == ["error", "wrap"]


def test_build_catalog_invalid_entries(basic_repo_root: Path) -> None:
    entries = {entry.name: entry for entry in build_catalog(basic_repo_root, SkillintConfig())}

    assert entries["broken_skill"].valid is False
    assert set(entries["broken_skill"].problems) == {"Invalid description", "Invocation is not a list"}
    assert entries["broken_skill"].invocation == ()
    assert entries["no-frontmatter"].problems == ("Missing front matter",)
    assert entries["bad-yaml"].valid is False
    assert "Failed to parse frontmatter" in entries["bad-yaml"].problems[0]
