"""Tests for file discovery, companion grouping and skill naming."""

from __future__ import annotations

from pathlib import Path

from skillint.constants.config import DEFAULT_COMPANION_FILES, DEFAULT_EXCLUDE_GLOBS
from skillint.linter.discovery import (
    assign_unique_skill_names,
    build_skill_packages,
    derive_document_name,
    derive_skill_name,
    discover_documents,
    discover_skill_files,
    find_companions,
    is_excluded,
)


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root.resolve()).as_posix() for path in paths]


def test_discover_skill_files_respects_excludes(basic_repo_root: Path) -> None:
    files = discover_skill_files(basic_repo_root, ("**/SKILL.md",), 2, exclude_globs=DEFAULT_EXCLUDE_GLOBS)

    assert _relative(files, basic_repo_root) == [
        "skills/bad-yaml/SKILL.md",
        "skills/broken-skill/SKILL.md",
        "skills/datetime/SKILL.md",
        "skills/error-handling/SKILL.md",
        "skills/no-frontmatter/SKILL.md",
    ]


def test_discover_skill_files_without_excludes_finds_vendored(basic_repo_root: Path) -> None:
    files = discover_skill_files(basic_repo_root, ("**/SKILL.md",), 2)

    assert "node_modules/pkg/SKILL.md" in _relative(files, basic_repo_root)


def test_discover_skill_files_deduplicates_overlapping_globs(basic_repo_root: Path) -> None:
    files = discover_skill_files(
        basic_repo_root,
        ("**/SKILL.md", "skills/*/SKILL.md"),
        2,
        exclude_globs=DEFAULT_EXCLUDE_GLOBS,
    )

    assert len(files) == len(set(files)) == 5


def test_discover_skill_files_skips_large_files(tmp_path: Path) -> None:
    small = tmp_path / "small" / "SKILL.md"
    large = tmp_path / "large" / "SKILL.md"
    small.parent.mkdir()
    large.parent.mkdir()
    small.write_text("---\nname: small\n---\n", encoding="utf-8")
    large.write_text("x" * (1024 * 1024 + 1), encoding="utf-8")

    files = discover_skill_files(tmp_path, ("**/SKILL.md",), 1)

    assert _relative(files, tmp_path) == ["small/SKILL.md"]


def test_discover_documents_skips_skill_and_claimed_files(basic_repo_root: Path) -> None:
    docs = discover_documents(basic_repo_root, ("docs/**/*.md",), 2)
    assert _relative(docs, basic_repo_root) == [
        "docs/developer/standard/logging.md",
        "docs/developer/standard/time.md",
    ]

    reference = (basic_repo_root / "skills" / "error-handling" / "reference.md").resolve()
    everything = discover_documents(basic_repo_root, ("**/*.md",), 2, exclude_globs=DEFAULT_EXCLUDE_GLOBS, skip={reference})
    rendered = _relative(everything, basic_repo_root)
    assert "skills/error-handling/reference.md" not in rendered
    assert "skills/error-handling/examples.md" in rendered
    assert not any(path.endswith("SKILL.md") for path in rendered)


def test_is_excluded_matches_top_level_directories(tmp_path: Path) -> None:
    path = tmp_path / "node_modules" / "pkg" / "SKILL.md"

    assert is_excluded(path, tmp_path, ("**/node_modules/**",))
    assert not is_excluded(tmp_path / "skills" / "SKILL.md", tmp_path, ("**/node_modules/**",))


def test_find_companions_flags_case_variants(basic_repo_root: Path) -> None:
    exact = find_companions(basic_repo_root / "skills" / "error-handling", DEFAULT_COMPANION_FILES)
    assert [(c.expected_name, c.path.name, c.misnamed) for c in exact] == [
        ("reference.md", "reference.md", False),
        ("examples.md", "examples.md", False),
    ]

    variant = find_companions(basic_repo_root / "skills" / "broken-skill", DEFAULT_COMPANION_FILES)
    assert [(c.expected_name, c.path.name, c.misnamed) for c in variant] == [
        ("reference.md", "Reference.md", True),
    ]


def test_build_skill_packages_names_from_frontmatter(basic_repo_root: Path) -> None:
    files = discover_skill_files(basic_repo_root, ("**/SKILL.md",), 2, exclude_globs=DEFAULT_EXCLUDE_GLOBS)
    packages, collisions = build_skill_packages(files, basic_repo_root, DEFAULT_COMPANION_FILES)

    assert collisions == {}
    assert [package.name for package in packages] == [
        "bad-yaml",
        "broken_skill",
        "datetime",
        "error-handling",
        "no-frontmatter",
    ]
    by_name = {package.name: package for package in packages}
    assert len(by_name["error-handling"].companions) == 2
    assert by_name["datetime"].companions == ()


def test_derive_skill_name_precedence(tmp_path: Path) -> None:
    skill = tmp_path / "My Skill" / "SKILL.md"

    assert derive_skill_name(skill, tmp_path, declared_name="Declared Name") == "declared-name"
    assert derive_skill_name(skill, tmp_path) == "my-skill"
    assert derive_skill_name(tmp_path / "guides" / "intro.md", tmp_path) == "guides-intro"


def test_derive_document_name_uses_relative_path(tmp_path: Path) -> None:
    doc = tmp_path / "docs" / "developer" / "standard" / "Time.md"

    assert derive_document_name(doc, tmp_path) == "docs-developer-standard-time"


def test_assign_unique_skill_names_disambiguates_collisions(tmp_path: Path) -> None:
    first = tmp_path / "a" / "SKILL.md"
    second = tmp_path / "b" / "SKILL.md"
    for path in (first, second):
        path.parent.mkdir()
        path.write_text("---\nname: shared\ndescription: x\ninvocation: [x]\n---\n# X\n", encoding="utf-8")

    names, collisions = assign_unique_skill_names([first, second], tmp_path)

    assert set(collisions) == {"shared"}
    assert names[first.resolve()] != names[second.resolve()]
    for name in names.values():
        prefix, _, digest = name.rpartition("-")
        assert prefix == "shared"
        assert len(digest) == 8

    again, _ = assign_unique_skill_names([second, first], tmp_path)
    assert again == names


def test_discover_documents_skips_large_files(tmp_path: Path) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("# Guide\n", encoding="utf-8")
    (tmp_path / "docs" / "dump.md").write_text("y" * (2 * 1024 * 1024 + 1), encoding="utf-8")

    files = discover_documents(tmp_path, ("docs/**/*.md",), 2)

    assert _relative(files, tmp_path) == ["docs/guide.md"]


def test_assign_unique_skill_names_reads_dot_terminated_frontmatter(tmp_path: Path, caplog) -> None:
    skill = tmp_path / "skills" / "dir-name" / "SKILL.md"
    skill.parent.mkdir(parents=True)
    skill.write_text(
        "---\nname: declared-name\ndescription: x\n...\n\n# Title\n\nIntro.\n\n---\n\nMore text.\n",
        encoding="utf-8",
    )

    with caplog.at_level("WARNING", logger="skillint.linter.discovery"):
        names, _ = assign_unique_skill_names([skill], tmp_path)

    assert names[skill.resolve()] == "declared-name"
    assert "malformed" not in caplog.text
