"""File discovery, companion grouping and skill naming helpers."""

from __future__ import annotations

import fnmatch
import hashlib
import logging
from collections.abc import Callable
from pathlib import Path

import yaml

from skillint.constants.discovery import (
    MARKDOWN_SUFFIX,
    SKILL_MARKDOWN_FILENAME,
    SKILL_NAME_DISAMBIGUATION_HASH_LENGTH,
)
from skillint.constants.parsing import FRONTMATTER_DELIMITER
from skillint.model import CompanionFile, SkillPackage
from skillint.parsers.skill_markdown import find_frontmatter_end
from skillint.utils import sanitize_output_name

logger = logging.getLogger(__name__)


def discover_skill_files(
    root: Path,
    skill_globs: tuple[str, ...],
    max_file_mb: int,
    *,
    exclude_globs: tuple[str, ...] = (),
) -> list[Path]:
    """Discover SKILL.md files by configured glob patterns."""
    return _discover(
        root,
        skill_globs,
        max_file_mb,
        exclude_globs=exclude_globs,
        accept=lambda path: path.name == SKILL_MARKDOWN_FILENAME,
    )


def discover_documents(
    root: Path,
    doc_globs: tuple[str, ...],
    max_file_mb: int,
    *,
    exclude_globs: tuple[str, ...] = (),
    skip: set[Path] | None = None,
) -> list[Path]:
    """Discover standalone Markdown documents, leaving out skill and companion files."""
    skipped = skip or set()
    return _discover(
        root,
        doc_globs,
        max_file_mb,
        exclude_globs=exclude_globs,
        accept=lambda path: path.suffix.lower() == MARKDOWN_SUFFIX
        and path.name != SKILL_MARKDOWN_FILENAME
        and path.resolve() not in skipped,
    )


def _discover(
    root: Path,
    patterns: tuple[str, ...],
    max_file_mb: int,
    *,
    exclude_globs: tuple[str, ...],
    accept: Callable[[Path], bool],
) -> list[Path]:
    discovered: set[Path] = set()
    size_limit_bytes = max_file_mb * 1024 * 1024
    resolved_root = root.resolve()

    for pattern in patterns:
        for path in resolved_root.glob(pattern):
            if not path.is_file() or not accept(path):
                continue
            if is_excluded(path, resolved_root, exclude_globs):
                continue
            try:
                if path.stat().st_size > size_limit_bytes:
                    logger.info("Skipping %s: larger than %d MB", path, max_file_mb)
                    continue
            except OSError:
                continue
            discovered.add(path.resolve())

    return sorted(discovered, key=lambda path: stable_path_key(path, resolved_root))


def is_excluded(path: Path, root: Path, exclude_globs: tuple[str, ...]) -> bool:
    """Return True when the root-relative path matches any exclude glob.

    The path is also tried with a leading slash so ``**/dir/**`` matches
    ``dir`` at the top of the root.
    """
    relative = stable_path_key(path, root)
    return any(
        fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(f"/{relative}", pattern) for pattern in exclude_globs
    )


def build_skill_packages(
    skill_files: list[Path],
    root: Path,
    companion_names: tuple[str, ...],
) -> tuple[list[SkillPackage], dict[str, tuple[Path, ...]]]:
    """Group each SKILL.md with its companions and assign unique names.

    Returns the packages plus the duplicate-name groups that were disambiguated.
    """
    names_by_file, collisions = assign_unique_skill_names(skill_files, root)
    packages = [
        SkillPackage(
            name=names_by_file[path.resolve()],
            skill_file=path.resolve(),
            companions=find_companions(path.parent, companion_names),
        )
        for path in skill_files
    ]
    return packages, collisions


def find_companions(directory: Path, companion_names: tuple[str, ...]) -> tuple[CompanionFile, ...]:
    """Find companion files in *directory*, matching names case-insensitively.

    Exact-case matches win over case variants of the same name.
    """
    try:
        entries = sorted(entry for entry in directory.iterdir() if entry.is_file())
    except OSError:
        return ()

    companions: list[CompanionFile] = []
    for expected in companion_names:
        exact = directory / expected
        if exact in entries:
            companions.append(CompanionFile(expected_name=expected, path=exact.resolve()))
            continue
        variant = next((entry for entry in entries if entry.name.lower() == expected.lower()), None)
        if variant is not None:
            companions.append(CompanionFile(expected_name=expected, path=variant.resolve()))
    return tuple(companions)


def derive_skill_name(file_path: Path, root: Path, *, declared_name: str | None = None) -> str:
    """Derive a stable output skill name for a discovered SKILL.md file."""
    root = root.resolve()
    file_path = file_path.resolve()

    if declared_name:
        return sanitize_skill_name(declared_name)

    if file_path.name == SKILL_MARKDOWN_FILENAME:
        return sanitize_skill_name(file_path.parent.name)

    return sanitize_skill_name(_fallback_relative_name(file_path, root))


def derive_document_name(file_path: Path, root: Path) -> str:
    """Derive an output name for a standalone document from its relative path."""
    return sanitize_skill_name(_fallback_relative_name(file_path.resolve(), root.resolve()))


def sanitize_skill_name(raw_name: str) -> str:
    """Normalize skill name for deterministic output paths."""
    return sanitize_output_name(raw_name)


def assign_unique_skill_names(
    skill_files: list[Path],
    root: Path,
) -> tuple[dict[Path, str], dict[str, tuple[Path, ...]]]:
    """Assign deterministic output names per skill file, disambiguating collisions.

    The base name follows ``derive_skill_name`` precedence. When multiple files
    resolve to the same base name, each is suffixed with a stable path-hash so
    findings and output directories remain one-to-one with files.
    """
    resolved_root = root.resolve()
    names_by_file: dict[Path, str] = {}
    paths_by_name: dict[str, list[Path]] = {}

    for path in skill_files:
        resolved_path = path.resolve()
        declared_name = extract_frontmatter_name(resolved_path)
        base_name = derive_skill_name(resolved_path, resolved_root, declared_name=declared_name)
        names_by_file[resolved_path] = base_name
        paths_by_name.setdefault(base_name, []).append(resolved_path)

    collisions: dict[str, tuple[Path, ...]] = {}
    for base_name, paths in sorted(paths_by_name.items()):
        if len(paths) <= 1:
            continue
        sorted_paths = tuple(sorted(paths, key=lambda path: stable_path_key(path, resolved_root)))
        collisions[base_name] = sorted_paths
        for path in sorted_paths:
            names_by_file[path] = f"{base_name}-{_stable_path_hash(path, resolved_root)}"

    return names_by_file, collisions


def _fallback_relative_name(file_path: Path, root: Path) -> str:
    try:
        relative = file_path.relative_to(root)
        return relative.with_suffix("").as_posix().replace("/", "-")
    except ValueError:
        return file_path.stem


def stable_path_key(file_path: Path, root: Path) -> str:
    """Return a deterministic path key relative to *root* when possible."""
    try:
        return file_path.relative_to(root).as_posix()
    except ValueError:
        return file_path.as_posix()


def _stable_path_hash(file_path: Path, root: Path) -> str:
    """Return a short deterministic hash for the skill file location."""
    seed = stable_path_key(file_path, root).encode("utf-8")
    return hashlib.sha256(seed).hexdigest()[:SKILL_NAME_DISAMBIGUATION_HASH_LENGTH]


def extract_frontmatter_name(path: Path) -> str | None:
    """Extract the ``name`` field from YAML frontmatter without full document parsing.

    Returns ``None`` on any read or parse failure, logging a warning.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Pre-pass: cannot read %s: %s", path, exc)
        return None

    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None

    end = find_frontmatter_end(lines)
    if end is None:
        return None

    try:
        fm = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as exc:
        logger.warning("Pre-pass: malformed YAML frontmatter in %s: %s", path, exc)
        return None

    if isinstance(fm, dict):
        name = fm.get("name")
        if isinstance(name, str) and name.strip():
            return name.strip()

    return None
