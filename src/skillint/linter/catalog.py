"""Skill catalog: the discovery metadata a routing tool would read."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from skillint.config import SkillintConfig
from skillint.constants.rules import DESCRIPTION_FIELD, FRONTMATTER_MISSING, INVOCATION_FIELD, NAME_FIELD
from skillint.detectors import LintContext, build_detectors
from skillint.detectors.common import relative_path
from skillint.exceptions import SkillParseError
from skillint.linter.discovery import build_skill_packages, discover_skill_files
from skillint.model import CatalogEntry, DocumentTarget
from skillint.parsers import parse_skill_markdown_file

logger = logging.getLogger(__name__)

CONTRACT_RULES: tuple[str, ...] = (FRONTMATTER_MISSING, NAME_FIELD, DESCRIPTION_FIELD, INVOCATION_FIELD)


def build_catalog(root: Path, config: SkillintConfig) -> list[CatalogEntry]:
    """Return one catalog entry per discovered skill, sorted by name.

    A skill is ``valid`` when its front matter parses and the contract rules
    report nothing at high severity.
    """
    root = root.resolve()
    context = LintContext(root=root, config=config)
    detectors, _corpus = build_detectors(CONTRACT_RULES)

    skill_files = discover_skill_files(root, config.skill_globs, config.max_file_mb, exclude_globs=config.exclude_globs)
    packages, _collisions = build_skill_packages(skill_files, root, config.companion_files)

    entries: list[CatalogEntry] = []
    for package in packages:
        path = relative_path(context, package.skill_file)
        companions = tuple(relative_path(context, companion.path) for companion in package.companions)
        try:
            parsed = parse_skill_markdown_file(package.skill_file)
        except SkillParseError as exc:
            logger.warning("Catalog: cannot parse %s: %s", package.skill_file, exc)
            entries.append(
                CatalogEntry(
                    name=package.name,
                    description="",
                    invocation=(),
                    path=path,
                    companions=companions,
                    valid=False,
                    problems=(str(exc),),
                )
            )
            continue

        target = DocumentTarget(name=package.name, path=package.skill_file, kind="skill", package=package)
        problems = tuple(
            candidate.title
            for detector in detectors
            for candidate in detector.run(target=target, parsed=parsed, context=context)
            if candidate.severity == "high"
        )
        frontmatter = parsed.frontmatter or {}
        entries.append(
            CatalogEntry(
                name=package.name,
                description=_text(frontmatter.get("description")),
                invocation=_keywords(frontmatter.get("invocation")),
                path=path,
                companions=companions,
                valid=not problems,
                problems=problems,
            )
        )

    return sorted(entries, key=lambda entry: (entry.name, entry.path))


def _text(value: Any) -> str:
    return " ".join(value.split()) if isinstance(value, str) else ""


def _keywords(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(entry.strip() for entry in value if isinstance(entry, str) and entry.strip())
