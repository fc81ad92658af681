"""Shared fixtures for detector tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import pytest

from skillint.config import SkillintConfig
from skillint.detectors import Detector, LintContext
from skillint.linter.discovery import find_companions
from skillint.model import DocumentTarget, FindingCandidate, SkillPackage
from skillint.parsers import parse_markdown_file, parse_skill_markdown_file
from skillint.types import DocumentKind

RunDetector: TypeAlias = Callable[..., list[FindingCandidate]]


@pytest.fixture()
def run_detector(tmp_path: Path) -> RunDetector:
    """Write a document under ``tmp_path/<directory>`` and run one detector on it."""

    def _run(
        detector: Detector,
        content: str,
        *,
        directory: str = "my-skill",
        filename: str = "SKILL.md",
        kind: DocumentKind = "skill",
        config: SkillintConfig | None = None,
        extra_files: dict[str, str] | None = None,
    ) -> list[FindingCandidate]:
        resolved_config = config or SkillintConfig()
        folder = tmp_path / directory
        folder.mkdir(parents=True, exist_ok=True)
        for relative, text in (extra_files or {}).items():
            extra = folder / relative
            extra.parent.mkdir(parents=True, exist_ok=True)
            extra.write_text(text, encoding="utf-8")
        path = folder / filename
        path.write_text(content, encoding="utf-8")

        package = None
        if kind == "skill":
            package = SkillPackage(
                name=directory or "root",
                skill_file=path.resolve(),
                companions=find_companions(folder, resolved_config.companion_files),
            )
            parsed = parse_skill_markdown_file(path)
        else:
            parsed = parse_markdown_file(path)

        target = DocumentTarget(name=directory or "root", path=path.resolve(), kind=kind, package=package)
        context = LintContext(root=tmp_path.resolve(), config=resolved_config)
        assert detector.applies(target)
        return detector.run(target=target, parsed=parsed, context=context)

    return _run
