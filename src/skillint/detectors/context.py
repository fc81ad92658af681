"""Shared, read-only context handed to every detector run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from skillint.config import SkillintConfig
from skillint.constants.discovery import SKILL_MARKDOWN_FILENAME
from skillint.exceptions import SkillParseError
from skillint.model import ParsedDocument
from skillint.parsers import parse_markdown_file, parse_skill_markdown_file

logger = logging.getLogger(__name__)


class AnchorIndex:
    """Memoized heading anchors per Markdown file, parsed on first use."""

    def __init__(self) -> None:
        self._anchors: dict[Path, frozenset[str] | None] = {}

    def remember(self, parsed: ParsedDocument) -> None:
        """Seed the index with a document that has already been parsed."""
        self._anchors[parsed.file_path.resolve()] = parsed.anchors

    def anchors_for(self, path: Path) -> frozenset[str] | None:
        """Return the anchors defined in *path*, or None if it cannot be parsed."""
        resolved = path.resolve()
        if resolved not in self._anchors:
            parser = parse_skill_markdown_file if resolved.name == SKILL_MARKDOWN_FILENAME else parse_markdown_file
            try:
                self._anchors[resolved] = parser(resolved).anchors
            except SkillParseError as exc:
                logger.debug("Anchor lookup skipped for %s: %s", resolved, exc)
                self._anchors[resolved] = None
        return self._anchors[resolved]


@dataclass(frozen=True)
class LintContext:
    """Workspace-wide inputs shared by all detectors."""

    root: Path
    config: SkillintConfig
    anchors: AnchorIndex = field(default_factory=AnchorIndex)
