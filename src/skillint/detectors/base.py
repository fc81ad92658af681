"""Detector interfaces for lint rules."""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from typing import ClassVar

from skillint.detectors.context import LintContext
from skillint.model import DocumentTarget, FindingCandidate, ParsedDocument
from skillint.types import DocumentKind, RuleScope, Severity

_RULE_ID_PATTERN: re.Pattern[str] = re.compile(r"^[A-Z][A-Z0-9_]+$")

ALL_DOCUMENT_KINDS: frozenset[DocumentKind] = frozenset({"skill", "companion", "standard"})


class Rule(ABC):
    """Common metadata and subclass validation for every lint rule."""

    rule_id: ClassVar[str]
    default_severity: ClassVar[Severity]
    summary: ClassVar[str]
    scope: ClassVar[RuleScope]

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Validate rule subclasses define a valid UPPER_SNAKE_CASE `rule_id`."""
        super().__init_subclass__(**kwargs)
        if inspect.isabstract(cls):
            return

        rule_id = getattr(cls, "rule_id", None)
        if not isinstance(rule_id, str) or not rule_id.strip():
            raise TypeError(f"{cls.__name__} must define a non-empty class attribute `rule_id`")
        if not _RULE_ID_PATTERN.match(rule_id):
            raise TypeError(f"{cls.__name__}.rule_id must be UPPER_SNAKE_CASE (got {rule_id!r})")
        if not isinstance(getattr(cls, "summary", None), str):
            raise TypeError(f"{cls.__name__} must define a `summary` string")


class Detector(Rule):
    """A rule evaluated once per parsed document."""

    scope: ClassVar[RuleScope] = "document"
    applies_to: ClassVar[frozenset[DocumentKind]] = frozenset({"skill"})

    def applies(self, target: DocumentTarget) -> bool:
        """Whether this detector should run for *target*."""
        return target.kind in self.applies_to

    @abstractmethod
    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        """Run detector on a parsed document."""


class CorpusDetector(Rule):
    """A rule evaluated once over every parsed skill in the workspace."""

    scope: ClassVar[RuleScope] = "corpus"

    @abstractmethod
    def run(
        self,
        *,
        skills: list[tuple[DocumentTarget, ParsedDocument]],
        context: LintContext,
    ) -> list[tuple[str, FindingCandidate]]:
        """Return ``(skill_name, candidate)`` pairs for corpus-level problems."""
