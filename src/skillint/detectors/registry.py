"""Rule registry: maps rule ids to detector classes."""

from __future__ import annotations

from skillint.constants.rules import DEFAULT_RULES
from skillint.detectors.base import CorpusDetector, Detector, Rule
from skillint.detectors.corpus import DuplicateNameDetector, InvocationOverlapDetector
from skillint.detectors.frontmatter import (
    DescriptionFieldDetector,
    FrontmatterMissingDetector,
    InvocationFieldDetector,
    NameDirMismatchDetector,
    NameFieldDetector,
    UnknownKeyDetector,
)
from skillint.detectors.links import BrokenLinkDetector
from skillint.detectors.structure import BodyEmptyDetector, CodeFenceDetector, CompanionFileDetector

RULE_CLASSES: dict[str, type[Rule]] = {
    cls.rule_id: cls
    for cls in (
        FrontmatterMissingDetector,
        NameFieldDetector,
        NameDirMismatchDetector,
        DescriptionFieldDetector,
        InvocationFieldDetector,
        UnknownKeyDetector,
        BodyEmptyDetector,
        CodeFenceDetector,
        BrokenLinkDetector,
        CompanionFileDetector,
        DuplicateNameDetector,
        InvocationOverlapDetector,
    )
}


def build_detectors(rule_ids: tuple[str, ...] | None = None) -> tuple[list[Detector], list[CorpusDetector]]:
    """Instantiate detectors for *rule_ids* (all rules when None), in canonical order."""
    selected = DEFAULT_RULES if rule_ids is None else rule_ids
    unknown = sorted(set(selected) - set(RULE_CLASSES))
    if unknown:
        raise KeyError(f"Unknown rule id(s): {', '.join(unknown)}")

    document: list[Detector] = []
    corpus: list[CorpusDetector] = []
    for rule_id in DEFAULT_RULES:
        if rule_id not in selected:
            continue
        instance = RULE_CLASSES[rule_id]()
        if isinstance(instance, CorpusDetector):
            corpus.append(instance)
        elif isinstance(instance, Detector):
            document.append(instance)
    return document, corpus


def rule_catalog() -> list[dict[str, str]]:
    """Describe every registered rule for ``skillint rules``."""
    return [
        {
            "rule_id": rule_id,
            "severity": RULE_CLASSES[rule_id].default_severity,
            "scope": RULE_CLASSES[rule_id].scope,
            "summary": RULE_CLASSES[rule_id].summary,
        }
        for rule_id in DEFAULT_RULES
    ]
