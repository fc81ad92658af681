"""Core data models for Skillint."""

from .entities import (
    CatalogEntry,
    CodeFence,
    CompanionFile,
    DocumentTarget,
    Evidence,
    Finding,
    FindingCandidate,
    Heading,
    LintResult,
    Link,
    ParsedDocument,
    SeverityOverride,
    SkillPackage,
    Summary,
)

__all__ = [
    "CatalogEntry",
    "CodeFence",
    "CompanionFile",
    "DocumentTarget",
    "Evidence",
    "Finding",
    "FindingCandidate",
    "Heading",
    "LintResult",
    "Link",
    "ParsedDocument",
    "SeverityOverride",
    "SkillPackage",
    "Summary",
]
