"""Detectors for the SKILL.md front-matter contract: name, description, invocation."""

from __future__ import annotations

from typing import Any, ClassVar

from skillint.config import suggest_key
from skillint.constants.rules import (
    DESCRIPTION_FIELD,
    DESCRIPTION_FORBIDDEN_CHARS,
    FRONTMATTER_MISSING,
    FRONTMATTER_UNKNOWN_KEY,
    INVOCATION_FIELD,
    NAME_DIR_MISMATCH,
    NAME_FIELD,
)
from skillint.detectors.base import Detector
from skillint.detectors.common import frontmatter_line, line_evidence
from skillint.detectors.context import LintContext
from skillint.model import DocumentTarget, FindingCandidate, ParsedDocument
from skillint.types import Severity
from skillint.utils import is_kebab_case, sanitize_output_name


class FrontmatterMissingDetector(Detector):
    """Flag SKILL.md files without a usable front-matter block."""

    rule_id = FRONTMATTER_MISSING
    default_severity: ClassVar[Severity] = "high"
    summary = "SKILL.md has no front matter, or the block is empty"

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        if parsed.frontmatter is not None:
            return []
        if parsed.frontmatter_present:
            title = "Empty front matter"
            description = "The front-matter block in SKILL.md contains no keys."
        else:
            title = "Missing front matter"
            description = "SKILL.md does not start with a `---` front-matter block."
        return [
            FindingCandidate(
                rule_id=self.rule_id,
                severity=self.default_severity,
                title=title,
                description=description,
                evidence=line_evidence(context, parsed, 1),
                recommendation="Start SKILL.md with a `---` block declaring name, description and invocation.",
            )
        ]


class NameFieldDetector(Detector):
    """Check that `name` is present, a string, kebab-case and not too long."""

    rule_id = NAME_FIELD
    default_severity: ClassVar[Severity] = "high"
    summary = "`name` is missing, blank, not kebab-case or too long"

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        frontmatter = parsed.frontmatter
        if frontmatter is None:
            return []
        policy = context.config.frontmatter
        line = frontmatter_line(parsed, "name")

        if "name" not in frontmatter:
            if "name" not in policy.required:
                return []
            return [self._candidate(context, parsed, line, "high", "Missing skill name", "Front matter has no `name` key.")]

        value = frontmatter["name"]
        if not isinstance(value, str) or not value.strip():
            return [
                self._candidate(
                    context,
                    parsed,
                    line,
                    "high",
                    "Invalid skill name",
                    f"`name` must be a non-empty string, got {_describe(value)}.",
                )
            ]

        name = value.strip()
        candidates: list[FindingCandidate] = []
        if not is_kebab_case(name):
            candidates.append(
                self._candidate(
                    context,
                    parsed,
                    line,
                    "medium",
                    "Skill name is not kebab-case",
                    f"`name` {name!r} should use lowercase letters, digits and single hyphens.",
                )
            )
        if len(name) > policy.name_max_length:
            candidates.append(
                self._candidate(
                    context,
                    parsed,
                    line,
                    "medium",
                    "Skill name too long",
                    f"`name` has {len(name)} characters; the limit is {policy.name_max_length}.",
                )
            )
        return candidates

    def _candidate(
        self,
        context: LintContext,
        parsed: ParsedDocument,
        line: int,
        severity: Severity,
        title: str,
        description: str,
    ) -> FindingCandidate:
        return FindingCandidate(
            rule_id=self.rule_id,
            severity=severity,
            title=title,
            description=description,
            evidence=line_evidence(context, parsed, line),
            recommendation="Declare a short kebab-case identifier, e.g. `name: error-handling`.",
        )


class NameDirMismatchDetector(Detector):
    """Flag skills whose declared name differs from their directory name."""

    rule_id = NAME_DIR_MISMATCH
    default_severity: ClassVar[Severity] = "low"
    summary = "declared `name` differs from the skill directory name"

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        frontmatter = parsed.frontmatter or {}
        value = frontmatter.get("name")
        if not isinstance(value, str) or not value.strip():
            return []
        directory = parsed.file_path.parent
        if directory.resolve() == context.root:
            return []
        declared = sanitize_output_name(value)
        expected = sanitize_output_name(directory.name)
        if declared == expected:
            return []
        return [
            FindingCandidate(
                rule_id=self.rule_id,
                severity=self.default_severity,
                title="Name does not match directory",
                description=f"`name` {value.strip()!r} differs from directory {directory.name!r}.",
                evidence=line_evidence(context, parsed, frontmatter_line(parsed, "name")),
                recommendation="Rename the directory or the `name` so routing tools resolve the same skill.",
            )
        ]


class DescriptionFieldDetector(Detector):
    """Check the `description` sentence."""

    rule_id = DESCRIPTION_FIELD
    default_severity: ClassVar[Severity] = "high"
    summary = "`description` is missing, blank, too long or badly formatted"

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        frontmatter = parsed.frontmatter
        if frontmatter is None:
            return []
        policy = context.config.frontmatter
        evidence = line_evidence(context, parsed, frontmatter_line(parsed, "description"))
        recommendation = "Write one plain sentence saying what the skill covers and when to use it."

        def candidate(severity: Severity, title: str, description: str) -> FindingCandidate:
            return FindingCandidate(
                rule_id=self.rule_id,
                severity=severity,
                title=title,
                description=description,
                evidence=evidence,
                recommendation=recommendation,
            )

        if "description" not in frontmatter:
            if "description" not in policy.required:
                return []
            return [candidate("high", "Missing description", "Front matter has no `description` key.")]

        value = frontmatter["description"]
        if not isinstance(value, str) or not value.strip():
            return [
                candidate(
                    "high",
                    "Invalid description",
                    f"`description` must be a non-empty string, got {_describe(value)}.",
                )
            ]

        text = value.strip()
        candidates: list[FindingCandidate] = []
        if len(text) > policy.description_max_length:
            candidates.append(
                candidate(
                    "medium",
                    "Description too long",
                    f"`description` has {len(text)} characters; the limit is {policy.description_max_length}.",
                )
            )
        if "\n" in text:
            candidates.append(candidate("low", "Multi-line description", "`description` spans several lines."))
        if any(char in text for char in DESCRIPTION_FORBIDDEN_CHARS):
            candidates.append(
                candidate("low", "Markup in description", "`description` contains angle brackets.")
            )
        return candidates


class InvocationFieldDetector(Detector):
    """Check the ordered list of trigger keywords."""

    rule_id = INVOCATION_FIELD
    default_severity: ClassVar[Severity] = "high"
    summary = "`invocation` is missing, not a list, too short, or has bad entries"

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        frontmatter = parsed.frontmatter
        if frontmatter is None:
            return []
        policy = context.config.frontmatter
        evidence = line_evidence(context, parsed, frontmatter_line(parsed, "invocation"))
        recommendation = "List trigger keywords as a YAML sequence, e.g. `invocation: [datetime, timezone]`."

        def candidate(severity: Severity, title: str, description: str) -> FindingCandidate:
            return FindingCandidate(
                rule_id=self.rule_id,
                severity=severity,
                title=title,
                description=description,
                evidence=evidence,
                recommendation=recommendation,
            )

        if "invocation" not in frontmatter:
            if "invocation" not in policy.required:
                return []
            return [candidate("high", "Missing invocation keywords", "Front matter has no `invocation` key.")]

        value = frontmatter["invocation"]
        if value is None:
            value = []
        if not isinstance(value, list):
            return [
                candidate(
                    "high",
                    "Invocation is not a list",
                    f"`invocation` must be a list of strings, got {_describe(value)}.",
                )
            ]

        candidates: list[FindingCandidate] = []
        keywords: list[str] = []
        for index, entry in enumerate(value):
            if not isinstance(entry, str) or not entry.strip():
                candidates.append(
                    candidate(
                        "medium",
                        "Invalid invocation keyword",
                        f"`invocation[{index}]` must be a non-empty string, got {_describe(entry)}.",
                    )
                )
                continue
            keywords.append(entry.strip())

        if len(keywords) < policy.invocation_min:
            candidates.insert(
                0,
                candidate(
                    "high",
                    "Too few invocation keywords",
                    f"`invocation` has {len(keywords)} usable keyword(s); at least {policy.invocation_min} required.",
                ),
            )

        seen: set[str] = set()
        for keyword in keywords:
            folded = keyword.casefold()
            if folded in seen:
                candidates.append(
                    candidate("low", "Duplicate invocation keyword", f"Keyword {keyword!r} is listed more than once.")
                )
            seen.add(folded)
        return candidates


class UnknownKeyDetector(Detector):
    """Flag front-matter keys outside the configured schema."""

    rule_id = FRONTMATTER_UNKNOWN_KEY
    default_severity: ClassVar[Severity] = "low"
    summary = "front matter declares a key outside the configured schema"

    def run(
        self,
        *,
        target: DocumentTarget,
        parsed: ParsedDocument,
        context: LintContext,
    ) -> list[FindingCandidate]:
        frontmatter = parsed.frontmatter
        if frontmatter is None:
            return []
        known = context.config.frontmatter.known_keys
        candidates: list[FindingCandidate] = []
        for key in sorted(frontmatter, key=str):
            name = str(key)
            if name in known:
                continue
            hint = suggest_key(name, known)
            candidates.append(
                FindingCandidate(
                    rule_id=self.rule_id,
                    severity=self.default_severity,
                    title="Unknown front-matter key",
                    description=f"Key `{name}` is not part of the skill schema." + (f" {hint}" if hint else ""),
                    evidence=line_evidence(context, parsed, frontmatter_line(parsed, name)),
                    recommendation="Remove the key or add it to `frontmatter.allowed_extra` in skillint.yaml.",
                )
            )
        return candidates


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, str):
        return "a blank string"
    return type(value).__name__
