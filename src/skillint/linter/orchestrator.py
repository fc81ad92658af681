"""End-to-end lint orchestration for Skillint.

``lint_workspace`` is the primary entry point used by the CLI.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from skillint.config import SkillintConfig, load_config
from skillint.constants.config import (
    RULE_DISABLE_SOURCE_CLI_DISABLE,
    RULE_DISABLE_SOURCE_CLI_ONLY,
    RULE_DISABLE_SOURCE_CONFIG,
)
from skillint.constants.reporting import VALID_OUTPUT_FORMATS
from skillint.constants.rules import (
    DEFAULT_RULES,
    PARSE_ERROR,
    PARSE_ERROR_RECOMMENDATION,
    PARSE_ERROR_TITLE,
)
from skillint.detectors import LintContext, build_detectors
from skillint.detectors.common import dedupe_candidates, relative_path
from skillint.exceptions import ConfigError, SkillParseError
from skillint.linter.conversion import candidate_to_finding
from skillint.linter.discovery import (
    build_skill_packages,
    derive_document_name,
    discover_documents,
    discover_skill_files,
    stable_path_key,
)
from skillint.linter.stats import finding_sort_key, rule_counts, severity_counts
from skillint.model import DocumentTarget, Evidence, Finding, FindingCandidate, LintResult, ParsedDocument
from skillint.parsers import parse_markdown_file, parse_skill_markdown_file
from skillint.reporting.filters import OutputFilters, build_filter_metadata, filter_findings
from skillint.types import RuleDisableSource, Severity

logger = logging.getLogger(__name__)


def lint_workspace(
    *,
    root: Path,
    out: Path | None = None,
    config_path: Path | None = None,
    max_file_mb: int | None = None,
    output_formats: tuple[str, ...] = ("json",),
    min_severity: Severity | None = None,
    enable_only: tuple[str, ...] = (),
    disable: tuple[str, ...] = (),
) -> LintResult:
    """Lint a documentation workspace and optionally write reports under *out*."""
    invalid_formats = set(output_formats) - VALID_OUTPUT_FORMATS
    if invalid_formats:
        raise ConfigError(
            f"Unknown output format(s): {', '.join(sorted(invalid_formats))}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )
    if max_file_mb is not None and max_file_mb <= 0:
        raise ConfigError(f"max_file_mb must be a positive integer, got {max_file_mb}")

    started_at = time.perf_counter()
    root = root.resolve()
    if out is not None:
        out = out.resolve()

    if not root.is_dir():
        raise ConfigError(f"Lint root does not exist or is not a directory: {root}")

    if out is not None:
        try:
            out.mkdir(parents=True, exist_ok=True)
            _probe = out / ".skillint_write_probe"
            _probe.touch()
            _probe.unlink()
        except OSError as exc:
            raise ConfigError(f"Output directory is not writable: {out} ({exc})") from exc

    config = load_config(root, config_path)
    resolved_max_file_mb = max_file_mb if max_file_mb is not None else config.max_file_mb
    rules_executed, disable_sources = resolve_rule_selection(
        config,
        enable_only=enable_only,
        disable=disable,
    )
    document_detectors, corpus_detectors = build_detectors(rules_executed)

    warnings: list[str] = []
    unknown_overrides = sorted(set(config.rule_overrides) - set(DEFAULT_RULES) - {PARSE_ERROR})
    for rule_id in unknown_overrides:
        _warn(warnings, f"Unknown rule_overrides entry '{rule_id}' has no matching rule and will be ignored.")

    targets = _collect_targets(root, config, resolved_max_file_mb, warnings)
    context = LintContext(root=root, config=config)

    candidates_by_name: dict[str, list[FindingCandidate]] = {}
    parsed_skills: list[tuple[DocumentTarget, ParsedDocument]] = []
    skill_count = 0
    document_count = 0

    for target in targets:
        if target.kind == "skill":
            skill_count += 1
        else:
            document_count += 1
        bucket = candidates_by_name.setdefault(target.name, [])

        parser = parse_skill_markdown_file if target.kind == "skill" else parse_markdown_file
        try:
            parsed = parser(target.path)
        except SkillParseError as exc:
            _warn(warnings, f"Parse error in {target.path}: {exc}")
            bucket.append(
                FindingCandidate(
                    rule_id=PARSE_ERROR,
                    severity="high",
                    title=PARSE_ERROR_TITLE,
                    description=str(exc),
                    evidence=Evidence(path=relative_path(context, target.path), line=1, snippet=""),
                    recommendation=PARSE_ERROR_RECOMMENDATION,
                )
            )
            continue

        context.anchors.remember(parsed)
        if target.kind == "skill":
            parsed_skills.append((target, parsed))

        for detector in document_detectors:
            if detector.applies(target):
                bucket.extend(detector.run(target=target, parsed=parsed, context=context))

    for corpus_detector in corpus_detectors:
        for name, candidate in corpus_detector.run(skills=parsed_skills, context=context):
            candidates_by_name.setdefault(name, []).append(candidate)

    findings_by_name: dict[str, list[Finding]] = {}
    for name, candidates in candidates_by_name.items():
        findings_by_name[name] = [
            candidate_to_finding(name, candidate, rule_override=config.rule_overrides.get(candidate.rule_id))
            for candidate in dedupe_candidates(candidates)
        ]

    all_findings: list[Finding] = []
    output_filters = OutputFilters(min_severity=min_severity)
    for name in sorted(findings_by_name):
        name_findings = findings_by_name[name]
        if out is not None:
            from skillint.reporting.writer import write_skill_reports

            shown = filter_findings(name_findings, output_filters)
            write_skill_reports(
                out,
                name,
                shown,
                all_findings=name_findings,
                output_filter=build_filter_metadata(
                    total=len(name_findings),
                    shown=len(shown),
                    filters=output_filters,
                ),
            )
        all_findings.extend(name_findings)

    sorted_findings = sorted(all_findings, key=finding_sort_key)

    if out is not None:
        shown_all = filter_findings(sorted_findings, output_filters)
        if "csv" in output_formats:
            from skillint.reporting.csv_writer import write_csv_findings

            write_csv_findings(out, shown_all)

        if "sarif" in output_formats:
            from skillint.reporting.sarif_writer import write_sarif_findings

            write_sarif_findings(
                out,
                shown_all,
                rule_distribution=rule_counts(all_findings),
                filter_metadata=build_filter_metadata(
                    total=len(all_findings),
                    shown=len(shown_all),
                    filters=output_filters,
                ),
            )

    duration_seconds = time.perf_counter() - started_at
    logger.info(
        "Linted %d skill(s) and %d document(s): %d finding(s) in %.3fs",
        skill_count,
        document_count,
        len(all_findings),
        duration_seconds,
    )

    return LintResult(
        skill_count=skill_count,
        document_count=document_count,
        total_findings=len(all_findings),
        counts_by_severity=severity_counts(all_findings),
        findings=tuple(sorted_findings),
        duration_seconds=duration_seconds,
        warnings=tuple(warnings),
        counts_by_rule=rule_counts(all_findings),
        rules_executed=rules_executed,
        rules_disabled=tuple(rule_id for rule_id in DEFAULT_RULES if rule_id in disable_sources),
        disable_sources=disable_sources,
        active_rule_overrides={
            rule_id: override.severity
            for rule_id, override in sorted(config.rule_overrides.items())
            if override.severity is not None and rule_id not in unknown_overrides
        },
    )


def resolve_rule_selection(
    config: SkillintConfig,
    *,
    enable_only: tuple[str, ...] = (),
    disable: tuple[str, ...] = (),
) -> tuple[tuple[str, ...], dict[str, RuleDisableSource]]:
    """Combine config and CLI rule toggles into the executed rule ids.

    Returns the executed rule ids plus, for each disabled rule, where the
    disable came from. Config is applied first, then ``--only``, then
    ``--disable``.
    """
    unknown = sorted(set(enable_only + disable) - set(DEFAULT_RULES))
    if unknown:
        raise ConfigError(f"Unknown rule id(s): {', '.join(unknown)}")

    disable_sources: dict[str, RuleDisableSource] = {}
    executed = set(config.effective_rule_ids)
    for rule_id in DEFAULT_RULES:
        if rule_id not in executed:
            disable_sources[rule_id] = RULE_DISABLE_SOURCE_CONFIG  # type: ignore[assignment]

    if enable_only:
        for rule_id in sorted(executed - set(enable_only)):
            disable_sources[rule_id] = RULE_DISABLE_SOURCE_CLI_ONLY  # type: ignore[assignment]
        executed &= set(enable_only)

    for rule_id in disable:
        if rule_id in executed:
            disable_sources[rule_id] = RULE_DISABLE_SOURCE_CLI_DISABLE  # type: ignore[assignment]
            executed.discard(rule_id)

    return tuple(rule_id for rule_id in DEFAULT_RULES if rule_id in executed), disable_sources


def _collect_targets(
    root: Path,
    config: SkillintConfig,
    max_file_mb: int,
    warnings: list[str],
) -> list[DocumentTarget]:
    """Discover skills, their companions and standalone documents."""
    skill_files = discover_skill_files(
        root,
        config.skill_globs,
        max_file_mb,
        exclude_globs=config.exclude_globs,
    )
    packages, collisions = build_skill_packages(skill_files, root, config.companion_files)
    for base_name, paths in sorted(collisions.items()):
        rendered_paths = ", ".join(stable_path_key(path, root) for path in paths)
        _warn(
            warnings,
            f"Duplicate skill name '{base_name}' resolved across multiple files "
            f"({rendered_paths}); applying deterministic suffixes.",
        )

    targets: list[DocumentTarget] = []
    claimed: set[Path] = set()
    for package in packages:
        targets.append(DocumentTarget(name=package.name, path=package.skill_file, kind="skill", package=package))
        claimed.add(package.skill_file)
        for companion in package.companions:
            targets.append(DocumentTarget(name=package.name, path=companion.path, kind="companion", package=package))
            claimed.add(companion.path)

    for path in discover_documents(
        root,
        config.doc_globs,
        max_file_mb,
        exclude_globs=config.exclude_globs,
        skip=claimed,
    ):
        targets.append(DocumentTarget(name=derive_document_name(path, root), path=path, kind="standard"))

    return targets


def _warn(warnings: list[str], message: str) -> None:
    warnings.append(message)
    logger.warning(message)
