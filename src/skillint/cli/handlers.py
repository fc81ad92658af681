"""CLI subcommand handlers and threshold evaluation."""

from __future__ import annotations

import argparse
import sys

from skillint.config import load_config
from skillint.constants.scoring import SEVERITY_RANK
from skillint.detectors import rule_catalog
from skillint.exceptions import ConfigError, ScaffoldError
from skillint.exceptions.validation import format_errors
from skillint.linter.catalog import build_catalog
from skillint.model import LintResult
from skillint.reporting.listing import render_catalog_json, render_catalog_table, render_rules_table
from skillint.scaffold import create_skill
from skillint.validation import preflight_validate


def evaluate_fail_thresholds(result: LintResult, *, fail_on: str | None) -> int:
    """Return 1 if any finding is at or above the ``--fail-on`` severity, 0 otherwise."""
    if fail_on is None:
        return 0
    threshold = SEVERITY_RANK.get(fail_on, 0)
    for finding in result.findings:
        if SEVERITY_RANK.get(finding.severity, 0) >= threshold:
            return 1
    return 0


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def handle_catalog(args: argparse.Namespace) -> int:
    """Print discovery metadata for every skill."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    try:
        config = load_config(args.root.resolve(), args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    entries = build_catalog(args.root, config)
    print(render_catalog_json(entries) if args.json else render_catalog_table(entries))
    return 0


def handle_rules(args: argparse.Namespace) -> int:
    print(render_rules_table(rule_catalog()))
    return 0


def handle_new(args: argparse.Namespace) -> int:
    """Scaffold a new skill directory."""
    try:
        files = create_skill(
            args.root,
            args.name,
            description=args.description,
            invocation=tuple(args.invocation),
            with_reference=args.with_reference,
            with_examples=args.with_examples,
            dry_run=args.dry_run,
            force=args.force,
            config_path=args.config,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except ScaffoldError as exc:
        print(f"Scaffold error: {exc}", file=sys.stderr)
        return 1

    if args.dry_run:
        for path, content in files.items():
            print(f"# Dry run: would write {path}")
            print(content, end="" if content.endswith("\n") else "\n")
        return 0

    for path in files:
        print(f"Created {path}")
    return 0
