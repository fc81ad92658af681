"""CLI entrypoint for the Skillint linter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from skillint import __version__
from skillint.cli.handlers import (
    evaluate_fail_thresholds,
    handle_catalog,
    handle_new,
    handle_rules,
    handle_validate_config,
)
from skillint.constants.branding import CLI_DESCRIPTION
from skillint.constants.reporting import DEFAULT_OUTPUT_FORMAT, VALID_GROUP_BY, VALID_OUTPUT_FORMATS
from skillint.constants.scoring import SEVERITY_ORDER
from skillint.exceptions import ConfigError, SkillintError
from skillint.exceptions.validation import format_errors
from skillint.linter import lint_workspace
from skillint.reporting.stdout import StdoutReporter
from skillint.validation import preflight_validate

SEVERITY_CHOICES = tuple(reversed(SEVERITY_ORDER))


def _add_root_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, required=True, help="Documentation root path")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="skillint",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lint = subparsers.add_parser("lint", help="Lint skill front matter and Markdown structure")
    _add_root_arguments(lint)
    lint.add_argument("-o", "--output-dir", type=Path, help="Write reports under this directory")
    lint.add_argument("--max-file-mb", type=int, help="Skip Markdown files larger than this size")
    lint.add_argument(
        "--output-format",
        default=DEFAULT_OUTPUT_FORMAT,
        help="Comma-separated report formats: json, csv, sarif (default: json)",
    )
    lint.add_argument("--min-severity", choices=SEVERITY_CHOICES, help="Hide findings below this severity")
    lint.add_argument("--fail-on", choices=SEVERITY_CHOICES, help="Exit 1 when a finding reaches this severity")
    lint.add_argument("--group-by", choices=VALID_GROUP_BY, help="Group stdout findings by skill or rule")
    for flag, verb in (("--only", "Run only"), ("--disable", "Skip")):
        lint.add_argument(
            flag,
            action="append",
            default=[],
            metavar="RULE_ID",
            help=f"{verb} this rule (repeatable)",
        )
    lint.add_argument("--summary-only", action="store_true", help="Print the header without the findings table")
    lint.add_argument("--no-stdout", action="store_true", help="Print nothing to stdout")
    lint.add_argument("--no-color", action="store_true", help="Disable ANSI colour")
    lint.add_argument("-v", "--verbose", action="store_true", help="Show finding locations and warnings")

    validate = subparsers.add_parser("validate-config", help="Validate configuration without linting")
    _add_root_arguments(validate)

    catalog = subparsers.add_parser("catalog", help="List discovered skills and their front matter")
    _add_root_arguments(catalog)
    catalog.add_argument("--json", action="store_true", help="Print the catalog as JSON")

    subparsers.add_parser("rules", help="List lint rules with default severities")

    new = subparsers.add_parser("new", help="Scaffold a new skill directory")
    new.add_argument("name", help="Kebab-case skill name; also the directory name")
    _add_root_arguments(new)
    new.add_argument("--description", help="One-sentence description")
    new.add_argument(
        "--invocation",
        action="append",
        default=[],
        metavar="KEYWORD",
        help="Trigger keyword (repeatable; defaults to the name)",
    )
    new.add_argument("--with-reference", action="store_true", help="Also create reference.md")
    new.add_argument("--with-examples", action="store_true", help="Also create examples.md")
    new.add_argument("--dry-run", action="store_true", help="Print the files instead of writing them")
    new.add_argument("--force", action="store_true", help="Overwrite existing files")

    return parser


def parse_output_formats(raw: str) -> tuple[str, ...]:
    """Split ``--output-format`` into known format names or raise ConfigError."""
    tokens = [token.strip() for token in raw.split(",")]
    if not all(tokens):
        raise ConfigError("--output-format contains empty or malformed tokens")
    unknown = sorted(set(tokens) - VALID_OUTPUT_FORMATS)
    if unknown:
        raise ConfigError(
            f"unknown output format(s): {', '.join(unknown)}. Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )
    return tuple(tokens)


def _run_lint(args: argparse.Namespace) -> int:
    try:
        output_formats = parse_output_formats(args.output_format)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    validation_errors = preflight_validate(root=args.root, config_path=args.config)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return 2

    try:
        result = lint_workspace(
            root=args.root,
            out=args.output_dir,
            config_path=args.config,
            max_file_mb=args.max_file_mb,
            output_formats=output_formats,
            min_severity=args.min_severity,
            enable_only=tuple(args.only),
            disable=tuple(args.disable),
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except SkillintError as exc:
        print(f"Linter error: {exc}", file=sys.stderr)
        return 1

    exit_code = evaluate_fail_thresholds(result, fail_on=args.fail_on)
    if not args.no_stdout:
        reporter = StdoutReporter(
            result,
            color=not args.no_color and sys.stdout.isatty(),
            verbose=args.verbose,
            group_by=args.group_by,
            min_severity=args.min_severity,
            summary_only=args.summary_only,
            fail_on=args.fail_on,
            exit_code=exit_code,
        )
        print(reporter.render())
    return exit_code


COMMANDS = {
    "lint": _run_lint,
    "validate-config": handle_validate_config,
    "catalog": handle_catalog,
    "rules": handle_rules,
    "new": handle_new,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    args = build_parser().parse_args(argv)
    verbose = getattr(args, "verbose", False)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(message)s")
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
