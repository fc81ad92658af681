#!/usr/bin/env python3
"""Keep skillint modules small enough to review in one sitting.

Counts non-blank, non-comment lines in every module under ``src/skillint``
and ``tests``. A module over its soft cap is reported as a warning; a module
over its hard cap fails the check. Package ``__init__`` files are skipped.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

REPO_ROOT: Path = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class SizeCap:
    label: str
    directory: Path
    soft: int
    hard: int


CAPS: tuple[SizeCap, ...] = (
    SizeCap("src", REPO_ROOT / "src" / "skillint", soft=350, hard=600),
    SizeCap("test", REPO_ROOT / "tests", soft=450, hard=800),
)


def count_code_lines(path: Path) -> int:
    """Count lines that are neither blank nor comment-only."""
    return sum(
        1
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    )


def check(cap: SizeCap) -> tuple[list[str], list[str]]:
    """Return ``(warnings, errors)`` for every module under *cap*."""
    warnings: list[str] = []
    errors: list[str] = []
    if not cap.directory.is_dir():
        return warnings, errors

    for module in sorted(cap.directory.rglob("*.py")):
        if module.name == "__init__.py":
            continue
        size = count_code_lines(module)
        rel = module.relative_to(REPO_ROOT)
        if size > cap.hard:
            errors.append(f"{cap.label} {rel}: {size} lines (hard cap {cap.hard})")
        elif size > cap.soft:
            warnings.append(f"{cap.label} {rel}: {size} lines (soft cap {cap.soft})")
    return warnings, errors


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--strict", action="store_true", help="Treat soft-cap warnings as failures")
    args = parser.parse_args(argv)

    warnings: list[str] = []
    errors: list[str] = []
    for cap in CAPS:
        cap_warnings, cap_errors = check(cap)
        warnings.extend(cap_warnings)
        errors.extend(cap_errors)

    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR:   {error}")

    if errors or (args.strict and warnings):
        print(f"\n{len(errors)} hard-cap and {len(warnings)} soft-cap violation(s).")
        return 1
    if not warnings:
        print("All modules within size caps.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
