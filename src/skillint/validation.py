"""Preflight validation shared by ``skillint lint`` and ``skillint validate-config``."""

from __future__ import annotations

from pathlib import Path

from skillint.config import validate_config_file
from skillint.constants.validation import CFG010
from skillint.exceptions.validation import ValidationError, sort_errors


def preflight_validate(root: Path, config_path: Path | None = None) -> list[ValidationError]:
    """Run all preflight validation checks and return errors in deterministic order.

    Returns an empty list when everything is valid.
    """
    resolved_root = root.resolve()
    if not resolved_root.is_dir():
        return [
            ValidationError(
                code=CFG010,
                path=str(resolved_root),
                field="",
                message=f"root directory does not exist: {resolved_root}",
            )
        ]

    errors = validate_config_file(root, config_path, config_explicit=config_path is not None)
    return sort_errors(errors)
