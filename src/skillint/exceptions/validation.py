"""Structured problems reported by collect-all config validation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One config problem, keyed by a stable ``CFG`` code."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""
    line: int | None = None
    column: int | None = None

    @property
    def location(self) -> str:
        """``path[:line[:column]]`` for editors that jump to positions."""
        parts = [self.path]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)

    def sort_key(self) -> tuple[str, str, str, int]:
        return (self.code, self.path, self.field, self.line or 0)

    def format(self) -> str:
        """Render as ``[CODE] location field: message (hint)``."""
        subject = f"{self.field}: {self.message}" if self.field else self.message
        rendered = f"[{self.code}] {self.location} {subject}"
        return f"{rendered} ({self.hint})" if self.hint else rendered


def sort_errors(errors: list[ValidationError]) -> list[ValidationError]:
    """Order errors by code, then path, field and line."""
    return sorted(errors, key=ValidationError.sort_key)


def format_errors(errors: list[ValidationError]) -> str:
    return "\n".join(error.format() for error in sort_errors(errors))
