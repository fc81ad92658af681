"""Utility helpers for Skillint."""

from .naming import heading_anchor, is_kebab_case, sanitize_output_name

__all__ = ["heading_anchor", "is_kebab_case", "sanitize_output_name"]
