"""Markdown and SKILL.md parsers."""

from .markdown import parse_markdown_file
from .skill_markdown import parse_skill_markdown_file

__all__ = ["parse_markdown_file", "parse_skill_markdown_file"]
