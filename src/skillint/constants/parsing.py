"""Constants for parsing behavior."""

from __future__ import annotations

import re
from re import Pattern

SNIPPET_MAX_LENGTH: int = 200
FRONTMATTER_DELIMITER: str = "---"
# YAML allows "..." as an explicit document end marker.
FRONTMATTER_ALT_DELIMITER: str = "..."

FENCE_OPEN_PATTERN: Pattern[str] = re.compile(r"^ {0,3}(`{3,}|~{3,})\s*(.*)$")
ATX_HEADING_PATTERN: Pattern[str] = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*#*[ \t]*$")
INLINE_CODE_PATTERN: Pattern[str] = re.compile(r"(`+)(?:(?!\1).)+?\1")
INLINE_LINK_PATTERN: Pattern[str] = re.compile(r"(!?)\[([^\]]*)\]\(\s*<?([^)\s>]*)>?(?:\s+[\"'(][^)]*[\"')])?\s*\)")
REFERENCE_DEFINITION_PATTERN: Pattern[str] = re.compile(r"^ {0,3}\[(?!\^)([^\]]+)\]:\s*<?(\S+?)>?(?:\s+.*)?$")
URL_SCHEME_PATTERN: Pattern[str] = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
