"""Rule identifiers, default severities and rule-specific thresholds."""

from __future__ import annotations

PARSE_ERROR: str = "PARSE_ERROR"
FRONTMATTER_MISSING: str = "FRONTMATTER_MISSING"
NAME_FIELD: str = "NAME_FIELD"
NAME_DIR_MISMATCH: str = "NAME_DIR_MISMATCH"
DESCRIPTION_FIELD: str = "DESCRIPTION_FIELD"
INVOCATION_FIELD: str = "INVOCATION_FIELD"
FRONTMATTER_UNKNOWN_KEY: str = "FRONTMATTER_UNKNOWN_KEY"
BODY_EMPTY: str = "BODY_EMPTY"
CODE_FENCE: str = "CODE_FENCE"
LINK_BROKEN: str = "LINK_BROKEN"
COMPANION_FILE: str = "COMPANION_FILE"
DUPLICATE_NAME: str = "DUPLICATE_NAME"
INVOCATION_OVERLAP: str = "INVOCATION_OVERLAP"

# PARSE_ERROR is emitted by the linter itself and cannot be disabled.
DEFAULT_RULES: tuple[str, ...] = (
    FRONTMATTER_MISSING,
    NAME_FIELD,
    NAME_DIR_MISMATCH,
    DESCRIPTION_FIELD,
    INVOCATION_FIELD,
    FRONTMATTER_UNKNOWN_KEY,
    BODY_EMPTY,
    CODE_FENCE,
    LINK_BROKEN,
    COMPANION_FILE,
    DUPLICATE_NAME,
    INVOCATION_OVERLAP,
)

PARSE_ERROR_TITLE: str = "Document could not be parsed"
PARSE_ERROR_RECOMMENDATION: str = "Save the file as UTF-8 and close the front-matter block with `---`."

DESCRIPTION_FORBIDDEN_CHARS: frozenset[str] = frozenset({"<", ">"})
