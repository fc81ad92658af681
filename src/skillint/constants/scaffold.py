"""Templates and defaults for ``skillint new``."""

from __future__ import annotations

SCAFFOLD_TEMP_PREFIX: str = ".skillint-new-"
SCAFFOLD_TEMP_SUFFIX: str = ".md"
SCAFFOLD_DEFAULT_DESCRIPTION: str = "Describe when and how to apply this skill."
# Front-matter keys the scaffold writes.
SCAFFOLD_FIELDS: tuple[str, ...] = ("name", "description", "invocation")

REFERENCE_FILENAME: str = "reference.md"
EXAMPLES_FILENAME: str = "examples.md"

REFERENCE_TEMPLATE: str = """# {title} reference

| Topic | Convention |
|-------|------------|
| | |
"""

EXAMPLES_TEMPLATE: str = """# {title} examples

```text
Add a worked example here.
```
"""
