"""Scaffolding for new skill directories (``skillint new``)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from skillint.config import load_config
from skillint.constants.discovery import SKILL_MARKDOWN_FILENAME
from skillint.constants.rules import DESCRIPTION_FORBIDDEN_CHARS
from skillint.constants.scaffold import (
    EXAMPLES_FILENAME,
    EXAMPLES_TEMPLATE,
    REFERENCE_FILENAME,
    REFERENCE_TEMPLATE,
    SCAFFOLD_DEFAULT_DESCRIPTION,
    SCAFFOLD_FIELDS,
    SCAFFOLD_TEMP_PREFIX,
    SCAFFOLD_TEMP_SUFFIX,
)
from skillint.exceptions import ScaffoldError
from skillint.io import write_text_atomic
from skillint.types import FrontmatterPolicy
from skillint.utils import is_kebab_case

logger = logging.getLogger(__name__)


def skill_title(name: str) -> str:
    """Turn ``error-handling`` into ``Error Handling``."""
    return " ".join(part.capitalize() for part in name.split("-"))


def render_skill(
    name: str,
    *,
    description: str | None = None,
    invocation: tuple[str, ...] = (),
    with_reference: bool = False,
    with_examples: bool = False,
    policy: FrontmatterPolicy | None = None,
) -> dict[str, str]:
    """Render the files of a new skill, keyed by file name.

    Raises ScaffoldError when the inputs would produce a skill that fails the
    front-matter checks of *policy* (the default policy when omitted).
    """
    policy = policy or FrontmatterPolicy()
    unfillable = sorted(set(policy.required) - set(SCAFFOLD_FIELDS))
    if unfillable:
        raise ScaffoldError(f"Config requires front-matter field(s) the scaffold cannot fill: {', '.join(unfillable)}")
    if not is_kebab_case(name):
        raise ScaffoldError(f"Skill name {name!r} must be kebab-case (lowercase letters, digits, single hyphens)")
    if len(name) > policy.name_max_length:
        raise ScaffoldError(f"Skill name is longer than {policy.name_max_length} characters")

    text = " ".join((description or SCAFFOLD_DEFAULT_DESCRIPTION).split())
    if not text:
        raise ScaffoldError("Description must not be blank")
    if len(text) > policy.description_max_length:
        raise ScaffoldError(f"Description is longer than {policy.description_max_length} characters")
    if any(char in text for char in DESCRIPTION_FORBIDDEN_CHARS):
        raise ScaffoldError("Description must not contain angle brackets")

    keywords: list[str] = []
    for keyword in invocation or (name,):
        cleaned = keyword.strip()
        if not cleaned:
            raise ScaffoldError("Invocation keywords must not be blank")
        if cleaned.casefold() not in {existing.casefold() for existing in keywords}:
            keywords.append(cleaned)
    if "invocation" in policy.required and len(keywords) < policy.invocation_min:
        raise ScaffoldError(f"At least {policy.invocation_min} distinct invocation keyword(s) are required")

    fields = {"name": name, "description": text, "invocation": keywords}
    frontmatter = yaml.safe_dump(
        {key: value for key, value in fields.items() if key in policy.known_keys},
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=1_000_000,
    )
    title = skill_title(name)
    body = [f"# {title}", "", text, ""]

    files: dict[str, str] = {}
    companions: list[str] = []
    if with_reference:
        files[REFERENCE_FILENAME] = REFERENCE_TEMPLATE.format(title=title)
        companions.append(f"- [Reference]({REFERENCE_FILENAME})")
    if with_examples:
        files[EXAMPLES_FILENAME] = EXAMPLES_TEMPLATE.format(title=title)
        companions.append(f"- [Examples]({EXAMPLES_FILENAME})")
    if companions:
        body.extend(["## See also", "", *companions, ""])

    files = {SKILL_MARKDOWN_FILENAME: f"---\n{frontmatter}---\n\n" + "\n".join(body), **files}
    return files


def create_skill(
    root: Path,
    name: str,
    *,
    description: str | None = None,
    invocation: tuple[str, ...] = (),
    with_reference: bool = False,
    with_examples: bool = False,
    dry_run: bool = False,
    force: bool = False,
    config_path: Path | None = None,
) -> dict[Path, str]:
    """Create ``root/<name>/`` with a conforming SKILL.md and optional companions.

    The front-matter limits come from the root's skillint.yaml (or
    *config_path*); ``load_config`` raises ConfigError when that file is bad.
    Returns the rendered files keyed by target path. Nothing is written when
    *dry_run* is set. Existing files are only replaced with *force*.
    """
    resolved_root = root.resolve()
    if not resolved_root.is_dir():
        raise ScaffoldError(f"Root directory does not exist: {resolved_root}")

    rendered = render_skill(
        name,
        description=description,
        invocation=invocation,
        with_reference=with_reference,
        with_examples=with_examples,
        policy=load_config(resolved_root, config_path).frontmatter,
    )
    directory = resolved_root / name
    targets = {directory / filename: content for filename, content in rendered.items()}

    existing = sorted(path.name for path in targets if path.exists())
    if existing and not force:
        raise ScaffoldError(f"Refusing to overwrite existing file(s) in {directory}: {', '.join(existing)}")

    if dry_run:
        return targets

    directory.mkdir(parents=True, exist_ok=True)
    for path, content in targets.items():
        write_text_atomic(
            path=path,
            content=content,
            temp_prefix=SCAFFOLD_TEMP_PREFIX,
            temp_suffix=SCAFFOLD_TEMP_SUFFIX,
        )
        logger.info("Wrote %s", path)
    return targets
