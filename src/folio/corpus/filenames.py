"""Filename conventions for posts and drafts.

Posts are named ``YYYY-MM-DD-slug.md``; the prefix is the publication date.
Drafts are named ``slug.md``.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import TYPE_CHECKING

from folio.corpus.exceptions import InvalidPostFilenameError, UniqueFilenameError
from folio.utils.paths import safe_path_join

if TYPE_CHECKING:
    from pathlib import Path

MARKDOWN_SUFFIXES = (".md", ".markdown")
_DATE_PREFIX = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$")


def is_markdown(name: str) -> bool:
    return name.lower().endswith(MARKDOWN_SUFFIXES)


def _stem(name: str) -> str:
    for suffix in MARKDOWN_SUFFIXES:
        if name.lower().endswith(suffix):
            return name[: -len(suffix)]
    return name


def parse_post_filename(name: str) -> tuple[date, str]:
    """Return the publication date and slug encoded in a post filename.

    Raises:
        InvalidPostFilenameError: If the name is not Markdown or lacks a valid date prefix.

    Examples:
        >>> parse_post_filename("2021-03-14-feature-flags.md")
        (datetime.date(2021, 3, 14), 'feature-flags')

    """
    if not is_markdown(name):
        raise InvalidPostFilenameError(name, "not a Markdown file")

    match = _DATE_PREFIX.match(_stem(name))
    if not match:
        raise InvalidPostFilenameError(name, "expected a YYYY-MM-DD- prefix")

    try:
        published = datetime.strptime(match.group("date"), "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidPostFilenameError(name, f"'{match.group('date')}' is not a calendar date") from e

    return published, match.group("slug")


def draft_slug(name: str) -> str:
    """Slug of a draft file; a leading date prefix is ignored."""
    stem = _stem(name)
    match = _DATE_PREFIX.match(stem)
    return match.group("slug") if match else stem


def post_filename(published: date, slug: str) -> str:
    return f"{published.isoformat()}-{slug}.md"


def draft_filename(slug: str) -> str:
    return f"{slug}.md"


def resolve_unique_path(
    directory: Path, published: date, base_slug: str, max_attempts: int = 100
) -> tuple[Path, str]:
    """Resolve a unique post path and slug, handling collisions.

    Appends a numeric suffix to the slug if a file with the same name already exists.

    Returns:
        A tuple containing the unique Path object and the final resolved slug.

    Raises:
        UniqueFilenameError: If a unique filename cannot be found after max_attempts.

    """
    filepath = safe_path_join(directory, post_filename(published, base_slug))
    if not filepath.exists():
        return filepath, base_slug

    for i in range(2, max_attempts + 2):
        slug_candidate = f"{base_slug}-{i}"
        filepath = safe_path_join(directory, post_filename(published, slug_candidate))
        if not filepath.exists():
            return filepath, slug_candidate

    raise UniqueFilenameError(base_slug, max_attempts)


__all__ = [
    "MARKDOWN_SUFFIXES",
    "draft_filename",
    "draft_slug",
    "is_markdown",
    "parse_post_filename",
    "post_filename",
    "resolve_unique_path",
]
