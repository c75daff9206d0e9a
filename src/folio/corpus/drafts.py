"""Creating drafts and moving documents between the drafts and posts folders.

Promotion and demotion relocate the file; its bytes are kept as they are except
for a ``layout`` line added when the front matter has none.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from folio.corpus.exceptions import (
    DirectoryCreationError,
    DraftExistsError,
    FileWriteError,
    MissingMetadataError,
)
from folio.corpus.filenames import draft_filename, resolve_unique_path
from folio.corpus.models import Draft, Post, PostMetadata
from folio.corpus.store import Corpus, load_post
from folio.markdown.frontmatter import dump_frontmatter, parse_frontmatter, split_frontmatter
from folio.utils.paths import safe_path_join, slugify

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from folio.config.schema import FolioConfig

logger = logging.getLogger(__name__)

DRAFT_BODY_PLACEHOLDER = "Write the introduction here.\n"


def _ensure_dir(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(str(directory), e) from e


def _write(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(str(path), e) from e


def with_default_layout(content: str, layout: str) -> str:
    """Insert ``layout: <layout>`` at the top of the front matter unless a top-level ``layout`` key exists."""
    block = split_frontmatter(content)
    if block.raw is None:
        return dump_frontmatter({"layout": layout}, content)
    metadata, _ = parse_frontmatter(content)
    if "layout" in metadata:
        return content
    first_newline = content.index("\n") + 1
    return f"{content[:first_newline]}layout: {layout}\n{content[first_newline:]}"


def create_draft(
    site_root: Path,
    config: FolioConfig,
    title: str,
    *,
    tags: Iterable[str] = (),
    toc: bool = False,
    slug: str | None = None,
    body: str | None = None,
) -> Draft:
    """Write a new draft under the drafts folder.

    Raises:
        DraftExistsError: If a draft with the same slug already exists.

    """
    metadata = PostMetadata(layout=config.site.default_layout, title=title, tags=list(tags), toc=toc)
    final_slug = slugify(slug or title)

    drafts_dir = site_root / config.paths.drafts
    _ensure_dir(drafts_dir)
    path = safe_path_join(drafts_dir, draft_filename(final_slug))
    if path.exists():
        raise DraftExistsError(str(path))

    front_matter = metadata.model_dump(include={"layout", "title", "tags", "toc"})
    content = dump_frontmatter(front_matter, body if body is not None else DRAFT_BODY_PLACEHOLDER)
    _write(path, content)
    logger.info("Created draft %s", path)

    block = split_frontmatter(content)
    return Draft(
        path=path,
        slug=final_slug,
        metadata=metadata,
        body=block.body,
        raw_metadata=front_matter,
        frontmatter_text=block.raw,
        body_start_line=block.body_start_line,
    )


def promote_draft(
    site_root: Path,
    config: FolioConfig,
    slug: str,
    *,
    on: date | None = None,
) -> Post:
    """Move a draft into the posts folder as ``<date>-<slug>.md``.

    Raises:
        DocumentNotFoundError: If no draft has ``slug``.
        MissingMetadataError: If the draft has no title.

    """
    corpus = Corpus.load(site_root, config)
    draft = corpus.get_draft(slug)
    if not draft.metadata.title:
        raise MissingMetadataError(draft.slug, ["title"])

    published = on or date.today()
    _ensure_dir(corpus.posts_dir)
    target, final_slug = resolve_unique_path(corpus.posts_dir, published, draft.slug)
    if final_slug != draft.slug:
        logger.warning("A post named %s already exists; promoting as %s", draft.slug, final_slug)

    content = draft.path.read_text(encoding="utf-8")
    _write(target, with_default_layout(content, config.site.default_layout))
    draft.path.unlink()
    logger.info("Promoted %s to %s", draft.path.name, target)

    return load_post(target)


def demote_post(site_root: Path, config: FolioConfig, slug: str) -> Draft:
    """Move a post back under the drafts folder as ``<slug>.md``.

    Raises:
        DocumentNotFoundError: If no post has ``slug``.
        DraftExistsError: If a draft with the same slug already exists.

    """
    corpus = Corpus.load(site_root, config)
    post = corpus.get_post(slug)

    _ensure_dir(corpus.drafts_dir)
    target = safe_path_join(corpus.drafts_dir, draft_filename(post.slug))
    if target.exists():
        raise DraftExistsError(str(target))

    try:
        post.path.rename(target)
    except OSError as e:
        raise FileWriteError(str(target), e) from e
    logger.info("Moved %s back to drafts as %s", post.path.name, target.name)

    return Draft(
        path=target,
        slug=post.slug,
        metadata=post.metadata,
        body=post.body,
        raw_metadata=post.raw_metadata,
        has_frontmatter=post.has_frontmatter,
        frontmatter_text=post.frontmatter_text,
        body_start_line=post.body_start_line,
    )


__all__ = ["create_draft", "demote_post", "promote_draft", "with_default_layout"]
