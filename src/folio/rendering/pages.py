"""Render the tags index and per-post tables of contents.

Links to posts use the generator's ``post_url`` tag so permalinks stay the
generator's business.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, PackageLoader, select_autoescape

from folio.corpus.exceptions import FileWriteError
from folio.markdown.frontmatter import dump_frontmatter, read_frontmatter_only
from folio.markdown.scan import Heading, scan_markdown, unique_anchors
from folio.utils.paths import safe_path_join

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from folio.corpus.models import Post
    from folio.corpus.store import Corpus

logger = logging.getLogger(__name__)


def post_url(post: Post) -> str:
    """Liquid reference the generator resolves to the post's permalink."""
    return f"{{% post_url {post.path.stem} %}}"


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("folio.rendering", "templates"),
        autoescape=select_autoescape(enabled_extensions=()),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["post_url"] = post_url
    return env


DEFAULT_TAGS_FRONT_MATTER: dict[str, Any] = {"layout": "page", "title": "Tags"}


def render_tags_page(
    corpus: Corpus,
    *,
    layout: str = "page",
    front_matter: Mapping[str, Any] | None = None,
) -> str:
    """Markdown page listing every tag with its posts, newest first.

    ``front_matter`` replaces the default ``layout``/``title`` block; ``layout``
    is only used when it carries no ``layout`` key.
    """
    index = corpus.tag_index()
    anchors = unique_anchors(Heading(0, 2, name) for name in index)
    tags = [
        {
            "name": name,
            "anchor": anchor,
            "count": len(posts),
            "posts": posts,
        }
        for (name, posts), anchor in zip(index.items(), anchors, strict=True)
    ]
    metadata = {**DEFAULT_TAGS_FRONT_MATTER, "layout": layout, **(front_matter or {})}
    template = _environment().get_template("tags.md.jinja")
    return template.render(tags=tags, front_matter=dump_frontmatter(metadata, ""))


def write_tags_page(corpus: Corpus) -> Path:
    """Render the tags page and write it to the configured path under the site root.

    Front matter already present in that file (a ``permalink``, a custom
    ``title``) is carried over.
    """
    path = safe_path_join(corpus.site_root, corpus.config.paths.tags_page)
    existing = read_frontmatter_only(path) if path.is_file() else {}
    content = render_tags_page(corpus, front_matter=existing)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(str(path), e) from e
    logger.info("Wrote tags page with %d tags to %s", len(corpus.tag_index()), path)
    return path


def render_toc(post: Post, *, max_level: int = 3) -> str:
    """Nested Markdown list linking to the post's headings.

    Headings deeper than ``max_level`` are left out. Returns an empty string when
    the post has no headings.
    """
    headings = scan_markdown(post.body).headings
    if not headings:
        return ""

    anchors = unique_anchors(headings)
    shown = [(h, a) for h, a in zip(headings, anchors, strict=True) if h.level <= max_level]
    if not shown:
        return ""

    top = min(h.level for h, _ in shown)
    lines = [f"{'  ' * (h.level - top)}- [{h.text}](#{anchor})" for h, anchor in shown]
    return "\n".join(lines) + "\n"
