"""Loading a site directory into posts and drafts."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from folio.config.schema import FolioConfig
from folio.corpus.exceptions import DocumentNotFoundError, InvalidPostFilenameError
from folio.corpus.filenames import draft_slug, is_markdown, parse_post_filename
from folio.corpus.models import Document, Draft, Post, PostMetadata
from folio.markdown.exceptions import FrontmatterParsingError
from folio.markdown.frontmatter import FrontmatterBlock, parse_block, split_frontmatter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadProblem:
    """A file that could not be turned into a post or draft."""

    path: Path
    code: str
    message: str
    line: int | None = None


@dataclass(frozen=True, slots=True)
class _Parsed:
    block: FrontmatterBlock
    raw_metadata: dict
    metadata: PostMetadata


def _read_document(path: Path, problems: list[LoadProblem]) -> _Parsed | None:
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        problems.append(LoadProblem(path, "FM001", f"not valid UTF-8: {exc.reason}"))
        return None

    try:
        block = split_frontmatter(content, source=str(path))
        raw_metadata = parse_block(block, source=str(path))
    except FrontmatterParsingError as exc:
        problems.append(LoadProblem(path, "FM001", f"malformed front matter: {exc.reason}", exc.line))
        return None

    try:
        metadata = PostMetadata(**raw_metadata)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        problems.append(LoadProblem(path, "FM001", f"malformed front matter: {details}", 2))
        return None

    return _Parsed(block=block, raw_metadata=raw_metadata, metadata=metadata)


def load_post(path: Path) -> Post:
    """Load a single post file.

    Raises:
        InvalidPostFilenameError: If the filename has no valid date prefix
        FrontmatterParsingError: If the front matter cannot be parsed

    """
    problems: list[LoadProblem] = []
    published, slug = parse_post_filename(path.name)
    parsed = _read_document(path, problems)
    if parsed is None:
        problem = problems[0]
        raise FrontmatterParsingError(problem.message, source=str(path), line=problem.line)
    return _build_post(path, published, slug, parsed)


def _build_post(path: Path, published: date, slug: str, parsed: _Parsed) -> Post:
    return Post(
        path=path,
        slug=slug,
        date=published,
        metadata=parsed.metadata,
        body=parsed.block.body,
        raw_metadata=parsed.raw_metadata,
        has_frontmatter=parsed.block.present,
        frontmatter_text=parsed.block.raw,
        body_start_line=parsed.block.body_start_line,
    )


def _markdown_files(directory: Path, *, recursive: bool) -> list[Path]:
    if not directory.is_dir():
        return []
    candidates = directory.rglob("*") if recursive else directory.iterdir()
    return sorted(path for path in candidates if path.is_file() and is_markdown(path.name))


@dataclass
class Corpus:
    """All posts and drafts of one site.

    Files that cannot be loaded are kept in ``problems`` instead of raising, so a
    single broken post does not hide the rest of the corpus.
    """

    site_root: Path
    config: FolioConfig
    posts: list[Post] = field(default_factory=list)
    drafts: list[Draft] = field(default_factory=list)
    problems: list[LoadProblem] = field(default_factory=list)

    @property
    def posts_dir(self) -> Path:
        return self.site_root / self.config.paths.posts

    @property
    def drafts_dir(self) -> Path:
        return self.site_root / self.config.paths.drafts

    @classmethod
    def load(cls, site_root: Path, config: FolioConfig | None = None) -> Corpus:
        corpus = cls(site_root=site_root, config=config or FolioConfig())
        corpus._load_posts()
        corpus._load_drafts()
        corpus.posts.sort(key=lambda post: (post.date, post.path.name), reverse=True)
        corpus.drafts.sort(key=lambda draft: draft.slug)
        logger.debug(
            "Loaded %d posts and %d drafts from %s (%d problems)",
            len(corpus.posts),
            len(corpus.drafts),
            site_root,
            len(corpus.problems),
        )
        return corpus

    def _load_posts(self) -> None:
        for path in _markdown_files(self.posts_dir, recursive=True):
            try:
                published, slug = parse_post_filename(path.name)
            except InvalidPostFilenameError as exc:
                self.problems.append(LoadProblem(path, "FN001", exc.reason))
                continue

            parsed = _read_document(path, self.problems)
            if parsed is None:
                continue
            self.posts.append(_build_post(path, published, slug, parsed))

    def _load_drafts(self) -> None:
        for path in _markdown_files(self.drafts_dir, recursive=False):
            parsed = _read_document(path, self.problems)
            if parsed is None:
                continue
            self.drafts.append(
                Draft(
                    path=path,
                    slug=draft_slug(path.name),
                    metadata=parsed.metadata,
                    body=parsed.block.body,
                    raw_metadata=parsed.raw_metadata,
                    has_frontmatter=parsed.block.present,
                    frontmatter_text=parsed.block.raw,
                    body_start_line=parsed.block.body_start_line,
                )
            )

    def documents(self) -> Iterator[Document]:
        yield from self.posts
        yield from self.drafts

    def get_post(self, slug: str) -> Post:
        """Find a post by slug or by its full filename stem (``2020-01-01-slug``)."""
        for post in self.posts:
            if slug in (post.slug, post.path.stem):
                return post
        raise DocumentNotFoundError("post", slug)

    def get_draft(self, slug: str) -> Draft:
        for draft in self.drafts:
            if slug in (draft.slug, draft.path.stem):
                return draft
        raise DocumentNotFoundError("draft", slug)

    def tag_index(self) -> dict[str, list[Post]]:
        """Posts grouped by tag, newest first.

        Tags differing only in case are grouped under the first spelling seen.
        """
        spelling: dict[str, str] = {}
        index: dict[str, list[Post]] = {}
        for post in self.posts:
            for tag in post.tags:
                key = spelling.setdefault(tag.casefold(), tag)
                bucket = index.setdefault(key, [])
                if post not in bucket:
                    bucket.append(post)
        return {tag: index[tag] for tag in sorted(index, key=str.casefold)}

    def filter(self, *, tag: str | None = None, year: int | None = None) -> list[Post]:
        posts = self.posts
        if tag is not None:
            wanted = tag.casefold()
            posts = [post for post in posts if any(t.casefold() == wanted for t in post.tags)]
        if year is not None:
            posts = [post for post in posts if post.date.year == year]
        return posts


__all__ = ["Corpus", "LoadProblem", "load_post"]
