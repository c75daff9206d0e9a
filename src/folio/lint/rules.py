"""Editorial lint rules.

Each rule is a generator taking a document and a ``LintContext`` and yielding
findings. Rules only read; nothing here touches the files.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date, datetime
from functools import cached_property
from pathlib import Path
from typing import Any
from urllib.parse import unquote

from folio.config.schema import FolioConfig
from folio.corpus.models import Document, Post
from folio.lint.findings import Finding, Severity
from folio.markdown.scan import MarkdownScan, scan_markdown

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
_DATE = re.compile(r"(\d{4}-\d{2}-\d{2})")
_PAGE_SUFFIXES = {"", ".html", ".htm"}


@dataclass
class LintContext:
    """Per-document state shared by the rules."""

    document: Document
    config: FolioConfig
    site_root: Path

    @cached_property
    def scan(self) -> MarkdownScan:
        return scan_markdown(self.document.body, todo_markers=self.config.lint.todo_markers)

    def finding(self, rule: Rule, line: int, message: str) -> Finding:
        return Finding(rule.code, rule.severity, self.document.path, line, message)


@dataclass(frozen=True, slots=True)
class Rule:
    code: str
    severity: Severity
    summary: str
    check: Callable[[LintContext, Rule], Iterator[Finding]]
    posts_only: bool = False
    skip_drafts: bool = False


def check_frontmatter_present(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    """A document without a front matter block is copied verbatim by the generator."""
    if not ctx.document.has_frontmatter:
        yield ctx.finding(rule, 1, "no front matter block; the file will not be rendered as a post")


def check_title(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    if ctx.document.has_frontmatter and not ctx.document.metadata.title:
        yield ctx.finding(rule, ctx.document.key_line("title"), "missing or empty 'title'")


def check_tags(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    raw = ctx.document.raw_metadata.get("tags")
    line = ctx.document.key_line("tags")

    if raw is not None:
        if isinstance(raw, str):
            yield ctx.finding(rule, line, "'tags' should be a YAML list, not a string")
        elif not isinstance(raw, list):
            yield ctx.finding(rule, line, f"'tags' should be a YAML list, not {type(raw).__name__}")
        else:
            bad = [item for item in raw if not isinstance(item, str) or not item.strip()]
            if bad:
                yield ctx.finding(rule, line, f"'tags' contains non-text or empty entries: {bad!r}")
            seen: set[str] = set()
            for item in raw:
                if isinstance(item, str) and item.strip() in seen:
                    yield ctx.finding(rule, line, f"duplicate tag '{item.strip()}'")
                if isinstance(item, str):
                    seen.add(item.strip())

    if ctx.config.lint.require_tags and ctx.document.has_frontmatter and not ctx.document.tags:
        yield ctx.finding(rule, line, "post has no tags")


def check_layout(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    layout = ctx.document.metadata.layout
    known = ctx.config.site.layouts
    if layout is not None and layout not in known:
        yield ctx.finding(
            rule,
            ctx.document.key_line("layout"),
            f"unknown layout '{layout}' (expected one of: {', '.join(known)})",
        )


def _is_redirect_target(url: str) -> bool:
    return url.startswith(("http://", "https://", "/"))


def check_redirect(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    metadata = ctx.document.metadata
    if bool(metadata.new_url) != bool(metadata.new_title):
        present, missing = ("new_url", "new_title") if metadata.new_url else ("new_title", "new_url")
        yield ctx.finding(rule, ctx.document.key_line(present), f"'{present}' is set but '{missing}' is not")
    if metadata.new_url and not _is_redirect_target(metadata.new_url):
        yield ctx.finding(
            rule,
            ctx.document.key_line("new_url"),
            f"'new_url' must be an http(s) URL or an absolute path, got '{metadata.new_url}'",
        )


def _frontmatter_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    match = _DATE.search(str(value))
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d").date()
    except ValueError:
        return None


def check_date_matches_filename(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    document = ctx.document
    if not isinstance(document, Post) or "date" not in document.raw_metadata:
        return
    declared = _frontmatter_date(document.raw_metadata["date"])
    line = document.key_line("date")
    if declared is None:
        yield ctx.finding(rule, line, f"cannot read 'date: {document.raw_metadata['date']}'")
    elif declared != document.date:
        yield ctx.finding(
            rule,
            line,
            f"front matter date {declared.isoformat()} differs from filename date {document.date.isoformat()}",
        )


def check_fences(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    for fence in ctx.scan.unclosed_fences:
        label = f" ({fence.info})" if fence.info else ""
        yield ctx.finding(
            rule,
            ctx.document.file_line(fence.line),
            f"code block opened with '{fence.marker}'{label} is never closed",
        )


def check_todos(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    for todo in ctx.scan.todos:
        yield ctx.finding(rule, ctx.document.file_line(todo.line), f"unfinished section marker '{todo.marker}'")


def _local_target(target: str) -> str | None:
    """The file part of a link target, or None when it is not a local file reference."""
    if not target:
        return None
    if target.startswith(("#", "//")) or _SCHEME.match(target) or "{" in target:
        return None
    path = target.split("#", 1)[0].split("?", 1)[0]
    return unquote(path) or None


def resolve_target(document: Document, site_root: Path, target: str) -> Path:
    """Where ``target`` points on disk: absolute paths from the site root, others from the file."""
    if target.startswith("/"):
        return site_root / target.lstrip("/")
    return document.path.parent / target


def check_local_references(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    """Images must exist; links are checked only when they name a file rather than a page URL."""
    for image in ctx.scan.images:
        local = _local_target(image.target)
        if local is None:
            if not image.target:
                yield ctx.finding(rule, ctx.document.file_line(image.line), "image has an empty target")
            continue
        if not resolve_target(ctx.document, ctx.site_root, local).is_file():
            yield ctx.finding(rule, ctx.document.file_line(image.line), f"image '{image.target}' not found")

    for link in ctx.scan.links:
        local = _local_target(link.target)
        if local is None:
            if not link.target:
                yield ctx.finding(rule, ctx.document.file_line(link.line), f"link '{link.text}' has an empty target")
            continue
        if local.endswith("/") or Path(local).suffix.lower() in _PAGE_SUFFIXES:
            continue
        if not resolve_target(ctx.document, ctx.site_root, local).exists():
            yield ctx.finding(rule, ctx.document.file_line(link.line), f"link target '{link.target}' not found")


def check_toc_has_headings(ctx: LintContext, rule: Rule) -> Iterator[Finding]:
    if ctx.document.metadata.toc and not ctx.scan.headings:
        yield ctx.finding(rule, ctx.document.key_line("toc"), "'toc: true' but the body has no headings")


RULES: tuple[Rule, ...] = (
    Rule("FM001", Severity.ERROR, "front matter is missing or malformed", check_frontmatter_present),
    Rule("FM002", Severity.ERROR, "post has no title", check_title),
    Rule("FM003", Severity.WARNING, "tags are not a clean list", check_tags),
    Rule("FM004", Severity.WARNING, "unknown layout", check_layout),
    Rule("FM005", Severity.ERROR, "incomplete or invalid redirect metadata", check_redirect),
    Rule("FN003", Severity.WARNING, "front matter date differs from filename", check_date_matches_filename,
         posts_only=True),
    Rule("MD001", Severity.ERROR, "unclosed code fence", check_fences),
    Rule("MD002", Severity.WARNING, "unfinished section marker", check_todos, skip_drafts=True),
    Rule("MD003", Severity.ERROR, "broken relative link or image", check_local_references),
    Rule("MD004", Severity.WARNING, "toc requested without headings", check_toc_has_headings),
)

CORPUS_RULES: dict[str, tuple[Severity, str]] = {
    "FN001": (Severity.ERROR, "post filename lacks a valid YYYY-MM-DD- prefix"),
    "FN002": (Severity.ERROR, "duplicate post slug"),
}


def severity_of(code: str) -> Severity | None:
    for rule in RULES:
        if rule.code == code:
            return rule.severity
    if code in CORPUS_RULES:
        return CORPUS_RULES[code][0]
    return None


def rule_catalog() -> list[tuple[str, Severity, str]]:
    """Every rule code with its severity and summary, sorted by code."""
    catalog = [(rule.code, rule.severity, rule.summary) for rule in RULES]
    catalog.extend((code, severity, summary) for code, (severity, summary) in CORPUS_RULES.items())
    return sorted(catalog)


__all__ = ["CORPUS_RULES", "RULES", "LintContext", "Rule", "resolve_target", "rule_catalog", "severity_of"]
