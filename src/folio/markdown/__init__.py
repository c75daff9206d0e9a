"""Markdown and front matter helpers."""

from folio.markdown.exceptions import FrontmatterParsingError, MarkdownError
from folio.markdown.frontmatter import (
    FrontmatterBlock,
    dump_frontmatter,
    load_frontmatter,
    parse_block,
    parse_frontmatter,
    read_frontmatter_only,
    split_frontmatter,
)
from folio.markdown.scan import Fence, Heading, Link, MarkdownScan, TodoMarker, heading_anchor, scan_markdown

__all__ = [
    "Fence",
    "FrontmatterBlock",
    "FrontmatterParsingError",
    "Heading",
    "Link",
    "MarkdownError",
    "MarkdownScan",
    "TodoMarker",
    "dump_frontmatter",
    "heading_anchor",
    "load_frontmatter",
    "parse_frontmatter",
    "parse_block",
    "read_frontmatter_only",
    "scan_markdown",
    "split_frontmatter",
]
