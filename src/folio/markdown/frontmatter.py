"""Helpers for parsing and writing YAML front matter in Markdown content."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from folio.markdown.exceptions import FrontmatterParsingError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_DELIMITER = re.compile(r"^-{3}\s*$")


@dataclass(frozen=True, slots=True)
class FrontmatterBlock:
    """Raw pieces of a document split at its front matter delimiters.

    ``body_start_line`` is the 1-based line number of the first body line in the
    original document, so positions found in ``body`` can be reported against the file.
    """

    raw: str | None
    body: str
    body_start_line: int

    @property
    def present(self) -> bool:
        return self.raw is not None


def split_frontmatter(content: str, *, source: str | None = None) -> FrontmatterBlock:
    """Split ``content`` into its raw YAML block and body without parsing the YAML.

    Raises:
        FrontmatterParsingError: If an opening ``---`` is never closed.

    """
    text = content.removeprefix("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or not _DELIMITER.match(lines[0]):
        return FrontmatterBlock(raw=None, body=text, body_start_line=1)

    for index, line in enumerate(lines[1:], start=1):
        if _DELIMITER.match(line):
            raw = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return FrontmatterBlock(raw=raw, body=body, body_start_line=index + 2)

    raise FrontmatterParsingError("opening '---' is never closed", source=source, line=1)


def load_frontmatter(content: str, *, source: str | None = None) -> tuple[dict[str, Any], str]:
    """Strictly parse front matter.

    Content without front matter yields an empty mapping and the content unchanged.

    Raises:
        FrontmatterParsingError: If the block is unterminated, not valid YAML, or not a mapping.

    """
    block = split_frontmatter(content, source=source)
    return parse_block(block, source=source), block.body


def parse_block(block: FrontmatterBlock, *, source: str | None = None) -> dict[str, Any]:
    if block.raw is None:
        return {}

    try:
        data = yaml.safe_load(block.raw)
    except yaml.YAMLError as exc:
        line = None
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            # +2: the opening delimiter line, and marks are 0-based
            line = mark.line + 2
        raise FrontmatterParsingError(str(exc).splitlines()[0], source=source, line=line) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"expected a mapping, got {type(data).__name__}"
        raise FrontmatterParsingError(msg, source=source, line=2)
    return {str(key): value for key, value in data.items()}


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Lenient counterpart of ``load_frontmatter``, built on python-frontmatter.

    A block that is not valid YAML or not a mapping is logged and treated as
    absent, giving ``({}, content)``.
    """
    try:
        document = frontmatter.loads(content.removeprefix("\ufeff"))
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        logger.warning("Ignoring unreadable front matter: %s", exc)
        return {}, content

    if not isinstance(document.metadata, dict):
        logger.warning("Ignoring front matter that is a %s, not a mapping", type(document.metadata).__name__)
        return {}, content
    return {str(key): value for key, value in document.metadata.items()}, document.content


def read_frontmatter_only(path: Path, *, encoding: str = "utf-8") -> dict[str, Any]:
    """Front matter of the file at ``path``, reading no further than its closing delimiter.

    A missing, unterminated or unreadable block gives an empty mapping.
    """
    block: list[str] = []
    try:
        with path.open(encoding=encoding) as f:
            if not _DELIMITER.match(f.readline().removeprefix("\ufeff")):
                return {}
            for line in f:
                if _DELIMITER.match(line):
                    break
                block.append(line)
            else:
                return {}
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read front matter from %s: %s", path, exc)
        return {}

    metadata, _ = parse_frontmatter("---\n" + "".join(block) + "---\n")
    return metadata


def dump_frontmatter(metadata: dict[str, Any], body: str) -> str:
    """Serialize ``metadata`` and ``body`` into a Markdown document."""
    yaml_front = yaml.dump(metadata, default_flow_style=False, allow_unicode=True, sort_keys=False)
    body = body.lstrip("\n")
    if body and not body.endswith("\n"):
        body += "\n"
    return f"---\n{yaml_front}---\n\n{body}"
