"""Line-level scanner for Markdown bodies.

Only what the editorial checks need is recognised: fenced code blocks (also
inside list items), ATX and setext headings, inline links and images, reference
definitions, raw ``<img>`` tags and unfinished-section markers. Everything
inside a fenced block is opaque.

Heading anchors follow kramdown, the renderer behind the site generator.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

DEFAULT_TODO_MARKERS: tuple[str, ...] = ("TODO", "FIXME", "TBD")

_FENCE_OPEN = re.compile(r"^(?P<marker>`{3,}|~{3,})(?P<info>.*)$")
_LIST_ITEM = re.compile(r"^(?P<indent> *)(?P<bullet>[-+*]|\d{1,9}[.)])(?P<gap> +|$)")
_HEADING = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<text>.*?))?(?:[ \t]+#+)?[ \t]*$")
_SETEXT_UNDERLINE = re.compile(r"^ {0,3}(?P<char>=+|-+)[ \t]*$")
_INLINE_CODE = re.compile(r"(`+)(?:(?!\1).)+?\1")
_LINK_TARGET = r"\(\s*<?(?P<target>[^)\s>]*)>?(?:\s+(?:\"[^\"]*\"|'[^']*'))?\s*\)"
_IMAGE = re.compile(r"!\[(?P<text>[^\]]*)\]" + _LINK_TARGET)
_LINK = re.compile(r"(?<!!)\[(?P<text>[^\]]*)\]" + _LINK_TARGET)
_REFERENCE_DEF = re.compile(r"^ {0,3}\[(?P<text>[^\]]+)\]:\s*<?(?P<target>\S+?)>?(?:\s+.*)?$")
_HTML_IMG = re.compile(r"<img\b[^>]*?\bsrc\s*=\s*[\"'](?P<target>[^\"']+)[\"']", re.IGNORECASE)
_EMPHASIS = re.compile(r"[`*_]")
_ANCHOR_LEADING = re.compile(r"^[^a-zA-Z]+")
_ANCHOR_DROP = re.compile(r"[^a-zA-Z0-9 -]")


@dataclass(frozen=True, slots=True)
class Heading:
    line: int
    level: int
    text: str

    @property
    def anchor(self) -> str:
        return heading_anchor(self.text)


@dataclass(frozen=True, slots=True)
class Link:
    line: int
    target: str
    text: str


@dataclass(frozen=True, slots=True)
class Fence:
    line: int
    marker: str
    info: str
    closed: bool


@dataclass(frozen=True, slots=True)
class TodoMarker:
    line: int
    marker: str
    text: str


@dataclass(slots=True)
class MarkdownScan:
    """Everything ``scan_markdown`` found, with 1-based line numbers."""

    headings: list[Heading] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    images: list[Link] = field(default_factory=list)
    fences: list[Fence] = field(default_factory=list)
    todos: list[TodoMarker] = field(default_factory=list)

    @property
    def unclosed_fences(self) -> list[Fence]:
        return [fence for fence in self.fences if not fence.closed]

    @property
    def code_languages(self) -> set[str]:
        return {fence.info.split()[0] for fence in self.fences if fence.info.strip()}


def heading_anchor(text: str) -> str:
    """Return the id kramdown gives a heading with ``text``.

    Everything before the first ASCII letter is dropped, then every character
    other than ASCII letters, digits, spaces and hyphens; each space becomes a
    hyphen. Duplicates are handled by ``unique_anchors``.

    Examples:
        >>> heading_anchor("1. Introduction")
        'introduction'
        >>> heading_anchor("Using `Optional`")
        'using-optional'

    """
    anchor = _ANCHOR_LEADING.sub("", _EMPHASIS.sub("", text))
    anchor = _ANCHOR_DROP.sub("", anchor)
    return anchor.replace(" ", "-").lower() or "section"


def unique_anchors(headings: Iterable[Heading]) -> list[str]:
    """Anchors for ``headings`` in order, de-duplicated with ``-1``, ``-2`` suffixes."""
    seen: dict[str, int] = {}
    anchors = []
    for heading in headings:
        anchor = heading.anchor
        if anchor in seen:
            seen[anchor] += 1
            anchor = f"{anchor}-{seen[anchor]}"
        else:
            seen[anchor] = 0
        anchors.append(anchor)
    return anchors


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _relative_indent(line: str, container: int) -> int:
    """Indentation of ``line`` measured from the content column of its list item."""
    indent = _indent(line)
    return indent - container if indent >= container else indent


def _closes(line: str, marker: str, container: int) -> bool:
    stripped = line.strip()
    if not stripped or stripped[0] != marker[0]:
        return False
    if _relative_indent(line, container) > 3:
        return False
    return set(stripped) == {marker[0]} and len(stripped) >= len(marker)


def _fence_opening(text: str) -> tuple[str, str] | None:
    match = _FENCE_OPEN.match(text)
    if not match:
        return None
    marker = match.group("marker")
    info = match.group("info").strip()
    # A backtick fence's info string cannot itself contain backticks.
    if marker[0] == "`" and "`" in info:
        return None
    return marker, info


def _todo_pattern(markers: Sequence[str]) -> re.Pattern[str] | None:
    if not markers:
        return None
    alternatives = "|".join(re.escape(marker) for marker in markers)
    return re.compile(rf"\b(?P<marker>{alternatives})\b")


class _ListContainers:
    """Content columns of the list items enclosing the current line."""

    def __init__(self) -> None:
        self._columns: list[int] = []

    @property
    def column(self) -> int:
        return self._columns[-1] if self._columns else 0

    def enter_item(self, match: re.Match[str]) -> int:
        indent = len(match.group("indent"))
        gap = len(match.group("gap"))
        # Five or more spaces after the bullet start an indented code block inside the item.
        column = indent + len(match.group("bullet")) + (gap if 1 <= gap <= 4 else 1)
        while self._columns and self._columns[-1] > indent:
            self._columns.pop()
        self._columns.append(column)
        return column

    def leave_to(self, indent: int) -> None:
        while self._columns and self._columns[-1] > indent:
            self._columns.pop()


def scan_markdown(body: str, *, todo_markers: Sequence[str] = DEFAULT_TODO_MARKERS) -> MarkdownScan:
    """Scan ``body`` once and collect headings, links, images, fences and TODO markers."""
    result = MarkdownScan()
    todo_re = _todo_pattern(todo_markers)

    lists = _ListContainers()
    open_fence: tuple[int, str, str, int] | None = None
    paragraph: tuple[int, str] | None = None
    previous_blank = True

    for number, line in enumerate(body.splitlines(), start=1):
        if open_fence is not None:
            start, marker, info, container = open_fence
            if _closes(line, marker, container):
                result.fences.append(Fence(start, marker, info, closed=True))
                open_fence = None
            continue

        if not line.strip():
            previous_blank = True
            paragraph = None
            continue

        item = _LIST_ITEM.match(line)
        if item and not _SETEXT_UNDERLINE.match(line):
            column = lists.enter_item(item)
            opening = _fence_opening(line[column:])
            if opening:
                open_fence = (number, *opening, column)
                previous_blank = False
                paragraph = None
                continue
        elif previous_blank:
            lists.leave_to(_indent(line))

        if _relative_indent(line, lists.column) <= 3:
            opening = _fence_opening(line.lstrip(" "))
            if opening:
                open_fence = (number, *opening, lists.column)
                previous_blank = False
                paragraph = None
                continue

        underline = _SETEXT_UNDERLINE.match(line)
        if underline and paragraph is not None:
            para_line, text = paragraph
            level = 1 if underline.group("char")[0] == "=" else 2
            result.headings.append(Heading(para_line, level, text))
            previous_blank = False
            paragraph = None
            continue

        previous_blank = False
        paragraph = None

        heading_match = _HEADING.match(line)
        if heading_match:
            text = (heading_match.group("text") or "").strip()
            result.headings.append(Heading(number, len(heading_match.group("hashes")), text))

        reference = _REFERENCE_DEF.match(line)
        if reference:
            result.links.append(Link(number, reference.group("target"), reference.group("text")))
            continue

        if not heading_match and not item and _indent(line) <= 3:
            paragraph = (number, line.strip())

        prose = _INLINE_CODE.sub(lambda m: " " * len(m.group(0)), line)

        for match in _IMAGE.finditer(prose):
            result.images.append(Link(number, match.group("target"), match.group("text")))
        for match in _HTML_IMG.finditer(prose):
            result.images.append(Link(number, match.group("target"), ""))
        for match in _LINK.finditer(prose):
            result.links.append(Link(number, match.group("target"), match.group("text")))

        if todo_re is not None:
            todo = todo_re.search(prose)
            if todo:
                result.todos.append(TodoMarker(number, todo.group("marker"), line.strip()))

    if open_fence is not None:
        start, marker, info, _ = open_fence
        result.fences.append(Fence(start, marker, info, closed=False))

    return result


__all__ = [
    "DEFAULT_TODO_MARKERS",
    "Fence",
    "Heading",
    "Link",
    "MarkdownScan",
    "TodoMarker",
    "heading_anchor",
    "scan_markdown",
    "unique_anchors",
]
