"""Exceptions raised while reading Markdown documents."""

from folio.exceptions import FolioError


class MarkdownError(FolioError):
    """Base class for Markdown handling errors."""


class FrontmatterParsingError(MarkdownError):
    """Raised when YAML front matter is invalid."""

    def __init__(self, reason: str, source: str | None = None, line: int | None = None) -> None:
        self.reason = reason
        self.source = source
        self.line = line
        where = f" in '{source}'" if source else ""
        at = f" (line {line})" if line else ""
        super().__init__(f"Invalid YAML front matter{where}{at}: {reason}")
