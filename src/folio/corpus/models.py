"""Posts, drafts and their front matter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentType(str, Enum):
    """Where a document sits in its lifecycle."""

    POST = "post"
    DRAFT = "draft"


class PostMetadata(BaseModel):
    """Front matter of a post or draft.

    Unknown keys are kept as extras so rewriting a file never drops them.
    """

    model_config = ConfigDict(extra="allow")

    layout: str | None = None
    title: str | None = None
    tags: list[str] = Field(default_factory=list)
    toc: bool = False
    new_url: str | None = None
    new_title: str | None = None

    @field_validator("layout", "title", "new_url", "new_title", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        if v is None:
            return None
        if isinstance(v, (dict, list)):
            msg = f"expected text, got {type(v).__name__}"
            raise ValueError(msg)
        text = str(v).strip()
        return text or None

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> list[str]:
        """Accept a list or a whitespace-separated string; drop blanks and duplicates."""
        if v is None:
            return []
        if isinstance(v, str):
            items: list[Any] = v.split()
        elif isinstance(v, (list, tuple, set)):
            items = list(v)
        else:
            msg = f"expected a list of tags, got {type(v).__name__}"
            raise ValueError(msg)

        tags: list[str] = []
        for item in items:
            if item is None or isinstance(item, (dict, list)):
                continue
            tag = str(item).strip()
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    @field_validator("toc", mode="before")
    @classmethod
    def coerce_toc(cls, v: Any) -> Any:
        return False if v is None else v

    @property
    def is_redirect(self) -> bool:
        return bool(self.new_url)

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


@dataclass(kw_only=True, slots=True)
class Document(ABC):
    """A Markdown file with front matter, as found on disk."""

    path: Path
    slug: str
    metadata: PostMetadata
    body: str
    raw_metadata: dict[str, Any] = field(default_factory=dict)
    has_frontmatter: bool = True
    frontmatter_text: str | None = None
    body_start_line: int = 1

    @property
    @abstractmethod
    def doc_type(self) -> DocumentType:
        """Whether this is a post or a draft."""

    @property
    def title(self) -> str:
        return self.metadata.title or self.slug

    @property
    def tags(self) -> list[str]:
        return self.metadata.tags

    @property
    def is_draft(self) -> bool:
        return self.doc_type is DocumentType.DRAFT

    def file_line(self, body_line: int) -> int:
        """Translate a 1-based line within ``body`` to a line in the file."""
        return self.body_start_line + body_line - 1

    def key_line(self, key: str) -> int:
        """Line of ``key:`` in the front matter block, or 1 when it is absent."""
        if self.frontmatter_text is None:
            return 1
        for offset, line in enumerate(self.frontmatter_text.splitlines()):
            if line.split(":", 1)[0].strip() == key:
                return offset + 2
        return 1


@dataclass(kw_only=True, slots=True)
class Post(Document):
    """A finished post; its publication date comes from the filename."""

    date: date

    @property
    def doc_type(self) -> DocumentType:
        return DocumentType.POST


@dataclass(kw_only=True, slots=True)
class Draft(Document):
    """An unfinished post kept under the drafts folder."""

    @property
    def doc_type(self) -> DocumentType:
        return DocumentType.DRAFT


__all__ = ["Document", "DocumentType", "Draft", "Post", "PostMetadata"]
