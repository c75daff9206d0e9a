"""Pydantic models for ``.folio/config.yml``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_POSTS_DIR = "_posts"
DEFAULT_DRAFTS_DIR = "_drafts"
DEFAULT_TAGS_PAGE = "tags.md"
DEFAULT_LAYOUT = "post"
DEFAULT_LAYOUTS = ["post", "page", "default"]
DEFAULT_TODO_MARKERS = ["TODO", "FIXME", "TBD"]


class PathsConfig(BaseModel):
    """Where the corpus lives, relative to the site root."""

    model_config = ConfigDict(extra="forbid")

    posts: str = Field(default=DEFAULT_POSTS_DIR, description="Folder holding finished posts")
    drafts: str = Field(default=DEFAULT_DRAFTS_DIR, description="Folder holding unfinished posts")
    tags_page: str = Field(default=DEFAULT_TAGS_PAGE, description="Generated tags index page")

    @field_validator("posts", "drafts", "tags_page")
    @classmethod
    def validate_relative(cls, v: str) -> str:
        """Paths must be non-empty and relative to the site root."""
        cleaned = v.strip()
        if not cleaned:
            msg = "path must not be empty"
            raise ValueError(msg)
        if cleaned.startswith("/") or ".." in cleaned.split("/"):
            msg = f"path must stay inside the site root: {v!r}"
            raise ValueError(msg)
        return cleaned


class SiteConfig(BaseModel):
    """Settings shared with the static-site generator."""

    model_config = ConfigDict(extra="forbid")

    default_layout: str = Field(default=DEFAULT_LAYOUT, description="Layout written into new drafts")
    layouts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LAYOUTS),
        description="Layouts the generator knows about",
    )

    @field_validator("layouts")
    @classmethod
    def validate_layouts(cls, v: list[str]) -> list[str]:
        if not v:
            msg = "at least one layout is required"
            raise ValueError(msg)
        return v


class LintConfig(BaseModel):
    """Editorial lint settings."""

    model_config = ConfigDict(extra="forbid")

    require_tags: bool = Field(default=False, description="Warn about posts without tags")
    disabled: list[str] = Field(default_factory=list, description="Rule codes to skip, e.g. ['MD002']")
    todo_markers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TODO_MARKERS),
        description="Words that mark an unfinished section",
    )

    @field_validator("disabled")
    @classmethod
    def normalize_codes(cls, v: list[str]) -> list[str]:
        return [code.strip().upper() for code in v if code.strip()]


class FolioConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    paths: PathsConfig = Field(default_factory=PathsConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    lint: LintConfig = Field(default_factory=LintConfig)

    @model_validator(mode="after")
    def validate_cross_field(self) -> FolioConfig:
        """New drafts must get a layout the generator knows."""
        if self.site.default_layout not in self.site.layouts:
            msg = (
                f"site.default_layout '{self.site.default_layout}' is not one of site.layouts "
                f"({', '.join(self.site.layouts)}). Add it to site.layouts or pick a listed layout."
            )
            raise ValueError(msg)
        return self


__all__ = [
    "DEFAULT_DRAFTS_DIR",
    "DEFAULT_LAYOUT",
    "DEFAULT_POSTS_DIR",
    "FolioConfig",
    "LintConfig",
    "PathsConfig",
    "SiteConfig",
]
