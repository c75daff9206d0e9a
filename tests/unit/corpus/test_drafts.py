from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
import yaml

from folio.config import FolioConfig
from folio.corpus import (
    Corpus,
    DocumentNotFoundError,
    DraftExistsError,
    MissingMetadataError,
    create_draft,
    demote_post,
    promote_draft,
)
from folio.corpus.drafts import with_default_layout


def test_create_draft_writes_front_matter(site: Path, config: FolioConfig):
    draft = create_draft(site, config, "Records in Java 16", tags=["java"], toc=True)

    assert draft.path == (site / "_drafts" / "records-in-java-16.md").resolve()
    assert draft.slug == "records-in-java-16"
    front = yaml.safe_load(draft.path.read_text(encoding="utf-8").split("---\n")[1])
    assert front == {"layout": "post", "title": "Records in Java 16", "tags": ["java"], "toc": True}

    reloaded = Corpus.load(site, config).get_draft("records-in-java-16")
    assert reloaded.title == "Records in Java 16"


def test_create_draft_with_explicit_slug_and_body(site: Path, config: FolioConfig):
    draft = create_draft(site, config, "A long title", slug="Short One", body="Hello.\n")

    assert draft.path.name == "short-one.md"
    assert draft.path.read_text(encoding="utf-8").endswith("\n\nHello.\n")


def test_create_draft_refuses_to_overwrite(site: Path, config: FolioConfig):
    with pytest.raises(DraftExistsError):
        create_draft(site, config, "Trunk-based development")


def test_promote_draft_moves_file_and_keeps_content(site: Path, config: FolioConfig):
    draft_path = site / "_drafts" / "trunk-based-development.md"
    original = draft_path.read_text(encoding="utf-8")

    post = promote_draft(site, config, "trunk-based-development", on=date(2022, 1, 5))

    assert not draft_path.exists()
    assert post.path.name == "2022-01-05-trunk-based-development.md"
    assert post.path.parent == (site / "_posts").resolve()
    assert post.path.read_text(encoding="utf-8") == original
    assert post.date == date(2022, 1, 5)
    assert post.title == "Trunk-based development"


def test_promote_adds_missing_layout(site: Path, config: FolioConfig, write_md):
    write_md(site / "_drafts" / "no-layout.md", {"title": "No layout"}, "Body\n")

    post = promote_draft(site, config, "no-layout", on=date(2022, 1, 5))

    assert post.path.read_text(encoding="utf-8").startswith("---\nlayout: post\ntitle: No layout\n---\n")
    assert post.metadata.layout == "post"


def test_promote_requires_title(site: Path, config: FolioConfig, write_md):
    write_md(site / "_drafts" / "untitled.md", {"tags": ["x"]}, "Body\n")

    with pytest.raises(MissingMetadataError) as excinfo:
        promote_draft(site, config, "untitled")

    assert excinfo.value.missing_keys == ["title"]
    assert (site / "_drafts" / "untitled.md").exists()


def test_promote_resolves_slug_collisions(site: Path, config: FolioConfig, write_md):
    write_md(site / "_posts" / "2022-01-05-trunk-based-development.md", {"title": "Older"}, "Body\n")

    post = promote_draft(site, config, "trunk-based-development", on=date(2022, 1, 5))

    assert post.slug == "trunk-based-development-2"


def test_promote_unknown_draft(site: Path, config: FolioConfig):
    with pytest.raises(DocumentNotFoundError):
        promote_draft(site, config, "no-such-draft")


def test_demote_post(site: Path, config: FolioConfig):
    draft = demote_post(site, config, "feature-flags")

    assert draft.path.name == "feature-flags.md"
    assert not (site / "_posts" / "2021-03-14-feature-flags.md").exists()
    corpus = Corpus.load(site, config)
    assert corpus.get_draft("feature-flags").title == "Feature flags"
    assert [post.slug for post in corpus.posts] == ["sql-locking", "exception-handling"]


def test_demote_refuses_to_overwrite_a_draft(site: Path, config: FolioConfig, write_md):
    write_md(site / "_drafts" / "feature-flags.md", {"title": "Other"}, "Body\n")

    with pytest.raises(DraftExistsError):
        demote_post(site, config, "feature-flags")


def test_with_default_layout_leaves_existing_layout_alone():
    content = "---\nlayout: page\ntitle: A\n---\nBody\n"

    assert with_default_layout(content, "post") == content


def test_with_default_layout_without_front_matter():
    assert with_default_layout("Body\n", "post") == "---\nlayout: post\n---\n\nBody\n"


def test_with_default_layout_ignores_nested_layout_keys():
    content = "---\ntitle: A\nimage:\n  layout: wide\n---\nBody\n"

    assert with_default_layout(content, "post") == "---\nlayout: post\ntitle: A\nimage:\n  layout: wide\n---\nBody\n"


def test_promote_keeps_nested_layout_and_adds_top_level_one(site: Path, config: FolioConfig, write_md):
    write_md(site / "_drafts" / "gallery.md", {"title": "Gallery", "image": {"layout": "wide"}}, "Body\n")

    post = promote_draft(site, config, "gallery", on=date(2022, 1, 5))

    assert post.metadata.layout == "post"
    assert post.raw_metadata["image"] == {"layout": "wide"}
