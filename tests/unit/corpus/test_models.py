from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from folio.corpus.models import Document, DocumentType, Draft, Post, PostMetadata


def test_tags_string_is_split_on_whitespace_and_deduplicated():
    assert PostMetadata(tags="java sql java").tags == ["java", "sql"]


def test_tags_null_and_junk_entries():
    assert PostMetadata(tags=None).tags == []
    assert PostMetadata(tags=[1, "a", None, "  ", "a"]).tags == ["1", "a"]


def test_tags_mapping_is_rejected():
    with pytest.raises(ValidationError):
        PostMetadata(tags={"java": True})


def test_text_fields_are_coerced_and_blank_becomes_none():
    metadata = PostMetadata(title=42, layout="  ")

    assert metadata.title == "42"
    assert metadata.layout is None


def test_toc_null_is_false():
    assert PostMetadata(toc=None).toc is False
    assert PostMetadata(toc=True).toc is True


def test_unknown_keys_are_kept():
    metadata = PostMetadata(title="x", permalink="/x/", comments=False)

    assert metadata.extra_fields == {"permalink": "/x/", "comments": False}


def test_redirect_flag():
    assert PostMetadata(new_url="https://example.com", new_title="Moved").is_redirect
    assert not PostMetadata().is_redirect


def test_post_and_draft_types(tmp_path: Path):
    metadata = PostMetadata(title="Feature flags")
    post = Post(path=tmp_path / "p.md", slug="feature-flags", date=date(2021, 3, 14), metadata=metadata, body="")
    draft = Draft(path=tmp_path / "d.md", slug="trunk", metadata=PostMetadata(), body="")

    assert post.doc_type is DocumentType.POST
    assert not post.is_draft
    assert draft.is_draft
    assert draft.title == "trunk"


def test_key_line_and_file_line(tmp_path: Path):
    post = Post(
        path=tmp_path / "p.md",
        slug="p",
        date=date(2021, 1, 1),
        metadata=PostMetadata(),
        body="",
        frontmatter_text="layout: post\ntitle: A\ntags:\n- java\n",
        body_start_line=7,
    )

    assert post.key_line("title") == 3
    assert post.key_line("tags") == 4
    assert post.key_line("missing") == 1
    assert post.file_line(1) == 7


def test_document_cannot_be_created_directly(tmp_path: Path):
    with pytest.raises(TypeError, match="abstract"):
        Document(path=tmp_path / "a.md", slug="a", metadata=PostMetadata(), body="")
