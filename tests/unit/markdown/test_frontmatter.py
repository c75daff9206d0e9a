from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from folio.markdown.exceptions import FrontmatterParsingError
from folio.markdown.frontmatter import (
    dump_frontmatter,
    load_frontmatter,
    parse_frontmatter,
    read_frontmatter_only,
    split_frontmatter,
)


def test_split_frontmatter_reports_where_the_body_starts():
    block = split_frontmatter("---\ntitle: A\n---\n\nBody\n")

    assert block.present
    assert block.raw == "title: A\n"
    assert block.body == "\nBody\n"
    assert block.body_start_line == 4


def test_split_frontmatter_without_block_returns_content_unchanged():
    block = split_frontmatter("Just prose.\n")

    assert not block.present
    assert block.body == "Just prose.\n"
    assert block.body_start_line == 1


def test_split_frontmatter_ignores_byte_order_mark():
    block = split_frontmatter("\ufeff---\ntitle: A\n---\nBody\n")

    assert block.raw == "title: A\n"


def test_load_frontmatter_returns_mapping_and_body():
    metadata, body = load_frontmatter("---\ntitle: Feature flags\ntags: [java]\n---\n\nBody\n")

    assert metadata == {"title": "Feature flags", "tags": ["java"]}
    assert body == "\nBody\n"


def test_load_frontmatter_empty_block_is_empty_mapping():
    metadata, body = load_frontmatter("---\n---\nBody\n")

    assert metadata == {}
    assert body == "Body\n"


def test_load_frontmatter_unclosed_block_raises():
    with pytest.raises(FrontmatterParsingError) as excinfo:
        load_frontmatter("---\ntitle: Never closed\n\nBody\n", source="post.md")

    assert excinfo.value.line == 1
    assert "never closed" in str(excinfo.value)
    assert "post.md" in str(excinfo.value)


def test_load_frontmatter_invalid_yaml_raises():
    with pytest.raises(FrontmatterParsingError):
        load_frontmatter("---\ntitle: [unclosed\n---\nBody\n")


def test_load_frontmatter_non_mapping_raises():
    with pytest.raises(FrontmatterParsingError, match="expected a mapping"):
        load_frontmatter("---\n- a\n- b\n---\nBody\n")


def test_parse_frontmatter_is_lenient_on_bad_yaml():
    content = "---\ntitle: [unclosed\n---\nBody\n"

    metadata, body = parse_frontmatter(content)

    assert metadata == {}
    assert body == content


def test_parse_frontmatter_valid():
    metadata, body = parse_frontmatter("---\ntitle: A\n---\nBody")

    assert metadata["title"] == "A"
    assert body == "Body"


def test_read_frontmatter_only(tmp_path: Path):
    path = tmp_path / "post.md"
    path.write_text("---\ntitle: A\ntoc: true\n---\n\n# Heading\n", encoding="utf-8")

    assert read_frontmatter_only(path) == {"title": "A", "toc": True}


def test_read_frontmatter_only_without_closing_delimiter(tmp_path: Path):
    path = tmp_path / "post.md"
    path.write_text("---\ntitle: A\n", encoding="utf-8")

    assert read_frontmatter_only(path) == {}


def test_dump_frontmatter_round_trips_through_yaml():
    metadata = {"layout": "post", "title": "Java: the good parts", "tags": ["java"]}

    content = dump_frontmatter(metadata, "Body")

    assert content.startswith("---\nlayout: post\n")
    assert content.endswith("\n\nBody\n")
    assert yaml.safe_load(content.split("---\n")[1]) == metadata


def test_parse_frontmatter_non_mapping_gives_empty_metadata():
    metadata, _ = parse_frontmatter("---\n- a\n- b\n---\nBody\n")

    assert metadata == {}


def test_parse_frontmatter_ignores_byte_order_mark():
    metadata, body = parse_frontmatter("\ufeff---\nlayout: post\n---\nBody\n")

    assert metadata == {"layout": "post"}
    assert body == "Body"


def test_read_frontmatter_only_invalid_yaml(tmp_path: Path):
    path = tmp_path / "post.md"
    path.write_text("---\ntitle: [oops\n---\nBody\n", encoding="utf-8")

    assert read_frontmatter_only(path) == {}
