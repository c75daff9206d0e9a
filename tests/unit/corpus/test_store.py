from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from folio.config import FolioConfig, PathsConfig
from folio.corpus import Corpus, DocumentNotFoundError, load_post
from folio.markdown.exceptions import FrontmatterParsingError


def test_load_sorts_posts_newest_first(corpus: Corpus):
    assert [post.slug for post in corpus.posts] == ["feature-flags", "sql-locking", "exception-handling"]
    assert [draft.slug for draft in corpus.drafts] == ["trunk-based-development"]
    assert corpus.problems == []


def test_post_fields_come_from_filename_and_front_matter(corpus: Corpus):
    post = corpus.get_post("exception-handling")

    assert post.date == date(2019, 5, 2)
    assert post.title == "Exception handling done right"
    assert post.tags == ["java", "errors"]
    assert post.metadata.toc is True
    assert post.body.startswith("\n## Checked exceptions")
    assert post.body_start_line == 9


def test_get_post_by_filename_stem(corpus: Corpus):
    assert corpus.get_post("2021-03-14-feature-flags").slug == "feature-flags"


def test_get_missing_document_raises(corpus: Corpus):
    with pytest.raises(DocumentNotFoundError):
        corpus.get_post("does-not-exist")
    with pytest.raises(DocumentNotFoundError):
        corpus.get_draft("feature-flags")


def test_unloadable_files_become_problems(site: Path, config: FolioConfig, write_md):
    write_md(site / "_posts" / "undated.md", {"title": "No date"}, "Body\n")
    broken = site / "_posts" / "2022-02-02-broken.md"
    broken.write_text("---\ntitle: [unclosed\n---\nBody\n", encoding="utf-8")
    (site / "_posts" / "notes.txt").write_text("not markdown", encoding="utf-8")

    corpus = Corpus.load(site, config)

    problems = {problem.path.name: problem.code for problem in corpus.problems}
    assert problems == {"undated.md": "FN001", "2022-02-02-broken.md": "FM001"}
    assert len(corpus.posts) == 3


def test_invalid_field_types_become_problems(site: Path, config: FolioConfig, write_md):
    write_md(site / "_posts" / "2022-02-02-bad-tags.md", {"title": "Bad", "tags": {"a": 1}}, "Body\n")

    corpus = Corpus.load(site, config)

    assert [problem.code for problem in corpus.problems] == ["FM001"]
    assert "tags" in corpus.problems[0].message


def test_posts_in_subfolders_are_loaded(site: Path, config: FolioConfig, write_md):
    write_md(site / "_posts" / "java" / "2018-01-01-records.md", {"title": "Records"}, "Body\n")

    corpus = Corpus.load(site, config)

    assert corpus.get_post("records").date == date(2018, 1, 1)


def test_file_without_front_matter_is_loaded_and_flagged(site: Path, config: FolioConfig, write_md):
    write_md(site / "_posts" / "2022-03-03-plain.md", None, "Just prose.\n")

    post = Corpus.load(site, config).get_post("plain")

    assert post.has_frontmatter is False
    assert post.title == "plain"


def test_tag_index_groups_case_insensitively(corpus: Corpus):
    index = corpus.tag_index()

    assert list(index) == ["architecture", "errors", "Java", "sql"]
    assert [post.slug for post in index["Java"]] == ["feature-flags", "exception-handling"]


def test_filter_by_tag_and_year(corpus: Corpus):
    assert [post.slug for post in corpus.filter(tag="JAVA")] == ["feature-flags", "exception-handling"]
    assert [post.slug for post in corpus.filter(year=2020)] == ["sql-locking"]
    assert corpus.filter(tag="java", year=2020) == []


def test_custom_folders(tmp_path: Path, write_md):
    write_md(tmp_path / "content" / "posts" / "2020-01-01-a.md", {"title": "A"}, "Body\n")
    write_md(tmp_path / "content" / "wip" / "b.md", {"title": "B"}, "Body\n")
    config = FolioConfig(paths=PathsConfig(posts="content/posts", drafts="content/wip"))

    corpus = Corpus.load(tmp_path, config)

    assert [post.slug for post in corpus.posts] == ["a"]
    assert [draft.slug for draft in corpus.drafts] == ["b"]


def test_missing_folders_give_an_empty_corpus(tmp_path: Path):
    corpus = Corpus.load(tmp_path)

    assert corpus.posts == []
    assert corpus.drafts == []


def test_load_post_raises_on_bad_front_matter(tmp_path: Path):
    path = tmp_path / "2020-01-01-broken.md"
    path.write_text("---\ntitle: x\n", encoding="utf-8")

    with pytest.raises(FrontmatterParsingError):
        load_post(path)
