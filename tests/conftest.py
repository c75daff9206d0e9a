"""Shared fixtures: a small article site written under ``tmp_path``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from folio.config import FolioConfig
from folio.corpus import Corpus

EXCEPTION_HANDLING = """\
## Checked exceptions

Checked exceptions force the caller to decide.

![Exception hierarchy](/assets/img/exceptions.png)

```java
try {
    reader.read();
} catch (IOException e) {
    throw new UncheckedIOException(e);
}
```

## Unchecked exceptions

See also [feature flags](/2021/03/14/feature-flags.html) and
[the JLS](https://docs.oracle.com/javase/specs/).
"""

FEATURE_FLAGS = """\
Feature flags decouple deployment from release.

```typescript
if (flags.isEnabled("new-checkout")) {
  renderNewCheckout();
}
```
"""

SQL_LOCKING = """\
This article has moved.
"""

TRUNK_DRAFT = """\
## Why trunk

TODO: write the comparison with GitFlow.
"""


def write_markdown(path: Path, metadata: dict[str, Any] | None, body: str) -> Path:
    """Write a Markdown file; ``metadata=None`` writes no front matter at all."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if metadata is None:
        path.write_text(body, encoding="utf-8")
        return path
    front = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True)
    path.write_text(f"---\n{front}---\n\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A clean site: three posts, one draft and one image; lints without findings."""
    root = tmp_path / "site"
    posts = root / "_posts"
    drafts = root / "_drafts"

    write_markdown(
        posts / "2019-05-02-exception-handling.md",
        {"layout": "post", "title": "Exception handling done right", "tags": ["java", "errors"], "toc": True},
        EXCEPTION_HANDLING,
    )
    write_markdown(
        posts / "2021-03-14-feature-flags.md",
        {"layout": "post", "title": "Feature flags", "tags": ["architecture", "Java"]},
        FEATURE_FLAGS,
    )
    write_markdown(
        posts / "2020-11-20-sql-locking.md",
        {
            "layout": "post",
            "title": "Optimistic and pessimistic locking",
            "tags": ["sql"],
            "new_url": "https://example.com/locking",
            "new_title": "Locking in SQL",
        },
        SQL_LOCKING,
    )
    write_markdown(
        drafts / "trunk-based-development.md",
        {"layout": "post", "title": "Trunk-based development", "tags": ["git"]},
        TRUNK_DRAFT,
    )

    image = root / "assets" / "img" / "exceptions.png"
    image.parent.mkdir(parents=True)
    image.write_bytes(b"\x89PNG\r\n\x1a\n")

    return root


@pytest.fixture
def config() -> FolioConfig:
    return FolioConfig()


@pytest.fixture
def corpus(site: Path, config: FolioConfig) -> Corpus:
    return Corpus.load(site, config)


@pytest.fixture
def write_md():
    """Expose ``write_markdown`` to tests that build their own files."""
    return write_markdown
