"""Slugs and path joining for files written into the site."""

from pathlib import Path

from pymdownx.slugs import slugify as _md_slugify

from folio.exceptions import PathTraversalError

# NFKD turns accented letters into ASCII plus combining marks, which are dropped.
slugify_lower = _md_slugify(case="lower", separator="-", normalize="NFKD")
slugify_case = _md_slugify(separator="-", normalize="NFKD")


def slugify(text: str, max_len: int = 60, *, lowercase: bool = True) -> str:
    """Turn a title into the slug used in post and draft filenames.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Hello World!", lowercase=False)
        'Hello-World'
        >>> slugify("Café à Paris")
        'cafe-a-paris'
        >>> slugify("../../etc/passwd")
        'etcpasswd'

    """
    if text is None:
        return ""

    slugifier = slugify_lower if lowercase else slugify_case
    slug = slugifier(text, sep="-").encode("ascii", "ignore").decode("ascii")
    return (slug or "post")[:max_len].rstrip("-")


def safe_path_join(base_dir: Path, *parts: str) -> Path:
    """Join ``parts`` under ``base_dir`` and return the resolved path.

    Raises:
        PathTraversalError: If a part is absolute or the result lies outside ``base_dir``.

    """
    for part in parts:
        if Path(part).is_absolute():
            msg = f"Absolute path '{part}' cannot be placed under {base_dir}"
            raise PathTraversalError(msg)

    base = base_dir.resolve()
    candidate = base.joinpath(*parts).resolve()
    if not candidate.is_relative_to(base):
        msg = f"'{'/'.join(parts)}' would escape {base_dir}"
        raise PathTraversalError(msg)
    return candidate
