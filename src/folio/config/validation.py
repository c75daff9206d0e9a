"""Validation helpers for user-supplied config values."""

from datetime import date, datetime
from pathlib import Path

from folio.config.exceptions import InvalidDateFormatError, SiteStructureError
from folio.config.loader import config_path_for
from folio.config.schema import FolioConfig


def parse_date_arg(date_str: str) -> date:
    """Parse a date string in YYYY-MM-DD format.

    Raises:
        InvalidDateFormatError: If date_str is not a valid YYYY-MM-DD date

    Examples:
        >>> parse_date_arg("2025-01-15")
        datetime.date(2025, 1, 15)

    """
    try:
        return datetime.strptime(date_str.strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidDateFormatError(date_str) from e


def validate_site_structure(site_root: Path, config: FolioConfig) -> None:
    """Check that ``site_root`` looks like a site: a config file, posts folder or drafts folder.

    Raises:
        SiteStructureError: If none of them exists

    """
    if not site_root.is_dir():
        raise SiteStructureError(str(site_root), "not a directory")

    if config_path_for(site_root).exists():
        return
    if (site_root / config.paths.posts).is_dir() or (site_root / config.paths.drafts).is_dir():
        return
    raise SiteStructureError(
        str(site_root),
        f"no {config.paths.posts}/, {config.paths.drafts}/ or .folio/config.yml found; run 'folio init'",
    )
