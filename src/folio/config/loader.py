"""Configuration loader for ``.folio/config.yml``.

Unlike an application config, a missing file is not an error: a bare directory
of ``_posts``/``_drafts`` works with the defaults. A file that exists but does
not parse or validate is an error.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from folio.config.exceptions import ConfigLoadError, ConfigValidationError
from folio.config.schema import FolioConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = ".folio"
CONFIG_FILE = "config.yml"


def config_path_for(site_root: Path) -> Path:
    return site_root / CONFIG_DIR / CONFIG_FILE


def find_site_root(start_dir: Path) -> Path | None:
    """Search upward for a directory containing ``.folio/config.yml``.

    Args:
        start_dir: Starting directory for upward search

    Returns:
        The site root if found, else None
    """
    current = start_dir.expanduser().resolve()
    for candidate in (current, *current.parents):
        if config_path_for(candidate).exists():
            return candidate
    return None


def load_config(site_root: Path) -> FolioConfig:
    """Load configuration for ``site_root``, falling back to defaults if absent.

    Raises:
        ConfigLoadError: If the file cannot be read or is not a YAML mapping
        ConfigValidationError: If the file contains invalid values
    """
    config_path = config_path_for(site_root)

    if not config_path.exists():
        logger.debug("No %s found under %s, using defaults", CONFIG_FILE, site_root)
        return FolioConfig()

    logger.debug("Loading config from %s", config_path)

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigLoadError(config_path, str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigLoadError(config_path, f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigLoadError(config_path, f"expected a mapping, got {type(data).__name__}")

    try:
        return FolioConfig(**data)
    except ValidationError as e:
        raise ConfigValidationError(config_path, e.errors()) from e


def save_config(config: FolioConfig, site_root: Path) -> Path:
    """Save ``config`` to ``.folio/config.yml``, creating ``.folio/`` if needed.

    Returns:
        Path to the saved config file
    """
    config_path = config_path_for(site_root)
    config_path.parent.mkdir(exist_ok=True, parents=True)

    data = config.model_dump(exclude_defaults=False, mode="python")
    yaml_str = yaml.dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )

    config_path.write_text(yaml_str, encoding="utf-8")
    logger.debug("Saved config to %s", config_path)

    return config_path


__all__ = [
    "config_path_for",
    "find_site_root",
    "load_config",
    "save_config",
]
