"""Configuration for Folio sites."""

from folio.config.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    InvalidDateFormatError,
    SiteStructureError,
)
from folio.config.loader import config_path_for, find_site_root, load_config, save_config
from folio.config.schema import FolioConfig, LintConfig, PathsConfig, SiteConfig
from folio.config.validation import parse_date_arg, validate_site_structure

__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "FolioConfig",
    "InvalidDateFormatError",
    "LintConfig",
    "PathsConfig",
    "SiteConfig",
    "SiteStructureError",
    "config_path_for",
    "find_site_root",
    "load_config",
    "parse_date_arg",
    "save_config",
    "validate_site_structure",
]
