"""Custom exceptions for configuration handling."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from folio.exceptions import FolioError


class ConfigError(FolioError):
    """Base exception for all configuration-related errors."""


class ConfigLoadError(ConfigError):
    """Raised when the configuration file cannot be read or is not valid YAML."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config at '{path}': {reason}")


class ConfigValidationError(ConfigError):
    """Raised when the configuration file fails validation."""

    def __init__(self, path: Path, errors: Sequence[dict[str, Any]] | None = None) -> None:
        self.path = path
        self.errors = list(errors or [])
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}" for err in self.errors
        )
        message = f"Configuration at '{path}' failed validation with {len(self.errors)} error(s)"
        if details:
            message += f": {details}"
        super().__init__(message)


class InvalidDateFormatError(ConfigError):
    """Raised when a date string is in an invalid format."""

    def __init__(self, date_string: str) -> None:
        self.date_string = date_string
        super().__init__(f"Invalid date format: '{date_string}'. Expected YYYY-MM-DD.")


class SiteStructureError(ConfigError):
    """Raised when required site directory structure is missing."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid site structure at '{path}': {reason}")
