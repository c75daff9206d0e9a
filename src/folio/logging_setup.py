"""Logging for the ``folio`` command: one Rich handler on the root logger, on stderr."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

LOG_LEVEL_ENV: Final[str] = "FOLIO_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"
_MARKER: Final[str] = "_folio_managed"

# stdout is reserved for command output such as `folio toc` and `folio tags --page`.
console = Console(stderr=True)


def _resolve_level(override: str | None = None) -> int:
    level_name = (override or os.getenv(LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def _find_managed_handler(root: logging.Logger) -> RichHandler | None:
    for handler in root.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, _MARKER, False):
            return handler
    return None


def configure_logging(level: str | None = None) -> None:
    """Install the Rich handler on first use; later calls only change the level.

    ``level`` wins over the ``FOLIO_LOG_LEVEL`` environment variable. Unknown
    level names fall back to INFO.
    """
    root = logging.getLogger()

    if _find_managed_handler(root) is None:
        root.handlers.clear()
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _MARKER, True)
        root.addHandler(handler)

    root.setLevel(_resolve_level(level))
    logging.captureWarnings(True)
