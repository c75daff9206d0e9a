from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from folio.logging_setup import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _managed(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if isinstance(h, RichHandler) and getattr(h, "_folio_managed", False)]


def test_configure_logging_installs_one_rich_handler(root_logger, monkeypatch):
    monkeypatch.delenv("FOLIO_LOG_LEVEL", raising=False)

    configure_logging()
    configure_logging()

    assert len(_managed(root_logger)) == 1
    assert root_logger.level == logging.INFO


def test_level_from_environment(root_logger, monkeypatch):
    monkeypatch.setenv("FOLIO_LOG_LEVEL", "warning")

    configure_logging()

    assert root_logger.level == logging.WARNING


def test_explicit_level_wins(root_logger, monkeypatch):
    monkeypatch.setenv("FOLIO_LOG_LEVEL", "WARNING")

    configure_logging("debug")

    assert root_logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(root_logger):
    configure_logging("chatty")

    assert root_logger.level == logging.INFO
