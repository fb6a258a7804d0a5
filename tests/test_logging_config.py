"""Tests for the logging setup helper."""

from __future__ import annotations

import logging

from tryout_app.utils.logging_config import configure_logging


def test_configure_logging_returns_app_logger_and_quiets_httpx(monkeypatch):
    monkeypatch.setenv("TRYOUT_LOG_LEVEL", "debug")

    logger = configure_logging()

    assert logger.name == "tryout_app"
    assert logging.getLogger("httpx").level >= logging.WARNING
