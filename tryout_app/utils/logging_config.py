"""Logging configuration helpers for the tryout application."""

from __future__ import annotations

import logging
from logging import Logger
import os


def configure_logging(level: str | None = None) -> Logger:
    """Configure basic logging for the application and return its logger.

    The level comes from ``level``, then ``TRYOUT_LOG_LEVEL``, then INFO.
    """
    level_name = (level or os.environ.get("TRYOUT_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # httpx logs every request at INFO; keep that at our DEBUG threshold.
    logging.getLogger("httpx").setLevel(max(logging.WARNING, logging.getLogger().level))
    return logging.getLogger("tryout_app")
