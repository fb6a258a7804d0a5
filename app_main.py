"""Application entry point for the Tryouts desktop client."""

from __future__ import annotations

import os
import sys

from PySide6.QtWidgets import QApplication

from tryout_app.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_BACKEND_HOST,
    DEFAULT_BACKEND_PORT,
)
from tryout_app.core.api_client import TryoutApiClient
from tryout_app.core.errors import ConfigurationError
from tryout_app.core.tryout_manager import TryoutManager
from tryout_app.server.api_server import start_api_server
from tryout_app.ui.main_window import TryoutMainWindow
from tryout_app.utils.logging_config import configure_logging


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


def _env_port(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer port, got {raw!r}") from exc


def main() -> None:
    """Initialize logging, optionally start the local backend, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting Tryouts…")

    base_url = os.environ.get("TRYOUT_API_BASE_URL") or DEFAULT_API_BASE_URL
    if _env_flag("TRYOUT_START_LOCAL_BACKEND", True):
        host = os.environ.get("TRYOUT_BACKEND_HOST") or DEFAULT_BACKEND_HOST
        port = _env_port("TRYOUT_BACKEND_PORT", DEFAULT_BACKEND_PORT)
        start_api_server(host=host, port=port)
        logger.info("Local backend listening on http://%s:%s", host, port)
    logger.info("Using API at %s", base_url)

    with TryoutApiClient(base_url) as client:
        tryout_manager = TryoutManager(client)
        app = QApplication(sys.argv)
        window = TryoutMainWindow(tryout_manager=tryout_manager)
        window.show()
        exit_code = app.exec()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
