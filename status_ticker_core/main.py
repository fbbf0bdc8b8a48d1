"""
Entry point for the status ticker application.
"""

from __future__ import annotations

import sys
from typing import Iterable, List

from PySide6.QtWidgets import QApplication

from core.app import APP_NAME, TickerCoordinator
from status_ticker_core.status_ticker_core import logger as app_logger

_LOGGER = app_logger.get_logger()
_CLI_PACKAGE = "cli"


def _run_application(argv: Iterable[str]) -> int:
    """Start the Qt application and tick every positional argument once."""
    app = QApplication(list(argv))
    app.setApplicationName(APP_NAME)
    messages: List[str] = [arg for arg in app.arguments()[1:] if arg.strip()]

    coordinator = TickerCoordinator(quit_when_idle=bool(messages))
    coordinator.start()
    for notification_id, message in enumerate(messages):
        coordinator.post(_CLI_PACKAGE, notification_id, message)
    return app.exec()


def main() -> int:
    try:
        return _run_application(sys.argv)
    except Exception:  # pragma: no cover - defensive crash guard
        _LOGGER.exception("Ticker app crashed.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
