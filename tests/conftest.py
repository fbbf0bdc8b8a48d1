from __future__ import annotations

import os
import tempfile

# Qt widgets require a platform plugin.  Offscreen avoids display and libGL
# dependencies inside the test container.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("STATUS_TICKER_LOG_DIR", tempfile.mkdtemp(prefix="status-ticker-logs-"))

import pytest  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qt_app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app
