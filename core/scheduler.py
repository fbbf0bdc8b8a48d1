"""
One-shot timer driving the ticker's advance step.
"""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer


class Scheduler(QObject):
    """
    Holds at most one pending timeout. Firing calls ``callback`` once and
    does not re-arm; the owner re-arms after each step.
    """

    def __init__(self, callback: Callable[[], None], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._callback = callback
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)  # type: ignore[arg-type]
        self._armed = False

    @property
    def pending(self) -> bool:
        return self._armed

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    def schedule_advance(self, delay_ms: int) -> None:
        """Arm the timer, replacing any pending timeout."""
        self._armed = True
        self._timer.start(max(0, int(delay_ms)))

    def cancel(self) -> None:
        self._timer.stop()
        self._armed = False

    def _fire(self) -> None:
        # A timeout already queued when cancel() ran must not reach the owner.
        if not self._armed:
            return
        self._armed = False
        self._callback()
