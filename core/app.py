"""
Application coordinator wiring settings, the ticker controller and the bar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from PySide6.QtCore import QObject, QTimer
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QApplication

from core.settings import TickerSettings, TickerSettingsManager
from core.ticker import TickerController
from core.ticker_bar import TickerBar
from shared.notification import MediaMetadata, NotificationKey, TickerNotification
from status_ticker_core.status_ticker_core import logger as app_logger

APP_NAME = "Status Ticker"
APP_VERSION = "1.0.0"
SETTINGS_REFRESH_INTERVAL_MS = 15000


@dataclass(eq=False)
class TickerCoordinator(QObject):
    settings_manager: TickerSettingsManager = field(default_factory=TickerSettingsManager)
    quit_when_idle: bool = False

    def __post_init__(self) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        self._manual_shutdown_requested = False

        self._bar = TickerBar()
        self._controller = TickerController(self._bar.oracle, parent=self)
        self._bar.attach(self._controller)
        self._controller.tickerDone.connect(self._on_ticker_done)  # type: ignore[arg-type]

        self._settings: TickerSettings = TickerSettings()
        self._initial_settings = self.settings_manager.read_settings()
        self._settings_timer = QTimer(self)
        self._settings_timer.setInterval(SETTINGS_REFRESH_INTERVAL_MS)
        self._settings_timer.timeout.connect(self._reload_settings)  # type: ignore[arg-type]

    @property
    def controller(self) -> TickerController:
        return self._controller

    @property
    def bar(self) -> TickerBar:
        return self._bar

    @property
    def settings(self) -> TickerSettings:
        return self._settings

    @property
    def manual_shutdown_requested(self) -> bool:
        return self._manual_shutdown_requested

    def start(self) -> None:
        self._logger.info("Starting {} v{}", APP_NAME, APP_VERSION)
        self._apply_settings(self._initial_settings, initial=True)
        self._settings_timer.start()

    def shutdown(self) -> None:
        self._logger.info("Shutting down ticker on request.")
        self._manual_shutdown_requested = True
        self._settings_timer.stop()
        self._controller.halt()
        self._bar.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    def post(
        self,
        package_id: str,
        notification_id: int,
        text: Optional[str],
        *,
        icon: Any = None,
        icon_id: int = 0,
        icon_level: int = 0,
        media: Optional[MediaMetadata] = None,
    ) -> bool:
        """Hand a notification to the ticker; returns whether it was queued."""
        if not self._settings.enabled:
            self._logger.debug("Ticker disabled; ignoring notification from {}", package_id)
            return False
        notification = TickerNotification(
            key=NotificationKey(package_id, notification_id),
            icon=icon,
            icon_id=icon_id,
            icon_level=icon_level,
            ticker_text=text,
        )
        return self._controller.add_entry(
            notification,
            is_media=media is not None,
            media_metadata=media,
            notification_text=text,
        )

    def dismiss(self, package_id: str, notification_id: int) -> None:
        self._controller.remove_entry(NotificationKey(package_id, notification_id))

    def _reload_settings(self) -> None:
        new_settings = self.settings_manager.read_settings()
        if new_settings != self._settings:
            self._logger.info("Detected settings change. Applying updates.")
            self._apply_settings(new_settings)

    def _apply_settings(self, settings: TickerSettings, *, initial: bool = False) -> None:
        previous = self._settings
        self._settings = settings

        if not settings.enabled:
            if previous.enabled or initial:
                self._logger.info("Ticker disabled via settings; halting.")
            self._controller.halt()
            return

        if initial or previous.tick_interval_ms != settings.tick_interval_ms:
            self._controller.set_tick_interval(settings.tick_interval_ms)
            if not initial:
                self._logger.info("Tick interval updated to {} ms.", settings.tick_interval_ms)
        self._controller.set_animation_mode(settings.animation_mode)
        if initial or previous.font_style != settings.font_style:
            self._bar.set_font_style(settings.font_style)
        if initial or previous.text_color != settings.text_color:
            self._controller.set_text_color(QColor.fromRgba(settings.text_color))

    def _on_ticker_done(self) -> None:
        if self.quit_when_idle:
            self._logger.debug("Ticker idle; quitting as requested.")
            self.shutdown()
