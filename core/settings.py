"""
QSettings-backed configuration for the status ticker.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from PySide6.QtCore import QSettings

from core.font_styles import DEFAULT_FONT_STYLE, FONT_STYLES
from core.ticker import DEFAULT_TEXT_COLOR, DEFAULT_TICK_INTERVAL_MS, AnimationMode
from status_ticker_core.status_ticker_core import logger as app_logger

_LOGGER = app_logger.get_logger()

ORGANIZATION_NAME = "StatusTicker"
APPLICATION_NAME = "Ticker"
_GROUP = "Ticker"
MIN_TICK_INTERVAL_MS = 500
MAX_TICK_INTERVAL_MS = 60000


@dataclass(eq=True)
class TickerSettings:
    enabled: bool = True
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    animation_mode: AnimationMode = AnimationMode.FADE
    font_style: int = DEFAULT_FONT_STYLE
    text_color: int = DEFAULT_TEXT_COLOR


class TickerSettingsManager:
    """Loads persisted settings and clamps invalid data."""

    def __init__(self, *, settings_factory: Optional[Callable[[], QSettings]] = None) -> None:
        self._settings_factory = settings_factory or _default_store

    def read_settings(self) -> TickerSettings:
        store = self._settings_factory()
        store.beginGroup(_GROUP)
        try:
            return TickerSettings(
                enabled=self._read_bool(store, "Enabled", True),
                tick_interval_ms=self._read_tick_interval(store),
                animation_mode=self._read_animation_mode(store),
                font_style=self._read_font_style(store),
                text_color=self._read_text_color(store),
            )
        finally:
            store.endGroup()

    def write_settings(self, settings: TickerSettings) -> None:
        store = self._settings_factory()
        store.beginGroup(_GROUP)
        try:
            store.setValue("Enabled", bool(settings.enabled))
            store.setValue("TickIntervalMs", int(settings.tick_interval_ms))
            store.setValue("AnimationMode", settings.animation_mode.value)
            store.setValue("FontStyle", int(settings.font_style))
            store.setValue("TextColor", f"0x{settings.text_color & 0xFFFFFFFF:08x}")
        finally:
            store.endGroup()
        store.sync()

    def _read_bool(self, store: QSettings, name: str, default: bool) -> bool:
        raw = store.value(name)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            return raw.strip().lower() in {"1", "true", "yes", "on"}
        try:
            return bool(int(raw))
        except (TypeError, ValueError):
            _LOGGER.warning("Setting {} has unexpected value {!r}.", name, raw)
            return default

    def _read_tick_interval(self, store: QSettings) -> int:
        raw = self._read_int(store, "TickIntervalMs")
        if raw is None:
            return DEFAULT_TICK_INTERVAL_MS
        if raw < MIN_TICK_INTERVAL_MS or raw > MAX_TICK_INTERVAL_MS:
            _LOGGER.warning(
                "Invalid tick interval {} found in settings. Clamping to safe bounds.",
                raw,
            )
        return max(MIN_TICK_INTERVAL_MS, min(MAX_TICK_INTERVAL_MS, raw))

    def _read_animation_mode(self, store: QSettings) -> AnimationMode:
        raw = self._read_int(store, "AnimationMode")
        if raw is None:
            return AnimationMode.FADE
        try:
            return AnimationMode(raw)
        except ValueError:
            _LOGGER.warning("Unknown animation mode {} in settings.", raw)
            return AnimationMode.FADE

    def _read_font_style(self, store: QSettings) -> int:
        raw = self._read_int(store, "FontStyle")
        if raw is None:
            return DEFAULT_FONT_STYLE
        if raw not in FONT_STYLES:
            _LOGGER.warning("Unknown font style {} in settings.", raw)
            return DEFAULT_FONT_STYLE
        return raw

    def _read_text_color(self, store: QSettings) -> int:
        raw = store.value("TextColor")
        if raw is None:
            return DEFAULT_TEXT_COLOR
        try:
            if isinstance(raw, str):
                value = int(raw.strip().lstrip("#"), 16)
            else:
                value = int(raw)
        except (TypeError, ValueError):
            _LOGGER.warning("Setting TextColor has unexpected value {!r}.", raw)
            return DEFAULT_TEXT_COLOR
        return value & 0xFFFFFFFF

    def _read_int(self, store: QSettings, name: str) -> Optional[int]:
        raw: Any = store.value(name)
        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            _LOGGER.warning("Setting {} has unexpected value {!r}.", name, raw)
            return None


def _default_store() -> QSettings:
    return QSettings(ORGANIZATION_NAME, APPLICATION_NAME)
