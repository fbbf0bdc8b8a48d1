"""
Ticker controller: queues notifications and walks through their text one
display-wide fragment at a time.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Tuple

from PySide6.QtCore import QObject, QRect, Signal
from PySide6.QtGui import QColor

from core.icon_classifier import IconClassifier, QtIconClassifier
from core.scheduler import Scheduler
from core.segment import FragmentStatus, Segment
from core.segment_queue import SegmentQueue
from core.text_oracle import TextOracle
from shared.notification import MediaMetadata, NotificationKey, TickerNotification
from shared.ticker_text import compose_media_text
from status_ticker_core.status_ticker_core import logger as app_logger

DEFAULT_TICK_INTERVAL_MS = 3000
NOT_READY_RETRY_MS = 250
DEFAULT_TEXT_COLOR = 0xFFFFFFFF


class AnimationMode(Enum):
    FADE = 0
    PUSH_UP = 1


SchedulerFactory = Callable[[Callable[[], None]], Scheduler]


class TickerController(QObject):
    """
    Owns the segment queue and the advance timer.

    Idle while the queue is empty, active otherwise. All calls must happen on
    the thread that owns this object.
    """

    tickerStarting = Signal()
    textChanged = Signal(str, object)
    iconChanged = Signal(object, QColor, bool)
    textColorChanged = Signal(QColor)
    animationModeChanged = Signal(object)
    tickerDone = Signal()
    tickerHalted = Signal()

    def __init__(
        self,
        oracle: TextOracle,
        *,
        icon_classifier: Optional[IconClassifier] = None,
        scheduler_factory: Optional[SchedulerFactory] = None,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        animation_mode: AnimationMode = AnimationMode.FADE,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = app_logger.get_logger()
        self._oracle = oracle
        self._icon_classifier: IconClassifier = icon_classifier or QtIconClassifier()
        if scheduler_factory is None:
            self._scheduler = Scheduler(self._advance_ticker, self)
        else:
            self._scheduler = scheduler_factory(self._advance_ticker)
        self._segments = SegmentQueue()
        self._active = False

        self._tick_interval_ms = DEFAULT_TICK_INTERVAL_MS
        self.set_tick_interval(tick_interval_ms)
        self._animation_mode = AnimationMode(animation_mode)

        self._available_width = 0
        self._view_bounds: Optional[QRect] = None
        self._text_color = QColor.fromRgba(DEFAULT_TEXT_COLOR)
        self._icon_tint = QColor.fromRgba(DEFAULT_TEXT_COLOR)
        self._dark_intensity = 0.0

        self._showing_media_metadata: Optional[MediaMetadata] = None
        self._showing_notification_text: Optional[str] = None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def tick_interval_ms(self) -> int:
        return self._tick_interval_ms

    @property
    def animation_mode(self) -> AnimationMode:
        return self._animation_mode

    @property
    def text_color(self) -> QColor:
        return QColor(self._text_color)

    @property
    def icon_tint(self) -> QColor:
        return QColor(self._icon_tint)

    @property
    def dark_intensity(self) -> float:
        return self._dark_intensity

    @property
    def available_width(self) -> int:
        return self._available_width

    def add_entry(
        self,
        notification: TickerNotification,
        *,
        is_media: bool = False,
        media_metadata: Optional[MediaMetadata] = None,
        notification_text: Optional[str] = None,
    ) -> bool:
        """
        Queue ``notification`` for display.

        Returns False when the entry was suppressed: nothing to show, the
        same media or text is already on display, or it repeats the
        notification currently ticking.
        """
        text = self._resolve_text(notification, is_media, media_metadata, notification_text)
        if text is None:
            return False

        head = self._segments.head()
        if head is not None and self._repeats_head(head, notification, text):
            self._logger.debug("Dropping repeat of ticking notification {}", notification.key)
            return False

        segment = Segment(notification.key, notification.icon, text, notification)
        activated = self._segments.insert(segment)
        self._logger.debug(
            "Queued ticker text for {} ({} segment(s) pending)",
            notification.key,
            len(self._segments),
        )
        if activated:
            self._start(segment)
        return True

    def remove_entry(self, key: NotificationKey) -> None:
        removed = self._segments.remove_all(key)
        if not removed:
            return
        self._logger.debug("Removed {} ticker segment(s) for {}", len(removed), key)
        if not self._segments and self._active:
            self._finish()

    def halt(self) -> None:
        self._scheduler.cancel()
        self._segments.clear()
        self._active = False
        self._logger.info("Ticker halted.")
        self.tickerHalted.emit()

    def reset_shown_media_metadata(self) -> None:
        self._showing_media_metadata = None
        self._showing_notification_text = None

    def set_tick_interval(self, milliseconds: int) -> None:
        if isinstance(milliseconds, bool) or not isinstance(milliseconds, int) or milliseconds <= 0:
            raise ValueError(f"Tick interval must be a positive integer, got {milliseconds!r}.")
        self._tick_interval_ms = milliseconds

    def set_animation_mode(self, mode: AnimationMode | int) -> None:
        mode = AnimationMode(mode)
        if mode is self._animation_mode:
            return
        self._animation_mode = mode
        self.animationModeChanged.emit(mode)

    def set_available_width(self, pixels: int) -> None:
        self._available_width = max(0, int(pixels))

    def set_view_bounds(self, bounds: Optional[QRect]) -> None:
        self._view_bounds = QRect(bounds) if bounds is not None else None

    def set_text_color(self, color: QColor) -> None:
        self._text_color = QColor(color)
        if self._segments:
            self.textColorChanged.emit(QColor(self._text_color))

    def apply_tint(self, region: Optional[QRect], intensity: float, tint: QColor) -> None:
        """Adopt ``tint`` when the ticker lies inside the darkened ``region``."""
        self._dark_intensity = intensity
        if self._in_tint_area(region):
            color = QColor(tint)
        else:
            color = QColor.fromRgba(DEFAULT_TEXT_COLOR)
        self._text_color = color
        self._icon_tint = QColor(color)

        head = self._segments.head()
        if head is not None:
            self.textColorChanged.emit(QColor(self._text_color))
            self._emit_icon(head)

    def reflow_text(self) -> None:
        """Re-measure the fragment on display, e.g. after the width changed."""
        head = self._segments.head()
        if head is None:
            return
        fragment = head.peek(self._oracle, self._available_width)
        if not fragment.ready:
            return
        if head.is_first_fragment:
            head.is_first_fragment = False
            self._emit_icon(head)
            if self._interrupted(head):
                return
        self.textChanged.emit(fragment.text, head.icon)
        if self._interrupted(head):
            return
        # The re-measured line replaces whatever was pending, including a retry.
        self._scheduler.schedule_advance(self._tick_interval_ms)

    def _resolve_text(
        self,
        notification: TickerNotification,
        is_media: bool,
        media_metadata: Optional[MediaMetadata],
        notification_text: Optional[str],
    ) -> Optional[str]:
        if is_media and media_metadata is not None:
            if media_metadata.has_text:
                if media_metadata == self._showing_media_metadata:
                    self._logger.debug("Media metadata already shown; ignoring {}", notification.key)
                    return None
                self._showing_media_metadata = media_metadata
                return compose_media_text(media_metadata)
            if notification_text:
                if notification_text == self._showing_notification_text:
                    self._logger.debug("Notification text already shown; ignoring {}", notification.key)
                    return None
                self._showing_notification_text = notification_text
                return notification_text
            return None

        text = notification_text or notification.ticker_text
        return text or None

    @staticmethod
    def _repeats_head(head: Segment, notification: TickerNotification, text: str) -> bool:
        current = head.notification
        if current is None:
            return False
        # Apps posting in a storm would otherwise restart the same text.
        return (
            current.package_id == notification.package_id
            and current.icon_id == notification.icon_id
            and current.icon_level == notification.icon_level
            and head.text == text
        )

    def _start(self, segment: Segment) -> None:
        self._active = True
        self._logger.info("Ticker starting with {}", segment.key)
        self.tickerStarting.emit()
        if self._interrupted(segment):
            return

        segment.is_first_fragment = False
        self._emit_icon(segment)
        if self._interrupted(segment):
            return
        fragment = segment.peek(self._oracle, self._available_width)
        if fragment.ready:
            self.textChanged.emit(fragment.text, segment.icon)
            if self._interrupted(segment):
                return
            self._scheduler.schedule_advance(self._tick_interval_ms)
        elif fragment.status is FragmentStatus.NOT_READY:
            self._logger.debug("Ticker width unknown; retrying in {} ms", NOT_READY_RETRY_MS)
            self._scheduler.schedule_advance(NOT_READY_RETRY_MS)
        else:
            self._scheduler.schedule_advance(0)

    def _advance_ticker(self) -> None:
        while self._segments:
            segment = self._segments.head()
            was_first = segment.is_first_fragment
            try:
                fragment = segment.advance(self._oracle, self._available_width)
            except Exception:
                self._logger.exception("Text layout failed for {}; dropping it.", segment.key)
                self._segments.pop_head()
                continue

            if fragment.status is FragmentStatus.EXHAUSTED:
                self._segments.pop_head()
                continue
            if fragment.status is FragmentStatus.NOT_READY:
                self._logger.debug("Ticker width unknown; retrying in {} ms", NOT_READY_RETRY_MS)
                self._scheduler.schedule_advance(NOT_READY_RETRY_MS)
                return

            if was_first:
                # Slide the icon in for each new notification, even when
                # consecutive ones share an icon.
                self._emit_icon(segment)
                if self._interrupted(segment):
                    return
            self.textChanged.emit(fragment.text, segment.icon)
            if self._interrupted(segment):
                return
            self._scheduler.schedule_advance(self._tick_interval_ms)
            return
        self._finish()

    def _finish(self) -> None:
        self._scheduler.cancel()
        if not self._active:
            return
        self._active = False
        self._logger.info("Ticker done.")
        self.tickerDone.emit()

    def _interrupted(self, segment: Segment) -> bool:
        """
        Check whether a slot halted the ticker or removed ``segment`` while
        it was being shown.

        A removal that leaves other segments queued gets an immediate
        advance so the ticker does not stall.
        """
        if self._active and self._segments.head() is segment:
            return False
        if self._active and not self._scheduler.pending:
            self._scheduler.schedule_advance(0)
        return True

    def _emit_icon(self, segment: Segment) -> None:
        grayscale = self._icon_classifier.is_grayscale(segment.icon)
        self.iconChanged.emit(segment.icon, QColor(self._icon_tint), grayscale)

    def _in_tint_area(self, region: Optional[QRect]) -> bool:
        if region is None or region.isEmpty() or self._view_bounds is None:
            return True
        return region.intersects(self._view_bounds)
