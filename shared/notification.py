"""
Shared representation of a notification as posted to the ticker.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .ticker_text import TickerEntryError


@dataclass(frozen=True, slots=True)
class NotificationKey:
    """Identity of a notification: the posting package plus its id."""

    package_id: str
    notification_id: int

    def __post_init__(self) -> None:
        if not isinstance(self.package_id, str) or not self.package_id.strip():
            raise TickerEntryError("package_id must be a non-empty string.")

    def __str__(self) -> str:
        return f"{self.package_id}#{self.notification_id}"


@dataclass(frozen=True, slots=True)
class MediaMetadata:
    artist: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None

    @property
    def has_text(self) -> bool:
        return any(_present(value) for value in (self.artist, self.album, self.title))


@dataclass(slots=True)
class TickerNotification:
    """
    A notification handed to the ticker by the host.

    ``icon`` is whatever the host renders (typically a QIcon or QPixmap) and
    is held by reference. ``icon_id`` and ``icon_level`` identify the icon
    resource for storm detection.
    """

    key: NotificationKey
    icon: Any = None
    icon_id: int = 0
    icon_level: int = 0
    ticker_text: Optional[str] = None

    @property
    def package_id(self) -> str:
        return self.key.package_id


def _present(value: Optional[str]) -> bool:
    return value is not None and value != ""
