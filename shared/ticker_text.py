"""
Text rules shared by the ticker engine: printable detection, trimming and
composition of media ticker text.
"""

from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .notification import MediaMetadata

MEDIA_SEPARATOR = " - "

# Control, format, unassigned, line/paragraph/space separators.
_UNPRINTABLE_CATEGORIES = frozenset({"Cc", "Cf", "Cn", "Zl", "Zp", "Zs"})


class TickerEntryError(ValueError):
    """Raised when the host hands the ticker malformed data."""


def is_printable(ch: str) -> bool:
    """Return whether ``ch`` is a graphic character or emoji."""
    return unicodedata.category(ch) not in _UNPRINTABLE_CATEGORIES


def skip_unprintable(text: str, index: int) -> int:
    """Return the first index at or after ``index`` holding a printable character."""
    length = len(text)
    while index < length and not is_printable(text[index]):
        index += 1
    return index


def rtrim_span(text: str, start: int, end: int) -> Optional[str]:
    """
    Trim trailing unprintable characters from ``text[start:end]``.

    Returns None when nothing printable is left.
    """
    while end > start and not is_printable(text[end - 1]):
        end -= 1
    if end > start:
        return text[start:end]
    return None


def compose_media_text(metadata: "MediaMetadata") -> Optional[str]:
    """Build ``artist - album - title`` leaving out absent parts."""
    artist = metadata.artist or None
    album = metadata.album or None
    title = metadata.title or None
    if artist is None and album is None and title is None:
        return None

    text = ""
    if artist is not None:
        text = artist
    if artist is not None and album is not None:
        text += MEDIA_SEPARATOR
    if album is not None:
        text += album
    if (artist is not None or album is not None) and title is not None:
        text += MEDIA_SEPARATOR
    if title is not None:
        text += title
    return text
