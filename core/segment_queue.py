"""
FIFO queue of ticker segments holding at most one segment per notification.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from core.segment import Segment
from shared.notification import NotificationKey


class SegmentQueue:
    """Insertion order is activation order; a re-posted key goes to the tail."""

    def __init__(self) -> None:
        self._segments: List[Segment] = []

    def insert(self, segment: Segment) -> bool:
        """
        Append ``segment``, dropping any queued segment with the same key.

        Returns True when the queue was empty beforehand.
        """
        was_empty = not self._segments
        self._segments = [seg for seg in self._segments if seg.key != segment.key]
        self._segments.append(segment)
        return was_empty

    def remove_all(self, key: NotificationKey) -> List[Segment]:
        removed = [seg for seg in self._segments if seg.key == key]
        if removed:
            self._segments = [seg for seg in self._segments if seg.key != key]
        return removed

    def clear(self) -> None:
        self._segments.clear()

    def head(self) -> Optional[Segment]:
        return self._segments[0] if self._segments else None

    def pop_head(self) -> Optional[Segment]:
        if not self._segments:
            return None
        return self._segments.pop(0)

    def keys(self) -> List[NotificationKey]:
        return [seg.key for seg in self._segments]

    def __len__(self) -> int:
        return len(self._segments)

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(list(self._segments))
