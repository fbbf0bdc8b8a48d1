"""
Cursor over one notification's ticker text.

A segment hands out successive fragments, each the first line the oracle
produces from the remaining text, with trailing blanks and control
characters trimmed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from core.text_oracle import TextOracle
from shared.notification import NotificationKey, TickerNotification
from shared.ticker_text import rtrim_span, skip_unprintable


class FragmentStatus(Enum):
    READY = "ready"
    EMPTY = "empty"
    NOT_READY = "not_ready"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True, slots=True)
class Fragment:
    status: FragmentStatus
    text: str = ""

    @property
    def ready(self) -> bool:
        return self.status is FragmentStatus.READY


NOT_READY = Fragment(FragmentStatus.NOT_READY)
EXHAUSTED = Fragment(FragmentStatus.EXHAUSTED)
EMPTY = Fragment(FragmentStatus.EMPTY)


class Segment:
    """
    Holds ``0 <= current <= next <= len(text)``.

    ``current`` is where the fragment on display starts and ``next`` where
    the following one will be looked for.
    """

    __slots__ = ("key", "icon", "text", "notification", "current", "next", "is_first_fragment")

    def __init__(
        self,
        key: NotificationKey,
        icon: Any,
        text: str,
        notification: Optional[TickerNotification] = None,
    ) -> None:
        self.key = key
        self.icon = icon
        self.text = text
        self.notification = notification
        start = skip_unprintable(text, 0)
        self.current = start
        self.next = start
        self.is_first_fragment = True

    def peek(self, oracle: TextOracle, width: int) -> Fragment:
        """
        Return the fragment starting at ``current`` without moving ``current``.

        ``next`` is set to the end of that first line so the following
        ``advance`` continues after what is on display.
        """
        if self.current > len(self.text):
            return EXHAUSTED
        remaining = self.text[self.current:]
        spans = oracle.layout(remaining, width)
        if spans is None:
            return NOT_READY
        if not spans:
            return EMPTY
        start, end = spans[0]
        self.next = self.current + end
        trimmed = rtrim_span(remaining, start, end)
        if trimmed is None:
            return EMPTY
        return Fragment(FragmentStatus.READY, trimmed)

    def advance(self, oracle: TextOracle, width: int) -> Fragment:
        """Move to the next non-empty line and return it, or report exhaustion."""
        length = len(self.text)
        index = skip_unprintable(self.text, self.next)
        if index >= length:
            self.is_first_fragment = False
            return EXHAUSTED

        remaining = self.text[index:]
        spans = oracle.layout(remaining, width)
        if spans is None:
            return NOT_READY

        self.is_first_fragment = False
        for position, (start, end) in enumerate(spans):
            if position == len(spans) - 1:
                self.next = length
            else:
                self.next = index + spans[position + 1][0]
            trimmed = rtrim_span(remaining, start, end)
            if trimmed is not None:
                self.current = index + start
                return Fragment(FragmentStatus.READY, trimmed)

        self.current = length
        self.next = length
        return EXHAUSTED

    def __repr__(self) -> str:
        return (
            f"Segment(key={self.key}, current={self.current}, next={self.next}, "
            f"length={len(self.text)})"
        )
