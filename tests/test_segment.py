from __future__ import annotations

from typing import List, Optional, Tuple

from core.segment import FragmentStatus, Segment
from core.text_oracle import CellTextOracle
from shared.notification import NotificationKey

KEY = NotificationKey("com.example.mail", 7)


class _SingleCharacterOracle:
    def layout(self, text: str, max_width: int) -> Optional[List[Tuple[int, int]]]:
        if max_width <= 0:
            return None
        return [(index, index + 1) for index in range(len(text))]


class _FixedSpansOracle:
    def __init__(self, spans: List[Tuple[int, int]]) -> None:
        self.spans = spans

    def layout(self, text: str, max_width: int) -> Optional[List[Tuple[int, int]]]:
        return list(self.spans)


class _UnavailableOracle:
    def layout(self, text: str, max_width: int) -> None:
        return None


def _assert_cursor_invariant(segment: Segment) -> None:
    assert 0 <= segment.current <= segment.next <= len(segment.text)


def test_construction_skips_leading_blanks() -> None:
    segment = Segment(KEY, None, "  \thi")

    assert segment.current == 3
    assert segment.next == 3
    assert segment.is_first_fragment


def test_advance_walks_hello_world() -> None:
    segment = Segment(KEY, None, "Hello World")
    oracle = CellTextOracle()

    first = segment.advance(oracle, 6)
    assert first.status is FragmentStatus.READY
    assert first.text == "Hello"
    assert segment.next == 6
    assert not segment.is_first_fragment

    second = segment.advance(oracle, 6)
    assert second.text == "World"
    assert segment.current == 6

    assert segment.advance(oracle, 6).status is FragmentStatus.EXHAUSTED
    assert segment.next == len("Hello World")


def test_single_character_lines_give_one_fragment_per_character() -> None:
    text = "ticker"
    segment = Segment(KEY, None, text)
    oracle = _SingleCharacterOracle()

    fragments = []
    while True:
        fragment = segment.advance(oracle, 10)
        if fragment.status is FragmentStatus.EXHAUSTED:
            break
        _assert_cursor_invariant(segment)
        fragments.append(fragment.text)

    assert fragments == list(text)


def test_blanks_are_consumed_without_output() -> None:
    segment = Segment(KEY, None, " a \u200b b ")
    oracle = _SingleCharacterOracle()

    produced = []
    fragment = segment.advance(oracle, 10)
    while fragment.status is FragmentStatus.READY:
        produced.append(fragment.text)
        fragment = segment.advance(oracle, 10)

    assert produced == ["a", "b"]
    assert fragment.status is FragmentStatus.EXHAUSTED


def test_not_ready_leaves_cursor_untouched() -> None:
    segment = Segment(KEY, None, "Hello World")

    fragment = segment.advance(_UnavailableOracle(), 6)

    assert fragment.status is FragmentStatus.NOT_READY
    assert (segment.current, segment.next) == (0, 0)
    assert segment.is_first_fragment


def test_first_non_empty_line_wins() -> None:
    segment = Segment(KEY, None, "abc")

    fragment = segment.advance(_FixedSpansOracle([(0, 0), (0, 3)]), 10)

    assert fragment.text == "abc"
    assert segment.current == 0
    assert segment.next == 3


def test_lines_that_all_trim_empty_exhaust_the_segment() -> None:
    segment = Segment(KEY, None, "abc")

    fragment = segment.advance(_FixedSpansOracle([(0, 0)]), 10)

    assert fragment.status is FragmentStatus.EXHAUSTED
    assert segment.current == 3
    assert segment.advance(CellTextOracle(), 10).status is FragmentStatus.EXHAUSTED


def test_peek_shows_first_line_and_sets_following_start() -> None:
    segment = Segment(KEY, None, "Hello World")
    oracle = CellTextOracle()

    fragment = segment.peek(oracle, 6)

    assert fragment.text == "Hello"
    assert segment.current == 0
    assert segment.next == 6
    assert segment.advance(oracle, 6).text == "World"


def test_peek_without_width_is_not_ready() -> None:
    segment = Segment(KEY, None, "Hello World")

    assert segment.peek(CellTextOracle(), 0).status is FragmentStatus.NOT_READY
    assert segment.next == 0


def test_blank_text_peeks_empty_then_exhausts() -> None:
    segment = Segment(KEY, None, "   ")
    oracle = CellTextOracle()

    assert segment.peek(oracle, 6).status is FragmentStatus.EMPTY
    assert segment.advance(oracle, 6).status is FragmentStatus.EXHAUSTED


def test_peek_after_width_change_reflows_current_fragment() -> None:
    segment = Segment(KEY, None, "Hello World")
    oracle = CellTextOracle()

    assert segment.advance(oracle, 6).text == "Hello"
    assert segment.peek(oracle, 20).text == "Hello World"
    assert segment.next == 11
