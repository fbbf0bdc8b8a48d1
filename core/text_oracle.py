"""
Line-breaking oracles used by the ticker to cut text into display-wide lines.

An oracle maps ``(text, max_width)`` to ordered ``(start, end)`` spans that
cover ``text``. Trailing whitespace stays on the line it ends. ``None``
means the text cannot be measured yet, e.g. before the host has a width.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

from PySide6.QtGui import QFont, QTextLayout, QTextOption

LineSpan = Tuple[int, int]


class TextOracle(Protocol):
    def layout(self, text: str, max_width: int) -> Optional[List[LineSpan]]:
        ...


class QtTextOracle:
    """Measures text with ``QTextLayout`` using the font the host renders with."""

    def __init__(self, font: Optional[QFont] = None) -> None:
        self._font = QFont(font) if font is not None else QFont()
        self._option = QTextOption()
        self._option.setWrapMode(QTextOption.WrapMode.WrapAtWordBoundaryOrAnywhere)

    @property
    def font(self) -> QFont:
        return QFont(self._font)

    def set_font(self, font: QFont) -> None:
        self._font = QFont(font)

    def layout(self, text: str, max_width: int) -> Optional[List[LineSpan]]:
        if max_width <= 0:
            return None
        if not text:
            return []

        layout = QTextLayout(text, self._font)
        layout.setTextOption(self._option)
        spans: List[LineSpan] = []
        layout.beginLayout()
        try:
            while True:
                line = layout.createLine()
                if not line.isValid():
                    break
                line.setLineWidth(float(max_width))
                start = line.textStart()
                spans.append((start, start + line.textLength()))
        finally:
            layout.endLayout()
        return spans


class CellTextOracle:
    """
    Fixed-cell measurement for character displays.

    Every character occupies ``cell_width`` pixels, so a line holds
    ``max_width // cell_width`` characters. Lines break after the last
    whitespace that fits; words longer than a line are split.
    """

    def __init__(self, cell_width: int = 1) -> None:
        if cell_width <= 0:
            raise ValueError("cell_width must be positive.")
        self.cell_width = cell_width

    def layout(self, text: str, max_width: int) -> Optional[List[LineSpan]]:
        columns = max_width // self.cell_width if max_width > 0 else 0
        if columns <= 0:
            return None

        spans: List[LineSpan] = []
        length = len(text)
        start = 0
        while start < length:
            limit = start + columns
            newline = text.find("\n", start, min(limit, length))
            if newline != -1:
                spans.append((start, newline + 1))
                start = newline + 1
                continue
            if limit >= length:
                spans.append((start, length))
                break
            spans.append((start, self._break_at(text, start, limit)))
            start = spans[-1][1]
        return spans

    @staticmethod
    def _break_at(text: str, start: int, limit: int) -> int:
        if text[limit].isspace():
            end = limit
            while end < len(text) and text[end].isspace() and text[end] != "\n":
                end += 1
            return end
        for index in range(limit - 1, start - 1, -1):
            if text[index].isspace():
                return index + 1
        return limit
