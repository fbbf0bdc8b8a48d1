"""
Ticker font styles selectable by integer code from the settings store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from PySide6.QtGui import QFont

DEFAULT_FONT_STYLE = 0


@dataclass(frozen=True)
class FontStyle:
    family: str
    italic: bool = False
    weight: QFont.Weight = QFont.Weight.Normal
    condensed: bool = False


_W = QFont.Weight

FONT_STYLES: Dict[int, FontStyle] = {
    0: FontStyle("sans-serif"),
    1: FontStyle("sans-serif", italic=True),
    2: FontStyle("sans-serif", weight=_W.Bold),
    3: FontStyle("sans-serif", italic=True, weight=_W.Bold),
    4: FontStyle("sans-serif", weight=_W.Light),
    5: FontStyle("sans-serif", italic=True, weight=_W.Light),
    6: FontStyle("sans-serif", weight=_W.Thin),
    7: FontStyle("sans-serif", italic=True, weight=_W.Thin),
    8: FontStyle("sans-serif", condensed=True),
    9: FontStyle("sans-serif", italic=True, condensed=True),
    10: FontStyle("sans-serif", weight=_W.Light, condensed=True),
    11: FontStyle("sans-serif", italic=True, weight=_W.Light, condensed=True),
    12: FontStyle("sans-serif", weight=_W.Bold, condensed=True),
    13: FontStyle("sans-serif", italic=True, weight=_W.Bold, condensed=True),
    14: FontStyle("sans-serif", weight=_W.Medium),
    15: FontStyle("sans-serif", italic=True, weight=_W.Medium),
    16: FontStyle("sans-serif", weight=_W.Black),
    17: FontStyle("sans-serif", italic=True, weight=_W.Black),
    18: FontStyle("cursive"),
    19: FontStyle("cursive", weight=_W.Bold),
    20: FontStyle("casual"),
    21: FontStyle("serif"),
    22: FontStyle("serif", italic=True),
    23: FontStyle("serif", weight=_W.Bold),
    24: FontStyle("serif", italic=True, weight=_W.Bold),
    25: FontStyle("gobold-light-sys"),
    26: FontStyle("roadrage-sys"),
    27: FontStyle("snowstorm-sys"),
    28: FontStyle("googlesans-sys"),
    29: FontStyle("neoneon-sys"),
    30: FontStyle("themeable-sys"),
    31: FontStyle("samsung-sys"),
    32: FontStyle("mexcellent-sys"),
    33: FontStyle("burnstown-sys"),
    34: FontStyle("dumbledor-sys"),
    35: FontStyle("phantombold-sys"),
}


def resolve_font_style(code: int) -> FontStyle:
    """Return the style for ``code``; unknown codes fall back to the default."""
    return FONT_STYLES.get(code, FONT_STYLES[DEFAULT_FONT_STYLE])


def to_qfont(style: FontStyle, point_size: Optional[float] = None) -> QFont:
    font = QFont(style.family)
    font.setItalic(style.italic)
    font.setWeight(style.weight)
    if style.condensed:
        font.setStretch(QFont.Stretch.Condensed.value)
    if point_size is not None and point_size > 0:
        font.setPointSizeF(point_size)
    return font
