"""
Grayscale detection for notification icons, used to decide whether an icon
may be tinted with the status bar color.
"""

from __future__ import annotations

from typing import Any, Protocol

from PySide6.QtGui import QIcon, QImage, QPixmap

MAX_GRAYSCALE_ICON_SIZE = 64
_CHANNEL_TOLERANCE = 20


class IconClassifier(Protocol):
    def is_grayscale(self, icon: Any) -> bool:
        ...


class QtIconClassifier:
    """Treats small icons whose opaque pixels are all near-gray as grayscale."""

    def __init__(self, max_size: int = MAX_GRAYSCALE_ICON_SIZE) -> None:
        self.max_size = max_size

    def is_grayscale(self, icon: Any) -> bool:
        image = self._to_image(icon)
        if image is None or image.isNull():
            return False
        if image.width() > self.max_size or image.height() > self.max_size:
            return False

        image = image.convertToFormat(QImage.Format.Format_ARGB32)
        for y in range(image.height()):
            for x in range(image.width()):
                if not _is_gray_pixel(image.pixel(x, y)):
                    return False
        return True

    def _to_image(self, icon: Any) -> QImage | None:
        if isinstance(icon, QImage):
            return icon
        if isinstance(icon, QPixmap):
            return icon.toImage()
        if isinstance(icon, QIcon):
            sizes = icon.availableSizes()
            if not sizes:
                return None
            return icon.pixmap(sizes[0]).toImage()
        return None


def _is_gray_pixel(argb: int) -> bool:
    alpha = (argb >> 24) & 0xFF
    if alpha == 0:
        return True
    red = (argb >> 16) & 0xFF
    green = (argb >> 8) & 0xFF
    blue = argb & 0xFF
    return (
        abs(red - green) < _CHANNEL_TOLERANCE
        and abs(red - blue) < _CHANNEL_TOLERANCE
        and abs(green - blue) < _CHANNEL_TOLERANCE
    )
