"""
Frameless bar along the top of the screen rendering the ticker's icon and text.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QPoint, QSize, Qt
from PySide6.QtGui import QColor, QIcon, QPainter, QPalette, QPixmap
from PySide6.QtWidgets import QApplication, QHBoxLayout, QLabel, QSizePolicy, QStyle, QWidget

from core.font_styles import resolve_font_style, to_qfont
from core.text_oracle import QtTextOracle
from core.ticker import TickerController

ICON_SIZE = 20
BAR_HEIGHT = 28
_MARGIN = 6
_SPACING = 8
_FALLBACK_WIDTH = 480


class TickerBar(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        flags = Qt.WindowType.Tool | Qt.WindowType.FramelessWindowHint | Qt.WindowType.WindowStaysOnTopHint
        super().__init__(parent)
        self.setWindowFlags(flags)
        self.setObjectName("TickerBar")
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)

        self._controller: TickerController | None = None

        self._icon_label = QLabel()
        self._icon_label.setFixedSize(ICON_SIZE, ICON_SIZE)
        self._icon_label.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        icon = self.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
        self._default_pixmap = icon.pixmap(ICON_SIZE, ICON_SIZE)
        self._icon_label.setPixmap(self._default_pixmap)

        self._text_label = QLabel()
        self._text_label.setObjectName("TickerText")
        self._text_label.setWordWrap(False)
        self._text_label.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Preferred)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(_MARGIN, 0, _MARGIN, 0)
        layout.setSpacing(_SPACING)
        layout.addWidget(self._icon_label)
        layout.addWidget(self._text_label, 1)

        self.setStyleSheet(
            """
            QWidget#TickerBar {
                background-color: rgba(0, 0, 0, 0.85);
            }
            """
        )

        self._oracle = QtTextOracle(self._text_label.font())
        self._place_along_top()

    @property
    def oracle(self) -> QtTextOracle:
        return self._oracle

    @property
    def text(self) -> str:
        return self._text_label.text()

    def text_width(self) -> int:
        """Pixels available to one line of ticker text."""
        return max(0, self.width() - 2 * _MARGIN - ICON_SIZE - _SPACING)

    def attach(self, controller: TickerController) -> None:
        """Render ``controller``'s output and keep it informed of this bar's width."""
        self._controller = controller
        controller.tickerStarting.connect(self._on_ticker_starting)  # type: ignore[arg-type]
        controller.textChanged.connect(self._on_text_changed)  # type: ignore[arg-type]
        controller.iconChanged.connect(self._on_icon_changed)  # type: ignore[arg-type]
        controller.textColorChanged.connect(self._apply_text_color)  # type: ignore[arg-type]
        controller.tickerDone.connect(self._on_ticker_finished)  # type: ignore[arg-type]
        controller.tickerHalted.connect(self._on_ticker_finished)  # type: ignore[arg-type]
        self._apply_text_color(controller.text_color)
        self._sync_geometry()

    def set_font_style(self, code: int) -> None:
        font = to_qfont(resolve_font_style(code), self._text_label.font().pointSizeF())
        self._text_label.setFont(font)
        self._oracle.set_font(font)
        if self._controller is not None:
            self._controller.reflow_text()

    def resizeEvent(self, event) -> None:  # noqa: N802
        super().resizeEvent(event)
        self._sync_geometry()

    def moveEvent(self, event) -> None:  # noqa: N802
        super().moveEvent(event)
        if self._controller is not None:
            self._controller.set_view_bounds(self.geometry())

    def _sync_geometry(self) -> None:
        if self._controller is None:
            return
        self._controller.set_available_width(self.text_width())
        self._controller.set_view_bounds(self.geometry())
        self._controller.reflow_text()

    def _on_ticker_starting(self) -> None:
        self._text_label.clear()
        self.show()

    def _on_ticker_finished(self) -> None:
        self.hide()
        self._text_label.clear()
        self._icon_label.setPixmap(self._default_pixmap)

    def _on_text_changed(self, text: str, _icon: Any) -> None:
        self._text_label.setText(text)

    def _on_icon_changed(self, icon: Any, tint: QColor, grayscale: bool) -> None:
        pixmap = self._to_pixmap(icon)
        if pixmap is None or pixmap.isNull():
            self._icon_label.setPixmap(self._default_pixmap)
            return
        if grayscale:
            pixmap = _tinted(pixmap, tint)
        self._icon_label.setPixmap(pixmap)

    def _apply_text_color(self, color: QColor) -> None:
        palette = self._text_label.palette()
        palette.setColor(QPalette.ColorRole.WindowText, color)
        self._text_label.setPalette(palette)

    def _to_pixmap(self, icon: Any) -> QPixmap | None:
        if isinstance(icon, QIcon):
            return icon.pixmap(QSize(ICON_SIZE, ICON_SIZE))
        if isinstance(icon, QPixmap):
            return icon.scaled(
                ICON_SIZE,
                ICON_SIZE,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        return None

    def _place_along_top(self) -> None:
        screen = QApplication.primaryScreen()
        if screen is None:
            self.resize(_FALLBACK_WIDTH, BAR_HEIGHT)
            return
        geometry = screen.availableGeometry()
        self.resize(geometry.width(), BAR_HEIGHT)
        self.move(QPoint(geometry.left(), geometry.top()))


def _tinted(pixmap: QPixmap, tint: QColor) -> QPixmap:
    result = QPixmap(pixmap.size())
    result.fill(Qt.GlobalColor.transparent)
    painter = QPainter(result)
    try:
        painter.drawPixmap(0, 0, pixmap)
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceIn)
        painter.fillRect(result.rect(), tint)
    finally:
        painter.end()
    return result
