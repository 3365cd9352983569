"""Full-screen banner display (also used as the live preview in the style dialog)."""

from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QKeyEvent,
    QLinearGradient,
    QMouseEvent,
    QPainter,
    QPainterPath,
    QPen,
    QPixmap,
)
from PySide6.QtWidgets import QWidget

from ibanner.models.banner_style import AnimationType, BannerStyle, Color, FontStyle
from ibanner.services.animation_driver import AnimationDriver
from ibanner.services.animation_engine import (
    FLASH_FONT_SCALE,
    GRADIENT_OPACITY,
    AnimationFrame,
)
from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.utils.config import DISMISS_DRAG_DISTANCE, TEXT_HORIZONTAL_PADDING

# Smallest font shrink factor applied when static text is wider than the screen
_MIN_TEXT_SCALE = 0.5


def to_qcolor(color: Color) -> QColor:
    return QColor.fromRgbF(color.red, color.green, color.blue, color.alpha)


def make_font(style: BannerStyle, scale: float = 1.0) -> QFont:
    font = QFont()
    font.setPixelSize(max(1, round(style.font_size * scale)))
    font.setBold(style.is_bold)
    return font


def measure_text_width(style: BannerStyle, text: str | None = None) -> float:
    """Rendered width of the banner text at the style's font size and weight."""
    return QFontMetricsF(make_font(style)).horizontalAdvance(
        style.text if text is None else text
    )


class BannerDisplayWidget(QWidget):
    """Paints a banner and runs its animation.

    In full-screen mode a double-click, a downward drag or Escape closes the
    widget; ``dismissed`` is emitted once the animation has been stopped.
    """

    dismissed = Signal()

    def __init__(
        self,
        style: BannerStyle,
        data_manager: BannerDataManager | None = None,
        preview: bool = False,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._style = style.copy()
        self._data = data_manager
        self._preview = preview
        self._background: QPixmap | None = None
        self._press_pos: QPointF | None = None

        self._driver = AnimationDriver(parent=self)
        self._driver.frame_changed.connect(self._on_frame)
        self._frame = AnimationFrame()

        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        if not preview:
            self.setWindowFlag(Qt.WindowType.FramelessWindowHint)
            self.setCursor(Qt.CursorShape.BlankCursor)
        self._load_background()

    # ------------------------------------------------------------------ Public

    @property
    def driver(self) -> AnimationDriver:
        return self._driver

    def banner_style(self) -> BannerStyle:
        return self._style.copy()

    def set_style(self, style: BannerStyle) -> None:
        self._style = style.copy()
        self._load_background()
        if self.isVisible():
            self._restart()
        self.update()

    def show_banner(self) -> None:
        """Show full-screen and start the animation."""
        self.showFullScreen()
        self.activateWindow()
        self.setFocus()

    # ------------------------------------------------------------------ Animation

    def _restart(self) -> None:
        self._driver.start(
            self._style,
            self.width(),
            self.height(),
            measure_text_width(self._style),
        )

    def _on_frame(self, frame: AnimationFrame) -> None:
        self._frame = frame
        self.update()

    def _load_background(self) -> None:
        self._background = None
        if self._data is None or not self._style.uses_background_image():
            return
        path = self._data.resolve_image_path(self._style.background_image_path)
        if path is not None and path.is_file():
            pixmap = QPixmap(str(path))
            if not pixmap.isNull():
                self._background = pixmap

    # ------------------------------------------------------------------ Events

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._restart()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        if self.isVisible():
            self._restart()

    def hideEvent(self, event) -> None:
        self._driver.stop()
        super().hideEvent(event)

    def closeEvent(self, event) -> None:
        self._driver.stop()
        super().closeEvent(event)
        if not self._preview:
            self.dismissed.emit()

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        if not self._preview:
            self.close()
            return
        super().mouseDoubleClickEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self._press_pos = event.position()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        start, self._press_pos = self._press_pos, None
        if (
            not self._preview
            and start is not None
            and event.position().y() - start.y() > DISMISS_DRAG_DISTANCE
        ):
            self.close()
            return
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if not self._preview and event.key() == Qt.Key.Key_Escape:
            self.close()
            return
        super().keyPressEvent(event)

    # ------------------------------------------------------------------ Painting

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        self._paint_background(painter)
        self._paint_gradient(painter)
        self._paint_text(painter)
        painter.end()

    def _paint_background(self, painter: QPainter) -> None:
        rect = QRectF(self.rect())
        painter.fillRect(rect, to_qcolor(self._style.background_color))
        if self._background is None:
            return
        # fill the screen while keeping the aspect ratio, then crop
        scaled = self._background.scaled(
            self.size(),
            Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            Qt.TransformationMode.SmoothTransformation,
        )
        x = (self.width() - scaled.width()) / 2
        y = (self.height() - scaled.height()) / 2
        painter.save()
        painter.setOpacity(self._style.background_image_opacity)
        painter.drawPixmap(QPointF(x, y), scaled)
        painter.restore()

    def _paint_gradient(self, painter: QPainter) -> None:
        colors = self._frame.gradient_colors
        if not colors:
            return
        w, h = self.width(), self.height()
        painter.save()
        painter.setOpacity(GRADIENT_OPACITY)
        # two tiles so the looping offset never shows a gap
        for tile in (0, 1):
            left = self._frame.gradient_offset_x + tile * w
            gradient = QLinearGradient(left, 0, left + w, 0)
            for i, color in enumerate(colors):
                gradient.setColorAt(i / (len(colors) - 1), to_qcolor(color))
            painter.fillRect(QRectF(left, 0, w, h), QBrush(gradient))
        painter.restore()

    def _paint_text(self, painter: QPainter) -> None:
        frame = self._frame
        if frame.flashes:
            self._paint_flashes(painter, frame)
        elif self._driver.engine.animation_type is AnimationType.SCROLL:
            self._paint_scroll(painter, frame)
        else:
            self._paint_centered(painter, frame)

    def _paint_centered(self, painter: QPainter, frame: AnimationFrame) -> None:
        text = self._style.text if frame.revealed_text is None else frame.revealed_text
        if not text:
            return
        avail = max(1.0, self.width() - 2 * TEXT_HORIZONTAL_PADDING)
        full_width = measure_text_width(self._style)
        shrink = 1.0 if full_width <= avail else max(_MIN_TEXT_SCALE, avail / full_width)
        font = make_font(self._style, shrink)

        center = QPointF(self.width() / 2, self.height() / 2)
        painter.save()
        painter.setOpacity(frame.opacity)
        painter.translate(center)
        painter.scale(frame.scale, frame.scale)
        path = self._text_path(text, font, QPointF(0, 0))
        self._draw_styled_path(painter, path)
        painter.restore()

    def _paint_scroll(self, painter: QPainter, frame: AnimationFrame) -> None:
        font = make_font(self._style)
        fm = QFontMetricsF(font)
        text_width = fm.horizontalAdvance(self._style.text)
        spacing = self.width() * 0.5
        baseline = self.height() / 2 + (fm.ascent() - fm.descent()) / 2
        x = frame.text_offset_x
        while x < self.width():
            path = QPainterPath()
            path.addText(x, baseline, font, self._style.text)
            self._draw_styled_path(painter, path)
            x += text_width + spacing
            if text_width + spacing <= 0:
                break

    def _paint_flashes(self, painter: QPainter, frame: AnimationFrame) -> None:
        font = make_font(self._style, FLASH_FONT_SCALE)
        for slot in frame.flashes:
            if slot.opacity <= 0.0:
                continue
            painter.save()
            painter.setOpacity(slot.opacity)
            painter.translate(slot.x, slot.y)
            painter.scale(slot.scale, slot.scale)
            self._draw_styled_path(painter, self._text_path(self._style.text, font, QPointF(0, 0)))
            painter.restore()

    @staticmethod
    def _text_path(text: str, font: QFont, center: QPointF) -> QPainterPath:
        fm = QFontMetricsF(font)
        width = fm.horizontalAdvance(text)
        baseline = center.y() + (fm.ascent() - fm.descent()) / 2
        path = QPainterPath()
        path.addText(center.x() - width / 2, baseline, font, text)
        return path

    def _draw_styled_path(self, painter: QPainter, path: QPainterPath) -> None:
        color = to_qcolor(self._style.text_color)
        painter.setPen(Qt.PenStyle.NoPen)

        if self._style.font_style is FontStyle.NEON:
            # outer to inner glow, then a white core
            for width, alpha in ((15, 0.15), (10, 0.25), (5, 0.4)):
                glow = QColor(color)
                glow.setAlphaF(color.alphaF() * alpha)
                pen = QPen(glow)
                pen.setWidthF(width)
                pen.setCapStyle(Qt.PenCapStyle.RoundCap)
                pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
                painter.strokePath(path, pen)
            painter.fillPath(path, QBrush(color))
            core = QColor(255, 255, 255)
            core.setAlphaF(0.8)
            painter.fillPath(path, QBrush(core))
            return

        if self._style.font_style is FontStyle.ARTISTIC:
            shadow = QColor(color)
            shadow.setAlphaF(color.alphaF() * 0.3)
            painter.fillPath(path.translated(2, 2), QBrush(shadow))
            bounds = path.boundingRect()
            gradient = QLinearGradient(bounds.topLeft(), bounds.bottomRight())
            faded = QColor(color)
            faded.setAlphaF(color.alphaF() * 0.7)
            gradient.setColorAt(0.0, color)
            gradient.setColorAt(0.5, faded)
            gradient.setColorAt(1.0, color)
            painter.fillPath(path, QBrush(gradient))
            return

        painter.fillPath(path, QBrush(color))
