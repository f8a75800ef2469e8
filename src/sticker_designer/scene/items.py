"""Graphics items for every kind of object placed on the design canvas.

Local geometry of each item is centred on (0, 0), so the item position is the
object centre and Qt's scale/rotation pivot on it without extra bookkeeping.
"""

from __future__ import annotations

import math
from enum import Enum, auto
from typing import Optional

from PySide6.QtCore import QByteArray, QPointF, QRectF, QSizeF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QImage, QPainter, QPainterPath, QPen
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtWidgets import (
    QGraphicsItem,
    QGraphicsObject,
    QGraphicsSceneMouseEvent,
    QStyleOptionGraphicsItem,
    QWidget,
)

from sticker_designer.constants import MIN_INTERACTIVE_SCALE, ROTATION_SNAP_DEG
from sticker_designer.models.profile import InteractiveStyle
from sticker_designer.models.scene_object import SceneObjectKind, Transform, VehicleKind


class SceneItem(QGraphicsObject):
    """Base class for objects in the scene's paint order."""

    object_kind: SceneObjectKind

    def natural_size(self) -> QSizeF:
        raise NotImplementedError

    def bounding_box(self) -> QSizeF:
        """Fallback measurement used when the natural size is empty."""
        return self.natural_size()

    def content_rect(self) -> QRectF:
        size = self.natural_size()
        return QRectF(-size.width() / 2.0, -size.height() / 2.0, size.width(), size.height())

    def boundingRect(self) -> QRectF:  # noqa: N802 - Qt override
        return self.content_rect()

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: Optional[QWidget] = None,
    ) -> None:
        painter.save()
        self.paint_content(painter)
        painter.restore()

    def paint_content(self, painter: QPainter) -> None:
        raise NotImplementedError

    def transform_state(self) -> Transform:
        center = self.pos()
        return Transform(
            center_x=center.x(),
            center_y=center.y(),
            scale_x=self.scale(),
            scale_y=self.scale(),
            rotation_deg=self.rotation(),
        )

    def apply_transform(self, transform: Transform) -> None:
        # Qt items scale uniformly; the larger axis wins.
        self.setScale(max(transform.scale_x, transform.scale_y))
        self.setRotation(transform.rotation_deg)
        self.setPos(transform.center_x, transform.center_y)


class VehicleItem(SceneItem):
    """Non-interactive vehicle silhouette kept at the back of the scene."""

    object_kind = SceneObjectKind.VEHICLE
    non_interactive = True

    def __init__(self, kind: VehicleKind, markup: str) -> None:
        super().__init__()
        self.kind = kind
        self._renderer = QSvgRenderer(QByteArray(markup.encode("utf-8")), self)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsSelectable, False)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, False)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsFocusable, False)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setAcceptHoverEvents(False)

    def natural_size(self) -> QSizeF:
        return QSizeF(self._renderer.defaultSize())

    def shape(self) -> QPainterPath:
        # Empty shape keeps the vehicle out of hit-testing.
        return QPainterPath()

    def paint_content(self, painter: QPainter) -> None:
        self._renderer.render(painter, self.content_rect())


class InteractiveItem(SceneItem):
    """Sticker or text the user can drag, scale from the corners and rotate."""

    modified = Signal()

    class Gesture(Enum):
        IDLE = auto()
        SCALE = auto()
        ROTATE = auto()

    def __init__(self) -> None:
        super().__init__()
        self._style: Optional[InteractiveStyle] = None
        self._gesture = InteractiveItem.Gesture.IDLE
        self._gesture_origin = 0.0
        self._gesture_start_value = 0.0
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, True)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsSelectable, True)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemSendsGeometryChanges, True)

    # Styling ------------------------------------------------------------

    def set_interactive_style(self, style: InteractiveStyle) -> None:
        self.prepareGeometryChange()
        self._style = style
        self.update()

    def interactive_style(self) -> Optional[InteractiveStyle]:
        return self._style

    # Geometry -----------------------------------------------------------

    def _handle_margin(self) -> float:
        if self._style is None:
            return 0.0
        extent = self._style.corner_size + self._style.rotation_handle_offset
        return extent / max(self.scale(), MIN_INTERACTIVE_SCALE)

    def boundingRect(self) -> QRectF:  # noqa: N802 - Qt override
        margin = self._handle_margin()
        return self.content_rect().adjusted(-margin, -margin, margin, margin)

    def shape(self) -> QPainterPath:
        path = QPainterPath()
        path.addRect(self.content_rect())
        if self.isSelected() and self._style is not None:
            radius = self._handle_radius()
            for point in self._handle_points():
                path.addEllipse(point, radius, radius)
            path.addEllipse(self._rotation_handle_point(), radius, radius)
        return path

    def _handle_radius(self) -> float:
        size = self._style.corner_size if self._style is not None else 0.0
        return size / 2.0 / max(self.scale(), MIN_INTERACTIVE_SCALE)

    def _handle_points(self) -> list[QPointF]:
        rect = self.content_rect()
        return [rect.topLeft(), rect.topRight(), rect.bottomRight(), rect.bottomLeft()]

    def _rotation_handle_point(self) -> QPointF:
        rect = self.content_rect()
        offset = self._style.rotation_handle_offset if self._style is not None else 0.0
        return QPointF(rect.center().x(), rect.top() - offset / max(self.scale(), MIN_INTERACTIVE_SCALE))

    def itemChange(self, change, value):  # noqa: N802 - Qt override
        if change in (
            QGraphicsItem.GraphicsItemChange.ItemScaleChange,
            QGraphicsItem.GraphicsItemChange.ItemSelectedChange,
        ):
            self.prepareGeometryChange()
        return super().itemChange(change, value)

    # Painting -----------------------------------------------------------

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: Optional[QWidget] = None,
    ) -> None:
        super().paint(painter, option, widget)
        if self.isSelected() and self._style is not None:
            painter.save()
            self._paint_handles(painter)
            painter.restore()

    def _paint_handles(self, painter: QPainter) -> None:
        style = self._style
        assert style is not None
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)

        border_pen = QPen(QColor(style.border_color))
        border_pen.setCosmetic(True)
        border_pen.setWidthF(style.border_scale_factor)
        painter.setPen(border_pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        rect = self.content_rect()
        painter.drawRect(rect)
        rotation_point = self._rotation_handle_point()
        painter.drawLine(QPointF(rect.center().x(), rect.top()), rotation_point)

        corner_pen = QPen(QColor(style.corner_color))
        corner_pen.setCosmetic(True)
        painter.setPen(corner_pen)
        if style.transparent_corners:
            painter.setBrush(Qt.BrushStyle.NoBrush)
        else:
            painter.setBrush(QBrush(QColor(style.corner_color)))

        radius = self._handle_radius()
        for point in [*self._handle_points(), rotation_point]:
            if style.corner_style == "circle":
                painter.drawEllipse(point, radius, radius)
            else:
                painter.drawRect(QRectF(point.x() - radius, point.y() - radius, radius * 2, radius * 2))

    # Direct manipulation ------------------------------------------------

    def handle_at(self, local_pos: QPointF) -> "InteractiveItem.Gesture":
        """Return the gesture started by pressing at ``local_pos``."""
        if not self.isSelected() or self._style is None:
            return InteractiveItem.Gesture.IDLE
        reach = self._handle_radius() * 2.0
        if _distance(local_pos, self._rotation_handle_point()) <= reach:
            return InteractiveItem.Gesture.ROTATE
        for point in self._handle_points():
            if _distance(local_pos, point) <= reach:
                return InteractiveItem.Gesture.SCALE
        return InteractiveItem.Gesture.IDLE

    def begin_gesture(self, gesture: "InteractiveItem.Gesture", scene_pos: QPointF) -> None:
        self._gesture = gesture
        center = self.scenePos()
        if gesture is InteractiveItem.Gesture.SCALE:
            self._gesture_origin = max(_distance(scene_pos, center), 1e-6)
            self._gesture_start_value = self.scale()
        elif gesture is InteractiveItem.Gesture.ROTATE:
            self._gesture_origin = _angle_deg(center, scene_pos)
            self._gesture_start_value = self.rotation()

    def update_gesture(self, scene_pos: QPointF, snap: bool = False) -> None:
        center = self.scenePos()
        if self._gesture is InteractiveItem.Gesture.SCALE:
            ratio = _distance(scene_pos, center) / self._gesture_origin
            self.setScale(max(MIN_INTERACTIVE_SCALE, self._gesture_start_value * ratio))
        elif self._gesture is InteractiveItem.Gesture.ROTATE:
            angle = self._gesture_start_value + _angle_deg(center, scene_pos) - self._gesture_origin
            if snap:
                angle = round(angle / ROTATION_SNAP_DEG) * ROTATION_SNAP_DEG
            self.setRotation(angle % 360.0)

    def end_gesture(self) -> None:
        if self._gesture is not InteractiveItem.Gesture.IDLE:
            self._gesture = InteractiveItem.Gesture.IDLE
            self.modified.emit()

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.LeftButton:
            gesture = self.handle_at(event.pos())
            if gesture is not InteractiveItem.Gesture.IDLE:
                self.begin_gesture(gesture, event.scenePos())
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QGraphicsSceneMouseEvent) -> None:  # noqa: N802
        if self._gesture is not InteractiveItem.Gesture.IDLE:
            snap = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
            self.update_gesture(event.scenePos(), snap=snap)
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent) -> None:  # noqa: N802
        if self._gesture is not InteractiveItem.Gesture.IDLE:
            self.end_gesture()
            event.accept()
            return
        moved = event.buttonDownScenePos(Qt.MouseButton.LeftButton) != event.scenePos()
        super().mouseReleaseEvent(event)
        if moved:
            self.modified.emit()


class StickerImageItem(InteractiveItem):
    """Raster sticker decoded from a URL, a file or a data URL."""

    object_kind = SceneObjectKind.STICKER_IMAGE

    def __init__(self, image: QImage, source_ref: str) -> None:
        super().__init__()
        self.image = image
        self.source_ref = source_ref

    @property
    def natural_width(self) -> int:
        return self.image.width()

    @property
    def natural_height(self) -> int:
        return self.image.height()

    def natural_size(self) -> QSizeF:
        return QSizeF(self.image.size())

    def paint_content(self, painter: QPainter) -> None:
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        painter.drawImage(self.content_rect(), self.image)


class StickerVectorItem(InteractiveItem):
    """Vector markup parsed into one composite sticker."""

    object_kind = SceneObjectKind.STICKER_VECTOR

    def __init__(self, renderer: QSvgRenderer, source_markup: str, source_ref: Optional[str] = None) -> None:
        super().__init__()
        renderer.setParent(self)
        self._renderer = renderer
        self.source_markup = source_markup
        self.source_ref = source_ref

    def natural_size(self) -> QSizeF:
        size = QSizeF(self._renderer.defaultSize())
        if size.width() <= 0 or size.height() <= 0:
            return self.bounding_box()
        return size

    def bounding_box(self) -> QSizeF:
        box = self._renderer.viewBoxF()
        if box.isValid():
            return box.size()
        return QSizeF(0.0, 0.0)

    def paint_content(self, painter: QPainter) -> None:
        self._renderer.render(painter, self.content_rect())


class TextLabelItem(InteractiveItem):
    """Free-form text drawn with a system font."""

    object_kind = SceneObjectKind.TEXT_LABEL

    def __init__(self, content: str, font_family: str, font_size_pt: float, fill_color: str) -> None:
        super().__init__()
        self.content = content
        self.font_family = font_family
        self.font_size_pt = float(font_size_pt)
        self.fill_color = fill_color

    def font(self) -> QFont:
        font = QFont(self.font_family)
        font.setPointSizeF(self.font_size_pt)
        return font

    def natural_size(self) -> QSizeF:
        metrics = QFontMetricsF(self.font())
        return QSizeF(metrics.horizontalAdvance(self.content), metrics.height())

    def set_text_style(
        self,
        content: Optional[str] = None,
        font_family: Optional[str] = None,
        font_size_pt: Optional[float] = None,
        fill_color: Optional[str] = None,
    ) -> None:
        """Restyle the label in place, keeping its centre and transform."""
        self.prepareGeometryChange()
        if content is not None and content.strip():
            self.content = content
        if font_family is not None:
            self.font_family = font_family
        if font_size_pt is not None and font_size_pt > 0:
            self.font_size_pt = float(font_size_pt)
        if fill_color is not None:
            self.fill_color = fill_color
        self.update()
        self.modified.emit()

    def paint_content(self, painter: QPainter) -> None:
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
        painter.setFont(self.font())
        painter.setPen(QColor(self.fill_color))
        painter.drawText(self.content_rect(), Qt.AlignmentFlag.AlignCenter, self.content)


def _distance(a: QPointF, b: QPointF) -> float:
    return math.hypot(a.x() - b.x(), a.y() - b.y())


def _angle_deg(center: QPointF, point: QPointF) -> float:
    return math.degrees(math.atan2(point.y() - center.y(), point.x() - center.x()))


__all__ = [
    "InteractiveItem",
    "SceneItem",
    "StickerImageItem",
    "StickerVectorItem",
    "TextLabelItem",
    "VehicleItem",
]
