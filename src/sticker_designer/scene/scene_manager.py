"""Ownership of the design scene: paint order, vehicle and export."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from PySide6.QtCore import QObject, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtWidgets import QGraphicsScene

from sticker_designer.constants import CLEAR_CONFIRMATION_MESSAGE
from sticker_designer.exporters.image import encode_png
from sticker_designer.models.profile import DesignerProfile
from sticker_designer.models.scene_object import VehicleKind
from sticker_designer.scene.items import InteractiveItem, SceneItem, VehicleItem
from sticker_designer.scene.vehicles import vehicle_markup

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]

VEHICLE_Z = -1.0


class SceneManager(QObject):
    """Mediates every addition, removal and clear of the design scene.

    The vehicle is always first in paint order; stickers follow in the order
    they were added. Until ``reset`` has been called every operation is a
    no-op.
    """

    sceneReplaced = Signal(object)
    objectAdded = Signal(object)
    sceneCleared = Signal()

    def __init__(
        self,
        profile: Optional[DesignerProfile] = None,
        confirm: Optional[ConfirmCallback] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._profile = profile or DesignerProfile.classic()
        self._confirm = confirm or (lambda _message: True)
        self._scene: Optional[QGraphicsScene] = None
        self._objects: List[SceneItem] = []
        self._vehicle_kind = VehicleKind.CAR
        self._canvas_width = self._profile.canvas_width
        self._canvas_height = self._profile.canvas_height
        self._generation = 0

    # Lifecycle ----------------------------------------------------------

    @property
    def profile(self) -> DesignerProfile:
        return self._profile

    @property
    def scene(self) -> Optional[QGraphicsScene]:
        return self._scene

    @property
    def generation(self) -> int:
        """Token bumped whenever the scene contents are thrown away."""
        return self._generation

    def is_current(self, token: int) -> bool:
        return self._scene is not None and token == self._generation

    def canvas_size(self) -> Tuple[int, int]:
        return self._canvas_width, self._canvas_height

    def reset(self, canvas_width: Optional[int] = None, canvas_height: Optional[int] = None) -> QGraphicsScene:
        """Dispose the current scene and start over with only the vehicle."""
        self._dispose_scene()
        self._canvas_width = int(canvas_width or self._profile.canvas_width)
        self._canvas_height = int(canvas_height or self._profile.canvas_height)

        scene = QGraphicsScene(self)
        scene.setSceneRect(QRectF(0, 0, self._canvas_width, self._canvas_height))
        scene.setBackgroundBrush(QColor(self._profile.background_color))
        self._scene = scene
        self._generation += 1

        self.set_vehicle(self._vehicle_kind)
        logger.debug(
            "Scene reset to %dx%d (generation %d)",
            self._canvas_width,
            self._canvas_height,
            self._generation,
        )
        self.sceneReplaced.emit(scene)
        return scene

    def _dispose_scene(self) -> None:
        if self._scene is None:
            return
        scene = self._scene
        self._scene = None
        self._objects.clear()
        scene.clear()
        scene.deleteLater()

    # Contents -----------------------------------------------------------

    def objects(self) -> List[SceneItem]:
        """Items in paint order, back to front."""
        return list(self._objects)

    def vehicle(self) -> Optional[VehicleItem]:
        if self._objects and isinstance(self._objects[0], VehicleItem):
            return self._objects[0]
        return None

    @property
    def vehicle_kind(self) -> VehicleKind:
        return self._vehicle_kind

    def selected_item(self) -> Optional[InteractiveItem]:
        if self._scene is None:
            return None
        selected = [item for item in self._scene.selectedItems() if isinstance(item, InteractiveItem)]
        return selected[0] if selected else None

    def set_vehicle(self, kind: object) -> Optional[VehicleItem]:
        """Swap the vehicle silhouette, keeping it at the back of the scene."""
        self._vehicle_kind = VehicleKind.parse(kind)
        if self._scene is None:
            logger.debug("set_vehicle ignored: no scene")
            return None

        existing = self.vehicle()
        if existing is not None:
            self._objects.remove(existing)
            self._scene.removeItem(existing)
            existing.deleteLater()

        vehicle = VehicleItem(self._vehicle_kind, vehicle_markup(self._vehicle_kind))
        vehicle.setScale(self._profile.vehicle_scale)
        vehicle.setPos(
            self._canvas_width / 2.0,
            self._canvas_height / self._profile.vehicle_vertical_divisor,
        )
        self._scene.addItem(vehicle)
        self._objects.insert(0, vehicle)
        self._restack()
        self._scene.update()
        return vehicle

    def add(self, item: SceneItem) -> None:
        """Append ``item`` to paint order and make it the only selection."""
        if self._scene is None:
            logger.debug("add ignored: no scene")
            return
        self._scene.addItem(item)
        self._objects.append(item)
        self._restack()
        self._scene.clearSelection()
        if isinstance(item, InteractiveItem):
            item.setSelected(True)
            item.modified.connect(self._scene.update)
        self._scene.update()
        self.objectAdded.emit(item)

    def clear(self) -> bool:
        """Empty the scene after confirmation, then reload the vehicle.

        Returns ``False`` when there is no scene or the user declined.
        """
        if self._scene is None:
            return False
        if not self._confirm(CLEAR_CONFIRMATION_MESSAGE):
            return False
        self._objects.clear()
        self._scene.clear()
        self._generation += 1
        self.set_vehicle(self._vehicle_kind)
        logger.info("Canvas cleared (generation %d)", self._generation)
        self.sceneCleared.emit()
        return True

    def _restack(self) -> None:
        for index, item in enumerate(self._objects):
            item.setZValue(VEHICLE_Z if isinstance(item, VehicleItem) else float(index))

    # Export -------------------------------------------------------------

    def render_image(self, multiplier: Optional[float] = None) -> Optional[QImage]:
        """Flatten paint order into an image ``multiplier`` times the canvas size."""
        if self._scene is None:
            return None
        factor = float(multiplier or self._profile.export_multiplier)
        image = QImage(
            int(round(self._canvas_width * factor)),
            int(round(self._canvas_height * factor)),
            QImage.Format.Format_ARGB32,
        )
        image.fill(QColor(self._profile.background_color))

        selected = self._scene.selectedItems()
        self._scene.clearSelection()
        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
            self._scene.render(
                painter,
                QRectF(0, 0, image.width(), image.height()),
                QRectF(0, 0, self._canvas_width, self._canvas_height),
                Qt.AspectRatioMode.IgnoreAspectRatio,
            )
        finally:
            painter.end()
        for item in selected:
            item.setSelected(True)
        return image

    def export_raster(self, multiplier: Optional[float] = None) -> Optional[bytes]:
        """Return the flattened scene encoded as PNG bytes."""
        image = self.render_image(multiplier)
        if image is None:
            return None
        return encode_png(image)


__all__ = ["SceneManager", "VEHICLE_Z"]
