"""Initial fit, position and handle styling of newly created stickers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

from PySide6.QtCore import QSizeF

from sticker_designer.constants import MAX_AUTO_SCALE
from sticker_designer.models.profile import DesignerProfile, InteractiveStyle, PlacementSettings
from sticker_designer.models.scene_object import Transform
from sticker_designer.scene.items import InteractiveItem

if TYPE_CHECKING:
    from sticker_designer.scene.scene_manager import SceneManager


def _measurable(size: Optional[Tuple[float, float]]) -> bool:
    return size is not None and size[0] > 0 and size[1] > 0


def fit_scale(
    natural: Optional[Tuple[float, float]],
    bounding_box: Optional[Tuple[float, float]],
    target: Tuple[float, float],
    max_scale: float,
) -> float:
    """Uniform scale fitting an object into ``target``, capped at ``max_scale``.

    The natural size wins; an unmeasured object falls back to its bounding box,
    and an object with neither keeps identity scale.
    """
    size = natural if _measurable(natural) else bounding_box
    if not _measurable(size):
        return 1.0
    assert size is not None
    width, height = size
    return min(target[0] / width, target[1] / height, max_scale)


def placement_transform(
    natural: Optional[Tuple[float, float]],
    bounding_box: Optional[Tuple[float, float]],
    canvas_size: Tuple[float, float],
    settings: PlacementSettings,
) -> Transform:
    canvas_w, canvas_h = canvas_size
    target = (canvas_w * settings.target_fraction_w, canvas_h * settings.target_fraction_h)
    scale = fit_scale(natural, bounding_box, target, min(settings.max_auto_scale, MAX_AUTO_SCALE))
    return Transform(
        center_x=canvas_w / 2.0,
        center_y=canvas_h * settings.vertical_bias,
        scale_x=scale,
        scale_y=scale,
    )


def apply_interactive_style(item: InteractiveItem, style: InteractiveStyle) -> None:
    item.set_interactive_style(style)


def _as_tuple(size: QSizeF) -> Tuple[float, float]:
    return size.width(), size.height()


class PlacementPolicy:
    """Fit a new sticker to the canvas and hand it to the scene manager."""

    def __init__(self, manager: "SceneManager", profile: DesignerProfile) -> None:
        self._manager = manager
        self._profile = profile

    def transform_for(self, item: InteractiveItem) -> Transform:
        width, height = self._manager.canvas_size()
        return placement_transform(
            _as_tuple(item.natural_size()),
            _as_tuple(item.bounding_box()),
            (float(width), float(height)),
            self._profile.placement,
        )

    def place(self, item: InteractiveItem) -> InteractiveItem:
        item.apply_transform(self.transform_for(item))
        apply_interactive_style(item, self._profile.style)
        self._manager.add(item)
        return item


__all__ = ["PlacementPolicy", "apply_interactive_style", "fit_scale", "placement_transform"]
