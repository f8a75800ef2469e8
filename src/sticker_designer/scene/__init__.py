"""Scene composition: items, placement, factory and manager."""

from .items import InteractiveItem, SceneItem, StickerImageItem, StickerVectorItem, TextLabelItem, VehicleItem
from .object_factory import ObjectFactory
from .placement import PlacementPolicy
from .scene_manager import SceneManager

__all__ = [
    "InteractiveItem",
    "ObjectFactory",
    "PlacementPolicy",
    "SceneItem",
    "SceneManager",
    "StickerImageItem",
    "StickerVectorItem",
    "TextLabelItem",
    "VehicleItem",
]
