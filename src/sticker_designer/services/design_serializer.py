"""Sticker descriptors sent to the design persistence service."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from sticker_designer.scene.items import (
    SceneItem,
    StickerImageItem,
    StickerVectorItem,
    TextLabelItem,
    VehicleItem,
)


def describe_object(item: SceneItem) -> Dict[str, Any]:
    """Flatten one sticker or text label into a JSON-friendly mapping."""
    state = item.transform_state()
    payload: Dict[str, Any] = {
        "type": item.object_kind.value,
        "left": round(state.center_x, 3),
        "top": round(state.center_y, 3),
        "scaleX": round(state.scale_x, 6),
        "scaleY": round(state.scale_y, 6),
        "angle": round(state.rotation_deg, 3),
    }
    if isinstance(item, StickerImageItem):
        payload["source"] = item.source_ref
        payload["width"] = item.natural_width
        payload["height"] = item.natural_height
    elif isinstance(item, StickerVectorItem):
        if item.source_ref is not None:
            payload["source"] = item.source_ref
        else:
            payload["markup"] = item.source_markup
    elif isinstance(item, TextLabelItem):
        payload["text"] = item.content
        payload["fontFamily"] = item.font_family
        payload["fontSize"] = item.font_size_pt
        payload["fill"] = item.fill_color
    return payload


def describe_scene(items: Iterable[SceneItem]) -> List[Dict[str, Any]]:
    """Descriptors for every sticker in paint order, vehicle excluded."""
    return [describe_object(item) for item in items if not isinstance(item, VehicleItem)]


__all__ = ["describe_object", "describe_scene"]
