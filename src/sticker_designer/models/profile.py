"""Designer profile: canvas size, placement tuning and handle styling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from sticker_designer.constants import DEFAULT_EXPORT_MULTIPLIER, MAX_AUTO_SCALE
from sticker_designer.models.catalog import DEFAULT_CATALOG, StickerCatalogEntry


@dataclass(frozen=True)
class InteractiveStyle:
    """Selection affordance shared by every user-manipulable object."""

    corner_size: float = 10.0
    corner_color: str = "#6366f1"
    corner_style: str = "circle"  # "circle" or "rect"
    transparent_corners: bool = False
    border_color: str = "#6366f1"
    border_scale_factor: float = 2.0
    rotation_handle_offset: float = 30.0  # pixels above the top edge


@dataclass(frozen=True)
class PlacementSettings:
    """Auto-fit target region and vertical bias for new stickers."""

    target_fraction_w: float = 0.5
    target_fraction_h: float = 0.35
    vertical_bias: float = 0.55
    max_auto_scale: float = MAX_AUTO_SCALE


@dataclass(frozen=True)
class TextDefaults:
    font_family: str = "Arial"
    font_size_pt: float = 28.0
    fill_color: str = "#111827"


@dataclass(frozen=True)
class DesignerProfile:
    """Every tunable value of a designer session."""

    name: str = "classic"
    canvas_width: int = 800
    canvas_height: int = 500
    background_color: str = "#ffffff"
    placement: PlacementSettings = field(default_factory=PlacementSettings)
    vehicle_scale: float = 3.0
    vehicle_vertical_divisor: float = 2.2
    style: InteractiveStyle = field(default_factory=InteractiveStyle)
    text: TextDefaults = field(default_factory=TextDefaults)
    export_multiplier: int = DEFAULT_EXPORT_MULTIPLIER
    catalog: Tuple[StickerCatalogEntry, ...] = DEFAULT_CATALOG
    demo_sticker_ref: Optional[str] = None

    @classmethod
    def classic(cls) -> "DesignerProfile":
        """800x500 canvas, stickers fitted into half the width."""
        return cls()

    @classmethod
    def compact(cls) -> "DesignerProfile":
        """800x600 canvas with a larger fit region and a 2x vehicle."""
        return cls(
            name="compact",
            canvas_height=600,
            placement=PlacementSettings(
                target_fraction_w=0.6,
                target_fraction_h=0.4,
                vertical_bias=0.5,
            ),
            vehicle_scale=2.0,
            vehicle_vertical_divisor=2.0,
        )

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.canvas_width, self.canvas_height


BUILTIN_PROFILES = {
    "classic": DesignerProfile.classic,
    "compact": DesignerProfile.compact,
}


__all__ = [
    "BUILTIN_PROFILES",
    "DesignerProfile",
    "InteractiveStyle",
    "PlacementSettings",
    "TextDefaults",
]
