"""Tags and transform records shared by every object placed on the canvas."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class VehicleKind(str, Enum):
    """Vehicle silhouettes available as the canvas background."""

    CAR = "car"
    BIKE = "bike"
    TRUCK = "truck"

    @classmethod
    def parse(cls, value: object) -> "VehicleKind":
        """Return the matching kind, falling back to a car for unknown values."""
        if isinstance(value, VehicleKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.CAR


class SceneObjectKind(str, Enum):
    """Discriminant of the scene object union."""

    VEHICLE = "vehicle"
    STICKER_IMAGE = "sticker_image"
    STICKER_VECTOR = "sticker_vector"
    TEXT_LABEL = "text_label"


@dataclass(frozen=True)
class Transform:
    """Placement of an object, pivoting on its centre."""

    center_x: float
    center_y: float
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation_deg: float = 0.0


__all__ = ["VehicleKind", "SceneObjectKind", "Transform"]
