"""YAML loading and selection of designer profiles."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from sticker_designer.constants import MAX_AUTO_SCALE
from sticker_designer.models.catalog import StickerCatalogEntry
from sticker_designer.models.profile import (
    BUILTIN_PROFILES,
    DesignerProfile,
    InteractiveStyle,
    PlacementSettings,
    TextDefaults,
)

logger = logging.getLogger(__name__)

PROFILE_ENV_VAR = "STICKER_DESIGNER_PROFILE"


class ProfileError(Exception):
    """Raised when a profile document fails validation."""


def resolve_profile(selector: Optional[str] = None) -> DesignerProfile:
    """Return a built-in profile by name or load one from a YAML path.

    Falls back to the ``STICKER_DESIGNER_PROFILE`` environment variable and then
    to the classic profile.
    """
    value = selector or os.getenv(PROFILE_ENV_VAR) or "classic"
    factory = BUILTIN_PROFILES.get(value)
    if factory is not None:
        return factory()
    return load_profile(Path(value))


def load_profile(path: Path) -> DesignerProfile:
    """Load a YAML profile, overriding the base profile it names."""
    if not path.exists():
        raise ProfileError(f"Profile file does not exist: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ProfileError(f"Profile {path} is not valid YAML: {exc}") from exc
    except OSError as exc:
        raise ProfileError(f"Unable to read profile {path}: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ProfileError("Profile YAML must be a mapping at the top level")

    profile = parse_profile(parsed, default_name=path.stem)
    logger.info("Loaded profile '%s' from %s", profile.name, path)
    return profile


def parse_profile(data: Dict[str, Any], default_name: str = "custom") -> DesignerProfile:
    base_name = data.get("base", "classic")
    if base_name not in BUILTIN_PROFILES:
        raise ProfileError(f"Unknown base profile: {base_name}")
    base = BUILTIN_PROFILES[base_name]()

    overrides: Dict[str, Any] = {"name": str(data.get("name", default_name))}
    for key in ("canvas_width", "canvas_height", "export_multiplier"):
        if key in data:
            overrides[key] = _expect_int(data, key)
    for key in ("vehicle_scale", "vehicle_vertical_divisor"):
        if key in data:
            overrides[key] = _expect_positive(data, key)
    for key in ("background_color", "demo_sticker_ref"):
        if key in data:
            overrides[key] = _expect_str(data, key)

    if "placement" in data:
        overrides["placement"] = _parse_placement(data["placement"], base.placement)
    if "style" in data:
        overrides["style"] = _parse_style(data["style"], base.style)
    if "text" in data:
        overrides["text"] = _parse_text(data["text"], base.text)
    if "catalog" in data:
        overrides["catalog"] = tuple(_parse_catalog(data["catalog"]))

    return replace(base, **overrides)


def _parse_placement(raw: Any, base: PlacementSettings) -> PlacementSettings:
    section = _expect_mapping(raw, "placement")
    values = {}
    for key in ("target_fraction_w", "target_fraction_h", "vertical_bias", "max_auto_scale"):
        if key in section:
            values[key] = _expect_positive(section, key, prefix="placement.")
    if values.get("max_auto_scale", 0.0) > MAX_AUTO_SCALE:
        raise ProfileError(f"Field 'placement.max_auto_scale' must not exceed {MAX_AUTO_SCALE}")
    return replace(base, **values)


def _parse_style(raw: Any, base: InteractiveStyle) -> InteractiveStyle:
    section = _expect_mapping(raw, "style")
    values: Dict[str, Any] = {}
    for key in ("corner_size", "border_scale_factor", "rotation_handle_offset"):
        if key in section:
            values[key] = _expect_positive(section, key, prefix="style.")
    for key in ("corner_color", "border_color"):
        if key in section:
            values[key] = _expect_str(section, key, prefix="style.")
    if "corner_style" in section:
        corner_style = _expect_str(section, "corner_style", prefix="style.")
        if corner_style not in {"circle", "rect"}:
            raise ProfileError("Field 'style.corner_style' must be 'circle' or 'rect'")
        values["corner_style"] = corner_style
    if "transparent_corners" in section:
        values["transparent_corners"] = bool(section["transparent_corners"])
    return replace(base, **values)


def _parse_text(raw: Any, base: TextDefaults) -> TextDefaults:
    section = _expect_mapping(raw, "text")
    values: Dict[str, Any] = {}
    if "font_family" in section:
        values["font_family"] = _expect_str(section, "font_family", prefix="text.")
    if "font_size_pt" in section:
        values["font_size_pt"] = _expect_positive(section, "font_size_pt", prefix="text.")
    if "fill_color" in section:
        values["fill_color"] = _expect_str(section, "fill_color", prefix="text.")
    return replace(base, **values)


def _parse_catalog(raw: Any) -> List[StickerCatalogEntry]:
    if not isinstance(raw, list):
        raise ProfileError("catalog must be a list")
    entries: List[StickerCatalogEntry] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ProfileError("Each catalog entry must be a mapping")
        prefix = f"catalog[{index}]."
        try:
            entries.append(
                StickerCatalogEntry(
                    id=int(item.get("id", index + 1)),
                    name=_expect_str(item, "name", prefix=prefix),
                    category=str(item.get("category", "custom")),
                    image_ref=_expect_str(item, "image", prefix=prefix),
                )
            )
        except KeyError as exc:
            raise ProfileError(f"Missing required field: {prefix}{exc.args[0]}") from exc
        except (TypeError, ValueError) as exc:
            raise ProfileError(f"Field '{prefix}id' must be an integer") from exc
    return entries


def _expect_mapping(raw: Any, field_name: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ProfileError(f"Section '{field_name}' must be a mapping")
    return raw


def _expect_str(mapping: Dict[str, Any], key: str, prefix: str = "") -> str:
    value = mapping[key]
    if not isinstance(value, str):
        raise ProfileError(f"Field '{prefix}{key}' must be a string")
    return value


def _expect_int(mapping: Dict[str, Any], key: str) -> int:
    value = mapping[key]
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ProfileError(f"Field '{key}' must be a positive integer")
    return value


def _expect_positive(mapping: Dict[str, Any], key: str, prefix: str = "") -> float:
    value = mapping[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProfileError(f"Field '{prefix}{key}' must be a number")
    if value <= 0:
        raise ProfileError(f"Field '{prefix}{key}' must be greater than zero")
    return float(value)


__all__ = ["PROFILE_ENV_VAR", "ProfileError", "load_profile", "parse_profile", "resolve_profile"]
