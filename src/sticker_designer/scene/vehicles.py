"""Built-in vector markup for vehicle silhouettes and the placeholder sticker."""

from __future__ import annotations

from sticker_designer.models.scene_object import VehicleKind

_VEHICLE_TEMPLATES = {
    VehicleKind.CAR: """<svg width="100" height="50" viewBox="0 0 100 50" xmlns="http://www.w3.org/2000/svg">
  <rect x="10" y="20" width="80" height="20" fill="#374151" rx="2"/>
  <rect x="15" y="15" width="70" height="10" fill="#4B5563" rx="1"/>
  <circle cx="25" cy="45" r="8" fill="#6B7280"/>
  <circle cx="75" cy="45" r="8" fill="#6B7280"/>
</svg>""",
    VehicleKind.BIKE: """<svg width="100" height="50" viewBox="0 0 100 50" xmlns="http://www.w3.org/2000/svg">
  <circle cx="20" cy="35" r="12" fill="#374151"/>
  <circle cx="80" cy="35" r="12" fill="#374151"/>
  <line x1="20" y1="35" x2="80" y2="35" stroke="#374151" stroke-width="3"/>
</svg>""",
    VehicleKind.TRUCK: """<svg width="100" height="50" viewBox="0 0 100 50" xmlns="http://www.w3.org/2000/svg">
  <rect x="10" y="25" width="40" height="20" fill="#374151" rx="2"/>
  <rect x="50" y="20" width="40" height="25" fill="#4B5563" rx="2"/>
  <circle cx="25" cy="50" r="8" fill="#6B7280"/>
  <circle cx="75" cy="50" r="8" fill="#6B7280"/>
</svg>""",
}

PLACEHOLDER_STICKER_SVG = """<svg width="60" height="60" viewBox="0 0 60 60" xmlns="http://www.w3.org/2000/svg">
  <rect width="60" height="60" rx="8" fill="#F3F4F6"/>
  <rect x="10" y="10" width="40" height="40" rx="4" fill="#E5E7EB"/>
  <text x="30" y="36" font-family="Arial" font-size="12" fill="#9CA3AF" text-anchor="middle">Sticker</text>
</svg>"""


def vehicle_markup(kind: object) -> str:
    """Return the silhouette markup for ``kind``; unknown kinds get the car."""
    return _VEHICLE_TEMPLATES[VehicleKind.parse(kind)]


__all__ = ["PLACEHOLDER_STICKER_SVG", "vehicle_markup"]
