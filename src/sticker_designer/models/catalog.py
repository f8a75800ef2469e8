"""Sticker catalog reference data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class StickerCatalogEntry:
    """Gallery entry pointing at a sticker image or vector file."""

    id: int
    name: str
    category: str
    image_ref: str


ALL_CATEGORIES = "all"


def categories(entries: Iterable[StickerCatalogEntry]) -> List[str]:
    """Distinct categories in first-seen order."""
    seen: List[str] = []
    for entry in entries:
        if entry.category not in seen:
            seen.append(entry.category)
    return seen


def filter_by_category(
    entries: Iterable[StickerCatalogEntry], category: str
) -> List[StickerCatalogEntry]:
    if not category or category == ALL_CATEGORIES:
        return list(entries)
    return [entry for entry in entries if entry.category == category]


DEFAULT_CATALOG = (
    StickerCatalogEntry(
        id=1,
        name="Red Car Top",
        category="cars",
        image_ref="https://upload.wikimedia.org/wikipedia/commons/5/55/Red_car_top_view.svg",
    ),
    StickerCatalogEntry(
        id=2,
        name="Motorbike Icon",
        category="bikes",
        image_ref="https://upload.wikimedia.org/wikipedia/commons/f/f3/Motorbike_icon.svg",
    ),
    StickerCatalogEntry(
        id=3,
        name="Lightning Bolt",
        category="custom",
        image_ref="https://upload.wikimedia.org/wikipedia/commons/1/13/Lightning_bolt.svg",
    ),
    StickerCatalogEntry(
        id=4,
        name="Demo Logo",
        category="custom",
        image_ref="https://i.imgur.com/DS4Yy6v.png",
    ),
)


__all__ = [
    "ALL_CATEGORIES",
    "DEFAULT_CATALOG",
    "StickerCatalogEntry",
    "categories",
    "filter_by_category",
]
