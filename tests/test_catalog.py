"""Tests for sticker catalog helpers."""

from __future__ import annotations

from sticker_designer.models.catalog import (
    ALL_CATEGORIES,
    DEFAULT_CATALOG,
    categories,
    filter_by_category,
)


def test_categories_keep_first_seen_order():
    assert categories(DEFAULT_CATALOG) == ["cars", "bikes", "custom"]


def test_filter_by_category():
    custom = filter_by_category(DEFAULT_CATALOG, "custom")
    assert [entry.name for entry in custom] == ["Lightning Bolt", "Demo Logo"]
    assert filter_by_category(DEFAULT_CATALOG, ALL_CATEGORIES) == list(DEFAULT_CATALOG)
    assert filter_by_category(DEFAULT_CATALOG, "boats") == []
