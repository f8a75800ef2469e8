"""Tests for the auto-fit placement policy."""

from __future__ import annotations

import os

import pytest
from PySide6.QtGui import QColor, QImage
from PySide6.QtWidgets import QApplication

from sticker_designer.constants import MAX_AUTO_SCALE
from sticker_designer.models.profile import DesignerProfile, PlacementSettings
from sticker_designer.scene.items import StickerImageItem
from sticker_designer.scene.placement import PlacementPolicy, fit_scale, placement_transform
from sticker_designer.scene.scene_manager import SceneManager

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
app = QApplication.instance() or QApplication([])


def _image_item(width: int, height: int) -> StickerImageItem:
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(QColor("red"))
    return StickerImageItem(image, "memory.png")


def test_fit_scale_uses_tighter_axis():
    assert fit_scale((800.0, 100.0), None, (400.0, 175.0), 1.5) == pytest.approx(0.5)
    assert fit_scale((100.0, 700.0), None, (400.0, 175.0), 1.5) == pytest.approx(0.25)


def test_fit_scale_is_capped_for_small_sources():
    assert fit_scale((10.0, 10.0), None, (400.0, 175.0), MAX_AUTO_SCALE) == MAX_AUTO_SCALE


def test_fit_scale_falls_back_to_bounding_box():
    assert fit_scale((0.0, 0.0), (200.0, 350.0), (400.0, 175.0), 1.5) == pytest.approx(0.5)


def test_fit_scale_identity_when_unmeasurable():
    assert fit_scale((0.0, 0.0), (0.0, 0.0), (400.0, 175.0), 1.5) == 1.0
    assert fit_scale(None, None, (400.0, 175.0), 1.5) == 1.0


def test_placement_transform_is_biased_below_centre():
    transform = placement_transform((60.0, 60.0), None, (800.0, 500.0), PlacementSettings())
    assert transform.center_x == pytest.approx(400.0)
    assert transform.center_y == pytest.approx(275.0)
    assert transform.scale_x == transform.scale_y == pytest.approx(1.5)
    assert transform.rotation_deg == 0.0


def test_place_scales_large_image_down_and_selects_it():
    manager = SceneManager(DesignerProfile.classic())
    manager.reset(800, 500)
    policy = PlacementPolicy(manager, manager.profile)

    item = policy.place(_image_item(4000, 2000))

    assert item.scale() == pytest.approx(min(400 / 4000, 175 / 2000))
    assert item.pos().x() == pytest.approx(400.0)
    assert item.pos().y() == pytest.approx(275.0)
    assert item.interactive_style() == manager.profile.style
    assert manager.objects()[-1] is item
    assert manager.selected_item() is item


def test_place_respects_compact_profile_fractions():
    profile = DesignerProfile.compact()
    manager = SceneManager(profile)
    manager.reset(profile.canvas_width, profile.canvas_height)
    policy = PlacementPolicy(manager, profile)

    item = policy.place(_image_item(960, 240))

    assert item.scale() == pytest.approx(0.5)
    assert item.pos().y() == pytest.approx(300.0)


def test_auto_placed_scale_never_exceeds_ceiling():
    manager = SceneManager()
    manager.reset()
    policy = PlacementPolicy(manager, manager.profile)
    for width, height in [(1, 1), (16, 9), (400, 175), (10, 3000), (5000, 5)]:
        item = policy.place(_image_item(width, height))
        state = item.transform_state()
        assert 0 < state.scale_x <= MAX_AUTO_SCALE
        assert 0 < state.scale_y <= MAX_AUTO_SCALE


def test_placement_ceiling_holds_for_larger_configured_cap():
    settings = PlacementSettings(max_auto_scale=4.0)
    transform = placement_transform((60.0, 60.0), None, (800.0, 500.0), settings)
    assert transform.scale_x == transform.scale_y == pytest.approx(MAX_AUTO_SCALE)


def test_placement_honours_smaller_configured_cap():
    settings = PlacementSettings(max_auto_scale=0.75)
    transform = placement_transform((60.0, 60.0), None, (800.0, 500.0), settings)
    assert transform.scale_x == pytest.approx(0.75)
