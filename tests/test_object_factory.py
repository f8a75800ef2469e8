"""Tests for building stickers and text labels from references and uploads."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from PySide6.QtCore import QElapsedTimer
from PySide6.QtGui import QColor, QImage
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication

from sticker_designer.constants import EMPTY_TEXT_MESSAGE, INVALID_UPLOAD_MESSAGE
from sticker_designer.exporters.image import encode_png
from sticker_designer.models.scene_object import SceneObjectKind
from sticker_designer.models.user_file import UserFile
from sticker_designer.scene.items import StickerImageItem, StickerVectorItem, TextLabelItem
from sticker_designer.scene.object_factory import ObjectFactory, decode_image, parse_vector
from sticker_designer.scene.scene_manager import SceneManager
from sticker_designer.services.references import to_data_url

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
app = QApplication.instance() or QApplication([])

SQUARE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="40" height="20" viewBox="0 0 40 20">'
    '<rect width="40" height="20" fill="#ff0000"/></svg>'
)


def _png_bytes(width: int = 32, height: int = 16) -> bytes:
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(QColor("#22c55e"))
    return encode_png(image)


def _wait_until(predicate, timeout_ms: int = 2000) -> bool:
    timer = QElapsedTimer()
    timer.start()
    while not predicate():
        if timer.elapsed() > timeout_ms:
            return False
        QTest.qWait(10)
    return True


def _settle() -> None:
    QTest.qWait(50)


@pytest.fixture
def notices():
    return []


@pytest.fixture
def manager():
    scene_manager = SceneManager()
    scene_manager.reset(800, 500)
    return scene_manager


@pytest.fixture
def factory(manager, notices):
    return ObjectFactory(manager, notify=notices.append)


def _stickers(manager: SceneManager):
    return manager.objects()[1:]


def _assert_placeholder(item) -> None:
    assert isinstance(item, StickerVectorItem)
    assert item.source_ref is None
    assert "Sticker" in item.source_markup
    assert item.pos().x() == pytest.approx(400.0)
    assert item.pos().y() == pytest.approx(275.0)
    assert item.scale() == pytest.approx(1.5)


def test_decode_image_rejects_garbage():
    assert decode_image(b"not an image", "x.png") is None
    item = decode_image(_png_bytes(), "x.png")
    assert item is not None
    assert (item.natural_width, item.natural_height) == (32, 16)


def test_parse_vector_rejects_malformed_markup():
    assert parse_vector(b"<svg><rect") is None
    item = parse_vector(SQUARE_SVG.encode("utf-8"))
    assert item is not None
    assert item.natural_size().width() == pytest.approx(40.0)


def test_uppercase_svg_file_becomes_vector(tmp_path: Path, manager, factory):
    path = tmp_path / "LOGO.SVG"
    path.write_text(SQUARE_SVG, encoding="utf-8")

    factory.add_reference(str(path))

    assert _wait_until(lambda: len(manager.objects()) == 2)
    item = _stickers(manager)[0]
    assert isinstance(item, StickerVectorItem)
    assert item.source_ref == str(path)
    assert item.isSelected()


def test_png_file_becomes_image(tmp_path: Path, manager, factory):
    path = tmp_path / "badge.png"
    path.write_bytes(_png_bytes(200, 100))

    factory.add_reference(str(path))

    assert _wait_until(lambda: len(manager.objects()) == 2)
    item = _stickers(manager)[0]
    assert isinstance(item, StickerImageItem)
    assert item.pos().x() == pytest.approx(400.0)
    assert item.pos().y() == pytest.approx(275.0)
    assert item.scale() == pytest.approx(1.5)
    assert item.interactive_style() == manager.profile.style


def test_missing_file_falls_back_to_placeholder(tmp_path: Path, manager, factory):
    factory.add_reference(str(tmp_path / "missing.png"))

    assert _wait_until(lambda: len(manager.objects()) == 2)
    _assert_placeholder(_stickers(manager)[0])


def test_corrupt_image_falls_back_to_placeholder(tmp_path: Path, manager, factory):
    path = tmp_path / "broken.png"
    path.write_bytes(b"\x89PNG but not really")

    factory.add_reference(str(path))

    assert _wait_until(lambda: len(manager.objects()) == 2)
    _assert_placeholder(_stickers(manager)[0])


def test_malformed_inline_markup_falls_back_to_placeholder(manager, factory):
    factory.from_vector_markup("<svg><g></svg")

    assert _wait_until(lambda: len(manager.objects()) == 2)
    _assert_placeholder(_stickers(manager)[0])


def test_inline_markup_is_added_without_source(manager, factory):
    factory.from_vector_markup(SQUARE_SVG)

    assert _wait_until(lambda: len(manager.objects()) == 2)
    item = _stickers(manager)[0]
    assert isinstance(item, StickerVectorItem)
    assert item.source_ref is None
    assert item.source_markup == SQUARE_SVG


def test_data_url_reference(manager, factory):
    factory.add_reference(to_data_url("image/png", _png_bytes()))

    assert _wait_until(lambda: len(manager.objects()) == 2)
    assert isinstance(_stickers(manager)[0], StickerImageItem)


def test_rejected_upload_notifies_and_adds_nothing(manager, factory, notices):
    accepted = factory.from_user_file(UserFile("notes.txt", "text/plain", b"hello"))
    _settle()

    assert accepted is False
    assert notices == [INVALID_UPLOAD_MESSAGE]
    assert len(manager.objects()) == 1


@pytest.mark.parametrize(
    ("name", "mime_type", "payload", "expected"),
    [
        ("a.png", "image/png", _png_bytes(), StickerImageItem),
        ("b.svg", "image/svg+xml", SQUARE_SVG.encode("utf-8"), StickerVectorItem),
    ],
)
def test_accepted_uploads(manager, factory, notices, name, mime_type, payload, expected):
    assert factory.from_user_file(UserFile(name, mime_type, payload)) is True

    assert _wait_until(lambda: len(manager.objects()) == 2)
    item = _stickers(manager)[0]
    assert isinstance(item, expected)
    assert item.source_ref.startswith(f"data:{mime_type}")
    assert notices == []


def test_uploaded_vector_keeps_markup(manager, factory):
    factory.from_user_file(UserFile("b.svg", "image/svg+xml", SQUARE_SVG.encode("utf-8")))

    assert _wait_until(lambda: len(manager.objects()) == 2)
    assert _stickers(manager)[0].source_markup == SQUARE_SVG


@pytest.mark.parametrize("content", ["", "   ", None])
def test_empty_text_is_rejected(manager, factory, notices, content):
    assert factory.make_text(content) is None
    assert notices == [EMPTY_TEXT_MESSAGE]
    assert len(manager.objects()) == 1


def test_make_text_places_label_at_centre(manager, factory):
    item = factory.make_text("Hello", "Arial", 36, "#ef4444")

    assert isinstance(item, TextLabelItem)
    assert item.content == "Hello"
    assert item.font_size_pt == pytest.approx(36.0)
    assert item.fill_color == "#ef4444"
    assert item.pos().x() == pytest.approx(400.0)
    assert item.pos().y() == pytest.approx(250.0)
    assert item.scale() == pytest.approx(1.0)
    assert item.isSelected()
    assert manager.objects()[-1] is item


def test_make_text_uses_profile_defaults(manager, factory):
    item = factory.make_text("Defaults")
    defaults = manager.profile.text
    assert item.font_family == defaults.font_family
    assert item.font_size_pt == pytest.approx(defaults.font_size_pt)
    assert item.fill_color == defaults.fill_color


def test_result_after_reset_is_dropped(tmp_path: Path, manager, factory):
    path = tmp_path / "late.png"
    path.write_bytes(_png_bytes())

    factory.add_reference(str(path))
    manager.reset(800, 500)
    _settle()

    assert [item.object_kind for item in manager.objects()] == [SceneObjectKind.VEHICLE]


def test_failure_after_clear_adds_no_placeholder(tmp_path: Path, manager, factory):
    factory.add_reference(str(tmp_path / "missing.png"))
    manager.clear()
    _settle()

    assert [item.object_kind for item in manager.objects()] == [SceneObjectKind.VEHICLE]


def test_requests_before_reset_are_ignored(notices):
    idle = SceneManager()
    factory = ObjectFactory(idle, notify=notices.append)

    factory.from_vector_markup(SQUARE_SVG)
    assert factory.make_text("nobody home") is None
    assert factory.add_placeholder() is None
    _settle()

    assert idle.objects() == []


def test_user_file_from_path_sniffs_mime(tmp_path: Path):
    png = tmp_path / "pic.png"
    png.write_bytes(_png_bytes())
    svg = tmp_path / "art.svg"
    svg.write_text(SQUARE_SVG, encoding="utf-8")

    assert UserFile.from_path(png).mime_type == "image/png"
    assert UserFile.from_path(svg).mime_type == "image/svg+xml"
    assert UserFile.from_path(png).name == "pic.png"
