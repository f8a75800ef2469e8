"""Tests for drops onto the design canvas."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QMimeData, QPointF, Qt, QUrl
from PySide6.QtGui import QDropEvent
from PySide6.QtWidgets import QApplication

from sticker_designer.ui.designer_view import DesignerView

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
app = QApplication.instance() or QApplication([])

SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"><rect width="10" height="10"/></svg>'


def _drop(view: DesignerView, mime: QMimeData) -> QDropEvent:
    event = QDropEvent(
        QPointF(10.0, 10.0),
        Qt.DropAction.CopyAction,
        mime,
        Qt.MouseButton.LeftButton,
        Qt.KeyboardModifier.NoModifier,
    )
    view.dropEvent(event)
    return event


def _collect(view: DesignerView):
    files, references = [], []
    view.fileDropped.connect(files.append)
    view.referenceDropped.connect(references.append)
    return files, references


def test_dropped_local_file_is_read(tmp_path: Path):
    path = tmp_path / "badge.svg"
    path.write_text(SVG, encoding="utf-8")
    view = DesignerView()
    files, references = _collect(view)
    mime = QMimeData()
    mime.setUrls([QUrl.fromLocalFile(str(path))])

    _drop(view, mime)

    assert [user_file.name for user_file in files] == ["badge.svg"]
    assert files[0].mime_type == "image/svg+xml"
    assert references == []


def test_dropped_directory_is_skipped(tmp_path: Path):
    folder = tmp_path / "stickers"
    folder.mkdir()
    path = tmp_path / "ok.svg"
    path.write_text(SVG, encoding="utf-8")
    view = DesignerView()
    files, references = _collect(view)
    mime = QMimeData()
    mime.setUrls([QUrl.fromLocalFile(str(folder)), QUrl.fromLocalFile(str(path))])

    _drop(view, mime)

    assert [user_file.name for user_file in files] == ["ok.svg"]
    assert references == []


def test_dropped_missing_file_is_skipped(tmp_path: Path):
    view = DesignerView()
    files, references = _collect(view)
    mime = QMimeData()
    mime.setUrls([QUrl.fromLocalFile(str(tmp_path / "gone.png"))])

    _drop(view, mime)

    assert files == []
    assert references == []


def test_dropped_remote_url_and_text_become_references():
    view = DesignerView()
    files, references = _collect(view)

    mime = QMimeData()
    mime.setUrls([QUrl("https://example.com/flame.svg")])
    _drop(view, mime)

    text = QMimeData()
    text.setText("  https://example.com/stripe.png  ")
    _drop(view, text)

    assert references == ["https://example.com/flame.svg", "https://example.com/stripe.png"]
    assert files == []
