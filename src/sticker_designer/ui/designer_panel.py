"""Side panel with the vehicle selector, sticker gallery and text form."""

from __future__ import annotations

from typing import Iterable, List, Optional

from PySide6.QtCore import QMimeData, QSignalBlocker, Qt, QUrl, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QColorDialog,
    QComboBox,
    QDoubleSpinBox,
    QFontComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from sticker_designer.models.catalog import (
    ALL_CATEGORIES,
    StickerCatalogEntry,
    categories,
    filter_by_category,
)
from sticker_designer.models.profile import TextDefaults
from sticker_designer.models.scene_object import VehicleKind

_REFERENCE_ROLE = Qt.ItemDataRole.UserRole


class GalleryList(QListWidget):
    """Sticker list whose entries can be dragged onto the canvas as URLs."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setDragEnabled(True)
        self.setSelectionMode(QListWidget.SelectionMode.SingleSelection)

    def mimeData(self, items: List[QListWidgetItem]) -> QMimeData:  # noqa: N802 - Qt override
        mime = QMimeData()
        references = [str(item.data(_REFERENCE_ROLE)) for item in items]
        mime.setUrls([QUrl(reference) for reference in references])
        mime.setText("\n".join(references))
        return mime


class DesignerPanel(QWidget):
    """Controls feeding the object factory and the scene manager."""

    vehicleChanged = Signal(str)
    referenceActivated = Signal(str)
    uploadRequested = Signal()
    addTextRequested = Signal(str, str, float, str)
    textStyleChanged = Signal(str, float, str)
    clearRequested = Signal()
    downloadRequested = Signal()
    saveRequested = Signal()

    def __init__(
        self,
        catalog: Iterable[StickerCatalogEntry],
        text_defaults: TextDefaults,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._catalog = list(catalog)
        self._text_color = text_defaults.fill_color

        self._vehicle_combo = QComboBox(self)
        for kind in VehicleKind:
            self._vehicle_combo.addItem(kind.value.title(), kind.value)
        self._vehicle_combo.currentIndexChanged.connect(self._emit_vehicle_changed)

        self._category_combo = QComboBox(self)
        self._category_combo.addItem("All", ALL_CATEGORIES)
        for category in categories(self._catalog):
            self._category_combo.addItem(category.title(), category)
        self._category_combo.currentIndexChanged.connect(self._refresh_gallery)

        self._gallery = GalleryList(self)
        self._gallery.itemClicked.connect(self._emit_reference)

        self._upload_button = QPushButton("Upload Image…", self)
        self._upload_button.setToolTip("Add a PNG, JPG, SVG or WEBP file from disk.")
        self._upload_button.clicked.connect(self.uploadRequested.emit)

        self._text_input = QLineEdit(self)
        self._text_input.setPlaceholderText("Your text")
        self._text_input.returnPressed.connect(self._emit_add_text)
        self._font_combo = QFontComboBox(self)
        self._font_combo.setCurrentText(text_defaults.font_family)
        self._size_spin = QDoubleSpinBox(self)
        self._size_spin.setRange(6.0, 200.0)
        self._size_spin.setValue(text_defaults.font_size_pt)
        self._size_spin.setKeyboardTracking(False)
        self._color_button = QPushButton(self)
        self._color_button.clicked.connect(self._choose_color)
        self._update_color_button()
        self._add_text_button = QPushButton("Add Text", self)
        self._add_text_button.clicked.connect(self._emit_add_text)

        self._font_combo.currentFontChanged.connect(self._emit_text_style)
        self._size_spin.valueChanged.connect(self._emit_text_style)

        self._clear_button = QPushButton("Clear", self)
        self._clear_button.clicked.connect(self.clearRequested.emit)
        self._download_button = QPushButton("Download PNG…", self)
        self._download_button.clicked.connect(self.downloadRequested.emit)
        self._save_button = QPushButton("Save Design", self)
        self._save_button.clicked.connect(self.saveRequested.emit)

        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(8, 8, 8, 8)
        root_layout.setSpacing(12)
        root_layout.addWidget(self._build_vehicle_group())
        root_layout.addWidget(self._build_gallery_group(), 1)
        root_layout.addWidget(self._build_text_group())

        action_row = QHBoxLayout()
        action_row.addWidget(self._clear_button)
        action_row.addWidget(self._download_button)
        action_row.addWidget(self._save_button)
        root_layout.addLayout(action_row)

        self._refresh_gallery()

    def _build_vehicle_group(self) -> QWidget:
        group = QGroupBox("Vehicle", self)
        form = QFormLayout(group)
        form.addRow("Type", self._vehicle_combo)
        return group

    def _build_gallery_group(self) -> QWidget:
        group = QGroupBox("Stickers", self)
        layout = QVBoxLayout(group)
        layout.addWidget(self._category_combo)
        layout.addWidget(self._gallery, 1)
        layout.addWidget(self._upload_button)
        return group

    def _build_text_group(self) -> QWidget:
        group = QGroupBox("Text", self)
        form = QFormLayout(group)
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight)
        form.addRow("Text", self._text_input)
        form.addRow("Font", self._font_combo)
        form.addRow("Size (pt)", self._size_spin)
        form.addRow("Color", self._color_button)
        form.addRow(self._add_text_button)
        return group

    # Gallery ------------------------------------------------------------

    def gallery_references(self) -> List[str]:
        return [
            str(self._gallery.item(row).data(_REFERENCE_ROLE)) for row in range(self._gallery.count())
        ]

    def set_category(self, category: str) -> None:
        index = self._category_combo.findData(category)
        if index >= 0:
            self._category_combo.setCurrentIndex(index)

    def _refresh_gallery(self) -> None:
        self._gallery.clear()
        category = self._category_combo.currentData() or ALL_CATEGORIES
        for entry in filter_by_category(self._catalog, category):
            item = QListWidgetItem(f"{entry.name}  ({entry.category})")
            item.setData(_REFERENCE_ROLE, entry.image_ref)
            item.setToolTip(entry.image_ref)
            self._gallery.addItem(item)

    def _emit_reference(self, item: QListWidgetItem) -> None:
        self.referenceActivated.emit(str(item.data(_REFERENCE_ROLE)))

    def _emit_vehicle_changed(self) -> None:
        self.vehicleChanged.emit(str(self._vehicle_combo.currentData()))

    # Text form ----------------------------------------------------------

    def set_text_form(self, font_family: str, size_pt: float, color: str) -> None:
        """Mirror the active text label in the form without re-emitting."""
        blockers = [QSignalBlocker(widget) for widget in (self._font_combo, self._size_spin)]
        self._font_combo.setCurrentText(font_family)
        self._size_spin.setValue(size_pt)
        self._text_color = color
        self._update_color_button()
        del blockers

    def clear_text_input(self) -> None:
        self._text_input.clear()

    def _choose_color(self) -> None:
        color = QColorDialog.getColor(QColor(self._text_color), self, "Text color")
        if not color.isValid():
            return
        self._text_color = color.name()
        self._update_color_button()
        self._emit_text_style()

    def _update_color_button(self) -> None:
        self._color_button.setText(self._text_color)
        self._color_button.setStyleSheet(f"background-color: {self._text_color};")

    def _emit_add_text(self) -> None:
        self.addTextRequested.emit(
            self._text_input.text(),
            self._font_combo.currentFont().family(),
            self._size_spin.value(),
            self._text_color,
        )

    def _emit_text_style(self) -> None:
        self.textStyleChanged.emit(
            self._font_combo.currentFont().family(),
            self._size_spin.value(),
            self._text_color,
        )


__all__ = ["DesignerPanel", "GalleryList"]
