"""Main window definition for the sticker designer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QDockWidget,
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QStatusBar,
)

from sticker_designer.constants import (
    DEFAULT_DESIGN_SERVICE_URL,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
)
from sticker_designer.exporters.image import export_filename, write_export
from sticker_designer.models.profile import DesignerProfile
from sticker_designer.models.user_file import UserFile
from sticker_designer.scene.items import TextLabelItem
from sticker_designer.scene.object_factory import ObjectFactory
from sticker_designer.scene.scene_manager import SceneManager
from sticker_designer.services.design_client import DesignClient, DesignClientError
from sticker_designer.services.design_serializer import describe_scene
from sticker_designer.ui.designer_panel import DesignerPanel
from sticker_designer.ui.designer_view import DesignerView

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window hosting the design canvas and its control panel."""

    def __init__(
        self,
        profile: Optional[DesignerProfile] = None,
        service_url: str = DEFAULT_DESIGN_SERVICE_URL,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Vehicle Sticker Designer")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self._profile = profile or DesignerProfile.classic()
        self._last_export_dir: Path = Path.home()
        self._design_client = DesignClient(service_url)
        self._scene_manager = SceneManager(self._profile, confirm=self._confirm, parent=self)
        self._factory = ObjectFactory(self._scene_manager, notify=self._notify, parent=self)
        self._view = DesignerView(self)
        self._panel = DesignerPanel(self._profile.catalog, self._profile.text, self)

        self._init_status_bar()
        self.setCentralWidget(self._view)
        self._create_actions()
        self._create_menus()
        self._create_docks()
        self._connect_signals()

        self.reset_designer()

    def _init_status_bar(self) -> None:
        status = QStatusBar(self)
        status.showMessage("Ready")
        self.setStatusBar(status)

    def _create_actions(self) -> None:
        self._action_new = QAction("&New Design", self)
        self._action_new.setShortcut("Ctrl+N")
        self._action_new.triggered.connect(self.reset_designer)

        self._action_upload = QAction("&Upload Image…", self)
        self._action_upload.setShortcut("Ctrl+O")
        self._action_upload.triggered.connect(self._upload_image)

        self._action_download = QAction("&Download PNG…", self)
        self._action_download.setShortcut("Ctrl+E")
        self._action_download.triggered.connect(self._download_design)

        self._action_save = QAction("&Save Design", self)
        self._action_save.setShortcut("Ctrl+S")
        self._action_save.triggered.connect(self._save_design)

        self._action_clear = QAction("&Clear Canvas", self)
        self._action_clear.triggered.connect(self._clear_canvas)

        self._action_exit = QAction("E&xit", self)
        self._action_exit.setShortcut("Ctrl+Q")
        self._action_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self._action_new)
        file_menu.addAction(self._action_upload)
        file_menu.addSeparator()
        file_menu.addAction(self._action_download)
        file_menu.addAction(self._action_save)
        file_menu.addSeparator()
        file_menu.addAction(self._action_exit)

        edit_menu = menu_bar.addMenu("&Edit")
        edit_menu.addAction(self._action_clear)

    def _create_docks(self) -> None:
        panel_dock = QDockWidget("Designer", self)
        panel_dock.setObjectName("designerDock")
        panel_dock.setAllowedAreas(Qt.DockWidgetArea.RightDockWidgetArea | Qt.DockWidgetArea.LeftDockWidgetArea)
        panel_dock.setWidget(self._panel)
        panel_dock.setMinimumWidth(300)
        panel_dock.setFeatures(QDockWidget.DockWidgetFeature.DockWidgetMovable)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, panel_dock)

    def _connect_signals(self) -> None:
        self._scene_manager.sceneReplaced.connect(self._on_scene_replaced)
        self._scene_manager.objectAdded.connect(self._on_object_added)

        self._panel.vehicleChanged.connect(self._scene_manager.set_vehicle)
        self._panel.referenceActivated.connect(self._factory.add_reference)
        self._panel.uploadRequested.connect(self._upload_image)
        self._panel.addTextRequested.connect(self._add_text)
        self._panel.textStyleChanged.connect(self._restyle_selected_text)
        self._panel.clearRequested.connect(self._clear_canvas)
        self._panel.downloadRequested.connect(self._download_design)
        self._panel.saveRequested.connect(self._save_design)

        self._view.referenceDropped.connect(self._factory.add_reference)
        self._view.fileDropped.connect(self._factory.from_user_file)

    # Scene lifecycle ----------------------------------------------------

    @property
    def scene_manager(self) -> SceneManager:
        return self._scene_manager

    @property
    def factory(self) -> ObjectFactory:
        return self._factory

    def reset_designer(self) -> None:
        """Rebuild the canvas from scratch with a freshly loaded vehicle."""
        self._scene_manager.reset(self._profile.canvas_width, self._profile.canvas_height)
        if self._profile.demo_sticker_ref and len(self._scene_manager.objects()) == 1:
            self._factory.add_reference(self._profile.demo_sticker_ref)

    def _on_scene_replaced(self, scene) -> None:
        self._view.attach_scene(scene)
        scene.selectionChanged.connect(self._on_selection_changed)

    def _on_object_added(self, item) -> None:
        self.statusBar().showMessage(f"Added {item.object_kind.value.replace('_', ' ')}")

    def _on_selection_changed(self) -> None:
        selected = self._scene_manager.selected_item()
        if isinstance(selected, TextLabelItem):
            self._panel.set_text_form(selected.font_family, selected.font_size_pt, selected.fill_color)

    # User actions -------------------------------------------------------

    def _upload_image(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Add image",
            str(Path.home()),
            "Images (*.png *.jpg *.jpeg *.svg *.webp);;All files (*)",
        )
        if not file_path:
            return
        try:
            user_file = UserFile.from_path(Path(file_path))
        except OSError as exc:
            QMessageBox.warning(self, "Failed to read file", str(exc))
            return
        self._factory.from_user_file(user_file)

    def _add_text(self, content: str, font_family: str, size_pt: float, color: str) -> None:
        if self._factory.make_text(content, font_family, size_pt, color) is not None:
            self._panel.clear_text_input()

    def _restyle_selected_text(self, font_family: str, size_pt: float, color: str) -> None:
        selected = self._scene_manager.selected_item()
        if isinstance(selected, TextLabelItem):
            selected.set_text_style(font_family=font_family, font_size_pt=size_pt, fill_color=color)

    def _clear_canvas(self) -> None:
        if self._scene_manager.clear():
            self.statusBar().showMessage("Canvas cleared.")

    def _download_design(self) -> None:
        payload = self._scene_manager.export_raster(self._profile.export_multiplier)
        if payload is None:
            return
        suggested = self._last_export_dir / export_filename()
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Download design", str(suggested), "PNG images (*.png)"
        )
        if not file_path:
            return
        try:
            saved = write_export(payload, Path(file_path))
        except OSError as exc:
            QMessageBox.critical(self, "Failed to export design", str(exc))
            return
        self._last_export_dir = saved.parent
        logger.info("Exported design to %s", saved)
        self.statusBar().showMessage(f"Exported: {saved.name}")

    def _save_design(self) -> None:
        stickers = describe_scene(self._scene_manager.objects())
        try:
            message = self._design_client.save_design(stickers)
        except DesignClientError as exc:
            QMessageBox.warning(self, "Failed to save design", str(exc))
            return
        self.statusBar().showMessage(message)

    # Dialog hooks -------------------------------------------------------

    def _confirm(self, message: str) -> bool:
        answer = QMessageBox.question(
            self,
            "Clear canvas",
            message,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes

    def _notify(self, message: str) -> None:
        QMessageBox.information(self, "Sticker Designer", message)


__all__ = ["MainWindow"]
