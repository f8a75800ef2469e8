"""Graphics view showing the design canvas and accepting drops."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QMimeData, Qt, Signal
from PySide6.QtGui import QDragEnterEvent, QDragMoveEvent, QDropEvent, QPainter, QResizeEvent
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView, QWidget

from sticker_designer.models.user_file import UserFile

logger = logging.getLogger(__name__)


class DesignerView(QGraphicsView):
    """View onto the scene owned by the scene manager.

    Dropped local files are read and emitted as :class:`UserFile`; dropped
    remote URLs or plain text are emitted as references.
    """

    referenceDropped = Signal(str)
    fileDropped = Signal(object)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        self.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setBackgroundBrush(Qt.GlobalColor.darkGray)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)

    def attach_scene(self, scene: QGraphicsScene) -> None:
        self.setScene(scene)
        self.fit_to_view()

    def fit_to_view(self) -> None:
        scene = self.scene()
        if scene is not None:
            self.fitInView(scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        self.fit_to_view()

    # Drag and drop ------------------------------------------------------

    @staticmethod
    def _accepts(mime: QMimeData) -> bool:
        return mime.hasUrls() or mime.hasText()

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:  # noqa: N802
        if self._accepts(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:  # noqa: N802
        if self._accepts(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent) -> None:  # noqa: N802
        mime = event.mimeData()
        handled = False
        for url in mime.urls():
            handled = True
            if not url.isLocalFile():
                self.referenceDropped.emit(url.toString())
                continue
            try:
                user_file = UserFile.from_path(Path(url.toLocalFile()))
            except OSError as exc:
                logger.warning("Ignoring dropped file %s: %s", url.toLocalFile(), exc)
                continue
            self.fileDropped.emit(user_file)
        if not handled and mime.hasText() and mime.text().strip():
            self.referenceDropped.emit(mime.text().strip())
            handled = True
        if handled:
            event.acceptProposedAction()
        else:
            event.ignore()


__all__ = ["DesignerView"]
