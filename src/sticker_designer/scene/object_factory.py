"""Turn references, uploads and text into placed scene objects."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QByteArray, QObject, QTimer
from PySide6.QtGui import QImage
from PySide6.QtSvg import QSvgRenderer

from sticker_designer.constants import (
    ALLOWED_UPLOAD_MIME_TYPES,
    EMPTY_TEXT_MESSAGE,
    INVALID_UPLOAD_MESSAGE,
    VECTOR_MIME_TYPE,
)
from sticker_designer.models.scene_object import Transform
from sticker_designer.models.user_file import UserFile
from sticker_designer.scene.items import StickerImageItem, StickerVectorItem, TextLabelItem
from sticker_designer.scene.placement import PlacementPolicy, apply_interactive_style
from sticker_designer.scene.scene_manager import SceneManager
from sticker_designer.scene.vehicles import PLACEHOLDER_STICKER_SVG
from sticker_designer.services.asset_loader import AssetLoader
from sticker_designer.services.references import (
    ReferenceKind,
    classify_reference,
    is_inline_markup,
    to_data_url,
)

logger = logging.getLogger(__name__)

NotifyCallback = Callable[[str], None]


def decode_image(data: bytes, source_ref: str) -> Optional[StickerImageItem]:
    image = QImage.fromData(QByteArray(data))
    if image.isNull():
        return None
    return StickerImageItem(image, source_ref)


def parse_vector(markup: bytes, source_ref: Optional[str] = None) -> Optional[StickerVectorItem]:
    renderer = QSvgRenderer(QByteArray(markup))
    if not renderer.isValid():
        renderer.deleteLater()
        return None
    text = markup.decode("utf-8", errors="replace")
    return StickerVectorItem(renderer, text, source_ref)


class ObjectFactory(QObject):
    """Build stickers and text labels and route them into the scene.

    Image and vector paths finish asynchronously. Each request remembers the
    scene generation it was issued against; results arriving after a reset or
    clear are dropped. Concurrent requests land in completion order.
    """

    def __init__(
        self,
        manager: SceneManager,
        placement: Optional[PlacementPolicy] = None,
        loader: Optional[AssetLoader] = None,
        notify: Optional[NotifyCallback] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._manager = manager
        self._placement = placement or PlacementPolicy(manager, manager.profile)
        self._loader = loader or AssetLoader(self)
        self._notify = notify or (lambda message: logger.info("Notice: %s", message))

    # Routing ------------------------------------------------------------

    def add_reference(self, reference: str) -> None:
        """Add a catalog entry or dropped URL, picking vector or raster by suffix."""
        if classify_reference(reference) is ReferenceKind.VECTOR:
            self.from_vector_markup(reference)
        else:
            self.from_image_reference(reference)

    # Raster -------------------------------------------------------------

    def from_image_reference(self, reference: str) -> None:
        if self._manager.scene is None:
            return
        token = self._manager.generation
        self._loader.fetch(
            reference,
            lambda data: self._finish_image(token, reference, data),
            lambda reason: self._fail(token, reference, reason),
        )

    def _finish_image(self, token: int, reference: str, data: bytes) -> None:
        item = decode_image(data, reference)
        if item is None:
            self._fail(token, reference, "image could not be decoded")
            return
        if self._is_stale(token, reference):
            item.deleteLater()
            return
        self._placement.place(item)

    # Vector -------------------------------------------------------------

    def from_vector_markup(self, reference_or_markup: str) -> None:
        if self._manager.scene is None:
            return
        token = self._manager.generation
        if is_inline_markup(reference_or_markup):
            markup = reference_or_markup.encode("utf-8")
            QTimer.singleShot(0, lambda: self._finish_vector(token, None, markup))
            return
        self._loader.fetch(
            reference_or_markup,
            lambda data: self._finish_vector(token, reference_or_markup, data),
            lambda reason: self._fail(token, reference_or_markup, reason),
        )

    def _finish_vector(self, token: int, reference: Optional[str], markup: bytes) -> None:
        label = reference or "inline markup"
        item = parse_vector(markup, reference)
        if item is None:
            self._fail(token, label, "vector markup could not be parsed")
            return
        if self._is_stale(token, label):
            item.deleteLater()
            return
        self._placement.place(item)

    # Uploads ------------------------------------------------------------

    def from_user_file(self, user_file: UserFile) -> bool:
        """Validate an uploaded file and add it; returns ``False`` when rejected."""
        mime_type = user_file.mime_type.lower()
        if mime_type not in ALLOWED_UPLOAD_MIME_TYPES:
            logger.info("Rejected upload %s (%s)", user_file.name, user_file.mime_type)
            self._notify(INVALID_UPLOAD_MESSAGE)
            return False
        data_url = to_data_url(mime_type, user_file.data)
        if mime_type == VECTOR_MIME_TYPE:
            self.from_vector_markup(data_url)
        else:
            self.from_image_reference(data_url)
        return True

    # Text ---------------------------------------------------------------

    def make_text(
        self,
        content: str,
        font_family: Optional[str] = None,
        size_pt: Optional[float] = None,
        color: Optional[str] = None,
    ) -> Optional[TextLabelItem]:
        """Add a text label at the canvas centre at its natural size."""
        text = (content or "").strip()
        if not text:
            self._notify(EMPTY_TEXT_MESSAGE)
            return None
        if self._manager.scene is None:
            return None
        defaults = self._manager.profile.text
        item = TextLabelItem(
            text,
            font_family or defaults.font_family,
            size_pt or defaults.font_size_pt,
            color or defaults.fill_color,
        )
        width, height = self._manager.canvas_size()
        item.apply_transform(Transform(center_x=width / 2.0, center_y=height / 2.0))
        apply_interactive_style(item, self._manager.profile.style)
        self._manager.add(item)
        return item

    # Fallback -----------------------------------------------------------

    def add_placeholder(self) -> Optional[StickerVectorItem]:
        if self._manager.scene is None:
            return None
        item = parse_vector(PLACEHOLDER_STICKER_SVG.encode("utf-8"))
        assert item is not None
        self._placement.place(item)
        return item

    def _fail(self, token: int, reference: str, reason: str) -> None:
        logger.warning("Sticker load failed for %s: %s", _short(reference), reason)
        if self._is_stale(token, reference):
            return
        self.add_placeholder()

    def _is_stale(self, token: int, reference: str) -> bool:
        if self._manager.is_current(token):
            return False
        logger.debug("Discarding stale result for %s (generation %d)", _short(reference), token)
        return True


def _short(reference: str, limit: int = 80) -> str:
    return reference if len(reference) <= limit else reference[: limit - 3] + "..."


__all__ = ["NotifyCallback", "ObjectFactory", "decode_image", "parse_vector"]
