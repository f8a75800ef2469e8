"""Helpers for encoding and writing flattened design rasters."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QImage

from sticker_designer.constants import EXPORT_FILENAME_PREFIX


def encode_png(image: QImage) -> bytes:
    """Encode a raster as PNG bytes."""
    if image.isNull():
        raise ValueError("Cannot encode an empty image")
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    try:
        if not image.save(buffer, "PNG"):
            raise ValueError("PNG encoding failed")
    finally:
        buffer.close()
    return bytes(data.data())


def export_filename(timestamp_ms: Optional[int] = None) -> str:
    """Default download name, stamped with milliseconds since the epoch."""
    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    return f"{EXPORT_FILENAME_PREFIX}-{stamp}.png"


def write_export(payload: bytes, destination: Path) -> Path:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(payload)
    return destination


__all__ = ["encode_png", "export_filename", "write_export"]
