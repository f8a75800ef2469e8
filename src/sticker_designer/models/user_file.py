"""File handed over by the upload button or the drop zone."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QMimeDatabase


@dataclass(frozen=True)
class UserFile:
    """Raw bytes of an uploaded file together with its MIME type."""

    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path) -> "UserFile":
        """Read a file from disk, sniffing its MIME type from name and content."""
        mime = QMimeDatabase().mimeTypeForFile(str(path))
        return cls(name=path.name, mime_type=mime.name(), data=path.read_bytes())


__all__ = ["UserFile"]
