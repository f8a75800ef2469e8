"""Classification and encoding of sticker references."""

from __future__ import annotations

import base64
from enum import Enum
from typing import Tuple
from urllib.parse import unquote_to_bytes, urlsplit

from sticker_designer.constants import VECTOR_EXTENSION, VECTOR_MIME_TYPE


class ReferenceKind(Enum):
    VECTOR = "vector"
    RASTER = "raster"


class InvalidReferenceError(ValueError):
    """Raised when a reference cannot be decoded."""


def classify_reference(reference: str) -> ReferenceKind:
    """Decide whether a reference points at vector markup or a raster image.

    ``data:`` URLs are classified by their MIME type, everything else by the
    path suffix (case-insensitive, ignoring query string and fragment).
    Inline markup is always vector.
    """
    value = reference.strip()
    if is_inline_markup(value):
        return ReferenceKind.VECTOR
    if value.lower().startswith("data:"):
        mime = _data_url_mime(value)
        return ReferenceKind.VECTOR if mime == VECTOR_MIME_TYPE else ReferenceKind.RASTER
    path = urlsplit(value).path or value
    if path.lower().endswith(VECTOR_EXTENSION):
        return ReferenceKind.VECTOR
    return ReferenceKind.RASTER


def is_inline_markup(value: str) -> bool:
    return value.lstrip().startswith("<")


def to_data_url(mime_type: str, data: bytes) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_url(reference: str) -> Tuple[str, bytes]:
    """Split a ``data:`` URL into its MIME type and decoded payload."""
    value = reference.strip()
    if not value.lower().startswith("data:"):
        raise InvalidReferenceError("Not a data URL")
    header, sep, payload = value[5:].partition(",")
    if not sep:
        raise InvalidReferenceError("Data URL is missing the ',' separator")
    params = header.split(";")
    mime = params[0].strip().lower() or "text/plain"
    if "base64" in (param.strip().lower() for param in params[1:]):
        try:
            return mime, base64.b64decode(payload, validate=False)
        except ValueError as exc:
            raise InvalidReferenceError(f"Invalid base64 payload: {exc}") from exc
    return mime, unquote_to_bytes(payload)


def _data_url_mime(value: str) -> str:
    header = value[5:].partition(",")[0]
    return header.split(";")[0].strip().lower()


__all__ = [
    "InvalidReferenceError",
    "ReferenceKind",
    "classify_reference",
    "is_inline_markup",
    "parse_data_url",
    "to_data_url",
]
