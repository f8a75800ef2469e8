"""Non-blocking retrieval of sticker asset bytes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, QUrl
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

from sticker_designer.services.references import InvalidReferenceError, parse_data_url

logger = logging.getLogger(__name__)

LoadedCallback = Callable[[bytes], None]
FailedCallback = Callable[[str], None]


class AssetLoader(QObject):
    """Fetch bytes for remote URLs, ``data:`` URLs and local files.

    Callbacks always run later on the Qt event loop, never inside ``fetch``,
    so callers see the same ordering whatever the source.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._network: Optional[QNetworkAccessManager] = None
        self._pending: set[QNetworkReply] = set()

    def fetch(self, reference: str, on_loaded: LoadedCallback, on_failed: FailedCallback) -> None:
        value = reference.strip()
        lowered = value.lower()
        if lowered.startswith(("http://", "https://")):
            self._fetch_remote(value, on_loaded, on_failed)
            return
        if lowered.startswith("data:"):
            QTimer.singleShot(0, lambda: self._deliver_data_url(value, on_loaded, on_failed))
            return
        path = Path(QUrl(value).toLocalFile()) if lowered.startswith("file:") else Path(value)
        QTimer.singleShot(0, lambda: self._deliver_file(path, on_loaded, on_failed))

    def _fetch_remote(self, url: str, on_loaded: LoadedCallback, on_failed: FailedCallback) -> None:
        if self._network is None:
            self._network = QNetworkAccessManager(self)
        request = QNetworkRequest(QUrl(url))
        request.setAttribute(
            QNetworkRequest.Attribute.RedirectPolicyAttribute,
            QNetworkRequest.RedirectPolicy.NoLessSafeRedirectPolicy,
        )
        logger.debug("Fetching remote asset %s", url)
        reply = self._network.get(request)
        self._pending.add(reply)
        reply.finished.connect(lambda: self._on_reply_finished(reply, on_loaded, on_failed))

    def _on_reply_finished(
        self, reply: QNetworkReply, on_loaded: LoadedCallback, on_failed: FailedCallback
    ) -> None:
        self._pending.discard(reply)
        try:
            if reply.error() != QNetworkReply.NetworkError.NoError:
                on_failed(f"{reply.url().toString()}: {reply.errorString()}")
                return
            on_loaded(bytes(reply.readAll().data()))
        finally:
            reply.deleteLater()

    @staticmethod
    def _deliver_data_url(value: str, on_loaded: LoadedCallback, on_failed: FailedCallback) -> None:
        try:
            _, payload = parse_data_url(value)
        except InvalidReferenceError as exc:
            on_failed(str(exc))
            return
        on_loaded(payload)

    @staticmethod
    def _deliver_file(path: Path, on_loaded: LoadedCallback, on_failed: FailedCallback) -> None:
        try:
            payload = path.read_bytes()
        except OSError as exc:
            on_failed(f"{path}: {exc.strerror or exc}")
            return
        on_loaded(payload)


__all__ = ["AssetLoader"]
