"""HTTP client for the design persistence service."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests

from sticker_designer.constants import DEFAULT_DESIGN_SERVICE_URL

logger = logging.getLogger(__name__)


class DesignClientError(Exception):
    """Raised when the persistence service rejects or fails a request."""


class DesignClient:
    """Thin wrapper around the ``/api/designs`` and ``/api/save-design`` endpoints."""

    def __init__(self, base_url: str = DEFAULT_DESIGN_SERVICE_URL, timeout: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def list_designs(self) -> List[Dict[str, Any]]:
        response = self._request("get", "/api/designs")
        payload = response.json()
        if not isinstance(payload, list):
            raise DesignClientError("Unexpected response from design service")
        return payload

    def save_design(self, stickers: List[Dict[str, Any]]) -> str:
        """Store a design and return the service's confirmation message."""
        response = self._request("post", "/api/save-design", json={"stickers": stickers})
        payload = response.json()
        return str(payload.get("message", "Design saved!"))

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as exc:
            logger.warning("Design service unreachable at %s: %s", url, exc)
            raise DesignClientError(f"Design service unreachable: {exc}") from exc
        if response.status_code >= 400:
            try:
                message = response.json().get("error", response.reason)
            except ValueError:
                message = response.reason
            raise DesignClientError(f"{response.status_code}: {message}")
        return response


__all__ = ["DesignClient", "DesignClientError"]
