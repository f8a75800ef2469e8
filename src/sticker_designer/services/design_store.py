"""Flat JSON file holding saved sticker designs."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class DesignStoreError(Exception):
    """Raised when the designs file cannot be read or written."""


def _now_ms() -> int:
    return int(time.time() * 1000)


class DesignStore:
    """Append-only collection of ``{id, stickers}`` records in one JSON file.

    Every save reads the whole file, appends and rewrites it. There is no
    locking; the store is meant for a single low-frequency writer.
    """

    def __init__(self, path: Path, clock: Optional[Callable[[], int]] = None) -> None:
        self.path = path
        self._clock = clock or _now_ms

    def list_designs(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            parsed = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise DesignStoreError(f"Unable to read designs file {self.path}: {exc}") from exc
        if not isinstance(parsed, list):
            raise DesignStoreError(f"Designs file {self.path} must hold a JSON array")
        return parsed

    def append(self, stickers: Any) -> Dict[str, Any]:
        """Persist a new record and return it."""
        designs = self.list_designs()
        record = {"id": self._clock(), "stickers": stickers}
        designs.append(record)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(designs, indent=2), encoding="utf-8")
        except OSError as exc:
            raise DesignStoreError(f"Unable to write designs file {self.path}: {exc}") from exc
        logger.info("Saved design %s (%d total)", record["id"], len(designs))
        return record


__all__ = ["DesignStore", "DesignStoreError"]
