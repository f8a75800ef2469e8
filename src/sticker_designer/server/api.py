"""Flask application exposing the saved-design endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from sticker_designer.services.design_store import DesignStore, DesignStoreError

logger = logging.getLogger(__name__)

DEFAULT_DESIGNS_FILE = Path("saved-designs.json")


def _stickers_missing(payload: Dict[str, Any]) -> bool:
    # Empty lists and objects count as present; null and empty scalars do not.
    if "stickers" not in payload:
        return True
    return payload["stickers"] in (None, "", 0, False)


def create_app(designs_file: Optional[Path] = None, store: Optional[DesignStore] = None) -> Flask:
    """Build the persistence app around a designs file or an existing store."""
    app = Flask(__name__, static_folder=None)
    app.config["DESIGN_STORE"] = store or DesignStore(designs_file or DEFAULT_DESIGNS_FILE)

    @app.get("/api/designs")
    def api_designs():
        try:
            designs = app.config["DESIGN_STORE"].list_designs()
        except DesignStoreError as exc:
            logger.error("Listing designs failed: %s", exc)
            return jsonify({"error": str(exc)}), 500
        return jsonify(designs)

    @app.post("/api/save-design")
    def api_save_design():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or _stickers_missing(payload):
            return jsonify({"error": "No stickers data"}), 400
        try:
            app.config["DESIGN_STORE"].append(payload["stickers"])
        except DesignStoreError as exc:
            logger.error("Saving design failed: %s", exc)
            return jsonify({"error": str(exc)}), 500
        return jsonify({"success": True, "message": "Design saved!"})

    return app


__all__ = ["DEFAULT_DESIGNS_FILE", "create_app"]
