#!/usr/bin/env python3
"""Run the saved-design persistence service."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from sticker_designer.constants import DEFAULT_DESIGN_SERVICE_PORT
from sticker_designer.logging_config import configure_logging
from sticker_designer.server.api import DEFAULT_DESIGNS_FILE, create_app


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description="Serve the saved-design API.")
    parser.add_argument(
        "--designs-file",
        type=Path,
        default=DEFAULT_DESIGNS_FILE,
        help="JSON file holding saved designs (default: ./saved-designs.json).",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    parser.add_argument("--port", type=int, default=DEFAULT_DESIGN_SERVICE_PORT, help="Port to listen on.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO).")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    app = create_app(args.designs_file)
    print(f"Design service running at http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
