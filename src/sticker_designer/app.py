"""Application bootstrap for the sticker designer."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional

from PySide6.QtWidgets import QApplication

from sticker_designer.constants import DEFAULT_DESIGN_SERVICE_URL
from sticker_designer.logging_config import configure_logging
from sticker_designer.services.profile_loader import ProfileError, resolve_profile


def create_application(argv: Optional[Iterable[str]] = None) -> QApplication:
    """Create and configure the QApplication instance."""
    args = list(argv) if argv is not None else sys.argv
    app = QApplication(args)
    QApplication.setApplicationName("Vehicle Sticker Designer")
    QApplication.setOrganizationName("StickerDesigner")
    QApplication.setOrganizationDomain("stickerdesigner.local")
    return app


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Vehicle sticker designer.")
    parser.add_argument(
        "--profile",
        default=None,
        help="Built-in profile name (classic, compact) or path to a YAML profile.",
    )
    parser.add_argument(
        "--service-url",
        default=DEFAULT_DESIGN_SERVICE_URL,
        help="Base URL of the design persistence service.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO).")
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point that boots the GUI event loop."""
    raw_args = list(argv) if argv is not None else sys.argv
    options = _parse_args(raw_args[1:])
    configure_logging(options.log_level)

    try:
        profile = resolve_profile(options.profile)
    except ProfileError as exc:
        print(f"Invalid profile: {exc}", file=sys.stderr)
        return 2

    app = create_application(raw_args[:1])

    from sticker_designer.ui.main_window import MainWindow  # Lazy import to avoid cycles during bootstrap

    window = MainWindow(profile, service_url=options.service_url)
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
