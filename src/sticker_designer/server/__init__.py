"""HTTP service persisting saved designs."""

from .api import create_app

__all__ = ["create_app"]
