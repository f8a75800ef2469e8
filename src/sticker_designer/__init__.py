"""Vehicle sticker designer."""

__version__ = "0.1.0"
