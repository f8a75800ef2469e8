"""UI components for the sticker designer."""

__all__ = [
    "designer_panel",
    "designer_view",
    "main_window",
]
