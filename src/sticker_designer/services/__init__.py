"""Service layer for asset loading, configuration and design persistence."""

__all__ = [
    "asset_loader",
    "design_client",
    "design_serializer",
    "design_store",
    "profile_loader",
    "references",
]
