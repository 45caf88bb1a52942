"""Asset gallery module."""

from .sync import AssetGallerySync, IAssetGallery

__all__ = ["AssetGallerySync", "IAssetGallery"]
