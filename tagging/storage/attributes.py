# Path: tagging/storage/attributes.py
# Purpose: Read image dimensions and pixels for assets stored on disk.
# Layer: tagging/storage.
# Details: Pillow-backed AttributeReader and ImageLoader; decoding runs in worker threads.

from __future__ import annotations

import asyncio
from pathlib import Path

from PIL import Image

from tagging.models.domain import Asset, AssetType, Size


def _require_image_path(asset: Asset) -> Path:
    if asset.type not in (AssetType.IMAGE, AssetType.VIDEO_FRAME):
        raise ValueError(f"Asset {asset.id} of type {asset.type.value} has no readable image data.")
    if not asset.path:
        raise ValueError(f"Asset {asset.id} has no path.")
    return Path(asset.path)


class PillowAttributeReader:
    """Determine asset dimensions by opening the file header with Pillow."""

    async def read_dimensions(self, asset: Asset) -> Size:
        path = _require_image_path(asset)
        return await asyncio.to_thread(self._read_size, path)

    @staticmethod
    def _read_size(path: Path) -> Size:
        with Image.open(path) as img:
            width, height = img.size
        return Size(width=width, height=height)


class PillowImageLoader:
    """Decode an asset into an RGB Pillow image."""

    async def load_image(self, asset: Asset) -> Image.Image:
        path = _require_image_path(asset)
        return await asyncio.to_thread(self._load, path)

    @staticmethod
    def _load(path: Path) -> Image.Image:
        with Image.open(path) as img:
            return img.convert("RGB")
