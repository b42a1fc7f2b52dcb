# Path: tagging/storage/folder_source.py
# Purpose: Enumerate root assets from a folder of images and videos.
# Layer: tagging/storage.
# Details: Scans recursively; asset ids are MD5 digests of absolute paths so rescans are stable.

from __future__ import annotations

import asyncio
import hashlib
import logging
from pathlib import Path
from typing import Iterable, List

from tagging.models.domain import Asset, AssetType, Project

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp", ".tif", ".tiff"}
VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi", ".mkv", ".webm"}
SUPPORTED_EXTENSIONS = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS


def asset_type_for(path: Path) -> AssetType:
    """Derive the asset type from a file extension."""

    suffix = path.suffix.lower()
    if suffix in IMAGE_EXTENSIONS:
        return AssetType.IMAGE
    if suffix in VIDEO_EXTENSIONS:
        return AssetType.VIDEO
    return AssetType.UNKNOWN


def asset_id_for(path: Path) -> str:
    return hashlib.md5(str(path.resolve()).encode("utf-8")).hexdigest()


class FolderAssetSource:
    """Asset source backed by a local directory tree."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    async def list_root_assets(self, project: Project) -> List[Asset]:
        """Return one root asset per supported file under the root directory."""

        if not self.root.is_dir():
            raise FileNotFoundError(f"Asset folder {self.root} not found")
        assets = await asyncio.to_thread(self.scan)
        logger.info("Discovered %d asset(s) under %s for project %s", len(assets), self.root, project.name)
        return assets

    def scan(self) -> List[Asset]:
        return [self._asset_for(path) for path in self._iter_asset_files()]

    def _iter_asset_files(self) -> Iterable[Path]:
        """Yield supported files under the root directory in a stable order."""

        for path in sorted(self.root.rglob("*")):
            if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS:
                yield path

    @staticmethod
    def _asset_for(path: Path) -> Asset:
        return Asset(
            id=asset_id_for(path),
            type=asset_type_for(path),
            name=path.name,
            path=str(path.resolve()),
            format=path.suffix.lstrip(".").lower(),
        )
