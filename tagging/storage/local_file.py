# Path: tagging/storage/local_file.py
# Purpose: Persist projects and asset metadata as JSON files in a project directory.
# Layer: tagging/storage.
# Details: Implements MetadataStore and ProjectStore; blocking file I/O runs in worker threads.

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict

from tagging.models.domain import Asset, AssetMetadata, Project

logger = logging.getLogger(__name__)

METADATA_SUFFIX = "-asset.json"
PROJECT_SUFFIX = ".project.json"


class LocalFileStorage:
    """Directory-backed storage for a project and its asset metadata.

    Layout:
    - ``<project_dir>/<project_name>.project.json`` for the project document.
    - ``<project_dir>/<asset_id>-asset.json`` for each asset's metadata.
    """

    def __init__(self, project_dir: Path | str) -> None:
        self.project_dir = Path(project_dir)

    # Paths
    def metadata_path(self, asset_id: str) -> Path:
        return self.project_dir / f"{asset_id}{METADATA_SUFFIX}"

    def project_path(self, project_name: str) -> Path:
        safe_name = project_name.replace(" ", "_")
        return self.project_dir / f"{safe_name}{PROJECT_SUFFIX}"

    # MetadataStore
    async def load_metadata(self, project: Project, asset: Asset) -> AssetMetadata:
        """Read metadata for ``asset``; a missing file yields an empty record for the asset."""

        path = self.metadata_path(asset.id)
        payload = await asyncio.to_thread(self._read_json, path)
        if payload is None:
            return AssetMetadata(asset=Asset.from_dict(asset.to_dict()), regions=[])
        return AssetMetadata.from_dict(payload)

    async def save_metadata(self, project: Project, metadata: AssetMetadata) -> None:
        path = self.metadata_path(metadata.asset.id)
        await asyncio.to_thread(self._write_json, path, metadata.to_dict())
        logger.debug("Saved metadata for asset %s to %s", metadata.asset.id, path)

    # ProjectStore
    async def save_project(self, project: Project) -> None:
        path = self.project_path(project.name)
        await asyncio.to_thread(self._write_json, path, project.to_dict())
        logger.debug("Saved project %s to %s", project.name, path)

    async def load_project(self, project_name: str) -> Project:
        """Load a previously saved project document."""

        path = self.project_path(project_name)
        payload = await asyncio.to_thread(self._read_json, path)
        if payload is None:
            raise FileNotFoundError(f"Project file {path} not found")
        return Project.from_dict(payload)

    # File helpers
    @staticmethod
    def _read_json(path: Path) -> Dict[str, Any] | None:
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _write_json(path: Path, payload: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp_path.replace(path)
