"""Shared in-memory collaborators for tagging engine tests."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest
from PIL import Image

from tagging.detectors import Detector
from tagging.models.domain import (
    Asset,
    AssetMetadata,
    AssetType,
    BoundingBox,
    DetectedObject,
    Project,
    Region,
    RegionType,
    Size,
)
from tagging.orchestrator import ReconciliationOrchestrator


class FakeMetadataStore:
    """Keeps serialized metadata per asset id and records every save."""

    def __init__(self) -> None:
        self.records: Dict[str, dict] = {}
        self.saved: List[str] = []
        self.fail_on_save: Optional[Exception] = None

    def put(self, metadata: AssetMetadata) -> None:
        self.records[metadata.asset.id] = metadata.to_dict()

    def get(self, asset_id: str) -> Optional[AssetMetadata]:
        payload = self.records.get(asset_id)
        return AssetMetadata.from_dict(payload) if payload else None

    async def load_metadata(self, project: Project, asset: Asset) -> AssetMetadata:
        await asyncio.sleep(0)
        stored = self.get(asset.id)
        if stored is not None:
            return stored
        return AssetMetadata(asset=Asset.from_dict(asset.to_dict()), regions=[])

    async def save_metadata(self, project: Project, metadata: AssetMetadata) -> None:
        await asyncio.sleep(0)
        if self.fail_on_save is not None:
            raise self.fail_on_save
        self.put(metadata)
        self.saved.append(metadata.asset.id)


class FakeProjectStore:
    def __init__(self) -> None:
        self.saved: List[dict] = []

    async def save_project(self, project: Project) -> None:
        await asyncio.sleep(0)
        self.saved.append(project.to_dict())


class FakeAssetSource:
    def __init__(self, assets: Optional[List[Asset]] = None) -> None:
        self.assets = list(assets or [])
        self.calls = 0
        self.gate: Optional[asyncio.Event] = None
        self.error: Optional[Exception] = None

    async def list_root_assets(self, project: Project) -> List[Asset]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return [Asset.from_dict(asset.to_dict()) for asset in self.assets]


class FakeAttributeReader:
    def __init__(self, size: Optional[Size] = None, error: Optional[Exception] = None) -> None:
        self.size = size or Size(width=640, height=480)
        self.error = error
        self.calls = 0

    async def read_dimensions(self, asset: Asset) -> Size:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.size


class FakeImageLoader:
    async def load_image(self, asset: Asset) -> Image.Image:
        return Image.new("RGB", (64, 64))


class FakeDetector(Detector):
    name = "fake"

    def __init__(self, detections: Optional[List[DetectedObject]] = None, ready: bool = True) -> None:
        self.detections = list(detections or [])
        self.ready = ready
        self.calls = 0

    @property
    def is_ready(self) -> bool:
        return self.ready

    async def load(self, path: str) -> None:
        self.ready = True

    async def detect(self, image: Image.Image) -> List[DetectedObject]:
        self.calls += 1
        return list(self.detections)


def make_asset(asset_id: str, asset_type: AssetType = AssetType.IMAGE, **kwargs) -> Asset:
    kwargs.setdefault("name", f"{asset_id}.png")
    kwargs.setdefault("path", f"/data/{asset_id}.png")
    return Asset(id=asset_id, type=asset_type, **kwargs)


def make_region(region_id: str, tags: List[str], box: tuple = (10, 10, 20, 20)) -> Region:
    left, top, width, height = box
    return Region(
        id=region_id,
        type=RegionType.RECTANGLE,
        tags=list(tags),
        bounding_box=BoundingBox(left=left, top=top, width=width, height=height),
    )


@pytest.fixture
def metadata_store() -> FakeMetadataStore:
    return FakeMetadataStore()


@pytest.fixture
def project_store() -> FakeProjectStore:
    return FakeProjectStore()


@pytest.fixture
def project() -> Project:
    return Project(id="project-1", name="demo")


@pytest.fixture
def make_orchestrator(project, metadata_store, project_store):
    """Build an orchestrator over the shared fakes; keyword overrides replace collaborators."""

    def _make(assets: Optional[List[Asset]] = None, **overrides) -> ReconciliationOrchestrator:
        kwargs = {
            "project": project,
            "metadata_store": metadata_store,
            "project_store": project_store,
            "asset_source": FakeAssetSource(assets),
            "attribute_reader": FakeAttributeReader(),
            "image_loader": FakeImageLoader(),
            "palette": ["#111111", "#222222", "#333333"],
        }
        kwargs.update(overrides)
        return ReconciliationOrchestrator(**kwargs)

    return _make

