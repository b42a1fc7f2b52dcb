# Path: tagging/models/domain.py
# Purpose: Define domain models shared across tagging, state, prediction, and catalog workflows.
# Layer: tagging/models.
# Details: Lightweight dataclasses with dict conversion so stores can persist them as JSON.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from config.settings import ActiveLearningSettings


class AssetType(str, Enum):
    """Kind of visual asset."""

    UNKNOWN = "unknown"
    IMAGE = "image"
    VIDEO = "video"
    VIDEO_FRAME = "videoFrame"


class AssetState(str, Enum):
    """Visitation and tagging progress of an asset."""

    NOT_VISITED = "notVisited"
    VISITED = "visited"
    TAGGED = "tagged"


class RegionType(str, Enum):
    RECTANGLE = "rectangle"
    POLYGON = "polygon"


@dataclass
class Size:
    width: int
    height: int


@dataclass
class Point:
    x: float
    y: float


@dataclass
class BoundingBox:
    left: float
    top: float
    width: float
    height: float


@dataclass
class Asset:
    """A single image, video, or video frame known to a project.

    ``parent_id`` links a video frame to its root video; it is a lookup key,
    never an owning reference.
    """

    id: str
    type: AssetType = AssetType.UNKNOWN
    name: str = ""
    path: str = ""
    format: str = ""
    state: AssetState = AssetState.NOT_VISITED
    parent_id: Optional[str] = None
    size: Optional[Size] = None
    timestamp: Optional[float] = None
    predicted: bool = False

    @property
    def is_root(self) -> bool:
        """Return True when the asset has no parent (or points at itself)."""

        return self.parent_id is None or self.parent_id == self.id

    @property
    def root_id(self) -> str:
        return self.id if self.is_root else str(self.parent_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "path": self.path,
            "format": self.format,
            "state": self.state.value,
            "parent_id": self.parent_id,
            "size": {"width": self.size.width, "height": self.size.height} if self.size else None,
            "timestamp": self.timestamp,
            "predicted": self.predicted,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Asset":
        size = payload.get("size")
        return cls(
            id=str(payload["id"]),
            type=AssetType(payload.get("type", AssetType.UNKNOWN.value)),
            name=str(payload.get("name", "")),
            path=str(payload.get("path", "")),
            format=str(payload.get("format", "")),
            state=AssetState(payload.get("state", AssetState.NOT_VISITED.value)),
            parent_id=payload.get("parent_id"),
            size=Size(width=int(size["width"]), height=int(size["height"])) if size else None,
            timestamp=payload.get("timestamp"),
            predicted=bool(payload.get("predicted", False)),
        )


@dataclass
class Region:
    """An annotated area of an asset."""

    id: str
    type: RegionType
    tags: List[str] = field(default_factory=list)
    bounding_box: Optional[BoundingBox] = None
    points: List[Point] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        box = self.bounding_box
        return {
            "id": self.id,
            "type": self.type.value,
            "tags": list(self.tags),
            "bounding_box": (
                {"left": box.left, "top": box.top, "width": box.width, "height": box.height} if box else None
            ),
            "points": [{"x": point.x, "y": point.y} for point in self.points],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Region":
        box = payload.get("bounding_box")
        return cls(
            id=str(payload["id"]),
            type=RegionType(payload.get("type", RegionType.RECTANGLE.value)),
            tags=[str(tag) for tag in payload.get("tags", [])],
            bounding_box=BoundingBox(**box) if box else None,
            points=[Point(x=point["x"], y=point["y"]) for point in payload.get("points", [])],
        )


@dataclass
class AssetMetadata:
    """An asset together with its regions; the unit of per-asset persistence."""

    asset: Asset
    regions: List[Region] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"asset": self.asset.to_dict(), "regions": [region.to_dict() for region in self.regions]}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AssetMetadata":
        return cls(
            asset=Asset.from_dict(payload["asset"]),
            regions=[Region.from_dict(region) for region in payload.get("regions", [])],
        )


@dataclass
class Tag:
    name: str
    color: str


@dataclass
class Project:
    """Project-wide state shared with the host application.

    ``tags`` order is meaningful: hotkeys and palette indices are derived from it.
    """

    id: str
    name: str
    tags: List[Tag] = field(default_factory=list)
    assets: Dict[str, Asset] = field(default_factory=dict)
    last_visited_asset_id: Optional[str] = None
    active_learning: ActiveLearningSettings = field(default_factory=ActiveLearningSettings)

    def root_assets(self) -> List[Asset]:
        """Return the project's already-known parentless assets in insertion order."""

        return [asset for asset in self.assets.values() if asset.is_root]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tags": [{"name": tag.name, "color": tag.color} for tag in self.tags],
            "assets": {asset_id: asset.to_dict() for asset_id, asset in self.assets.items()},
            "last_visited_asset_id": self.last_visited_asset_id,
            "active_learning": self.active_learning.model_dump(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Project":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            tags=[Tag(name=str(tag["name"]), color=str(tag["color"])) for tag in payload.get("tags", [])],
            assets={
                str(asset_id): Asset.from_dict(asset) for asset_id, asset in (payload.get("assets") or {}).items()
            },
            last_visited_asset_id=payload.get("last_visited_asset_id"),
            active_learning=ActiveLearningSettings.model_validate(payload.get("active_learning") or {}),
        )


@dataclass
class DetectedObject:
    """Raw detector output: class label and an ``[x, y, width, height]`` box."""

    class_name: str
    bbox: List[float]
    score: Optional[float] = None

    def __post_init__(self) -> None:
        if len(self.bbox) != 4:
            raise ValueError(f"Detected object bbox must have 4 values, got {len(self.bbox)}.")
