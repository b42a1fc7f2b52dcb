# Path: tagging/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: tagging/models.
# Details: Exposes dataclasses and enums used across the reconciliation engine.

from .domain import (
    Asset,
    AssetMetadata,
    AssetState,
    AssetType,
    BoundingBox,
    DetectedObject,
    Point,
    Project,
    Region,
    RegionType,
    Size,
    Tag,
)

__all__ = [
    "Asset",
    "AssetMetadata",
    "AssetState",
    "AssetType",
    "BoundingBox",
    "DetectedObject",
    "Point",
    "Project",
    "Region",
    "RegionType",
    "Size",
    "Tag",
]
