# Path: tagging/predictions.py
# Purpose: Convert detector output into rectangle regions and merge them into an asset's regions.
# Layer: tagging.
# Details: Candidates whose clamped box exactly matches an existing region's box are dropped.

from __future__ import annotations

import uuid
from typing import Iterable, List, Sequence

from tagging.models.domain import BoundingBox, DetectedObject, Point, Region, RegionType


def clamp_bbox(bbox: Sequence[float]) -> BoundingBox:
    """Clamp an ``[x, y, width, height]`` box so every component is >= 0."""

    left, top, width, height = (max(0.0, float(value)) for value in bbox)
    return BoundingBox(left=left, top=top, width=width, height=height)


def rectangle_points(box: BoundingBox) -> List[Point]:
    """Return corners in top-left, top-right, bottom-right, bottom-left order."""

    right = box.left + box.width
    bottom = box.top + box.height
    return [
        Point(x=box.left, y=box.top),
        Point(x=right, y=box.top),
        Point(x=right, y=bottom),
        Point(x=box.left, y=bottom),
    ]


def is_duplicate(box: BoundingBox, regions: Iterable[Region]) -> bool:
    """Return True if any region has a bounding box exactly equal to ``box``."""

    for region in regions:
        existing = region.bounding_box
        if existing is None:
            continue
        if (
            existing.left == box.left
            and existing.top == box.top
            and existing.width == box.width
            and existing.height == box.height
        ):
            return True
    return False


def region_from_detection(detection: DetectedObject, predict_tag: bool) -> Region:
    """Build a fresh rectangle region for a detected object."""

    box = clamp_bbox(detection.bbox)
    return Region(
        id=uuid.uuid4().hex,
        type=RegionType.RECTANGLE,
        tags=[detection.class_name] if predict_tag else [],
        bounding_box=box,
        points=rectangle_points(box),
    )


def merge_predictions(
    regions: Sequence[Region],
    detections: Iterable[DetectedObject],
    predict_tag: bool,
) -> List[Region]:
    """Return ``regions`` followed by non-duplicate detections in detector order.

    Each accepted region joins the comparison set, so two identical detections in
    one batch produce a single region. Existing regions are never modified.
    """

    merged = list(regions)
    for detection in detections:
        box = clamp_bbox(detection.bbox)
        if merged and is_duplicate(box, merged):
            continue
        merged.append(region_from_detection(detection, predict_tag))
    return merged
