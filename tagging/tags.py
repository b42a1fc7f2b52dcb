# Path: tagging/tags.py
# Purpose: Keep the project tag registry in sync with tags used on asset regions.
# Layer: tagging.
# Details: Appends unseen tag names with palette colors; also hosts hotkey and tag-lock helpers.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from config.settings import DEFAULT_TAG_PALETTE
from tagging.models.domain import AssetMetadata, AssetState, Tag

logger = logging.getLogger(__name__)


@dataclass
class TagSyncResult:
    """Outcome of a synchronizer pass.

    ``tags`` is the full next tag list; ``added`` holds only the tags appended in this pass.
    """

    tags: List[Tag]
    added: List[Tag] = field(default_factory=list)

    @property
    def updated(self) -> bool:
        return bool(self.added)


def region_tag_names(metadata: AssetMetadata) -> List[str]:
    """Return the distinct tag names used by the asset's regions in first-seen order."""

    names: List[str] = []
    seen = set()
    for region in metadata.regions:
        for name in region.tags:
            if name not in seen:
                seen.add(name)
                names.append(name)
    return names


def sync_project_tags(
    metadata: AssetMetadata,
    project_tags: Sequence[Tag],
    palette: Sequence[str] = DEFAULT_TAG_PALETTE,
) -> TagSyncResult:
    """Append region tags missing from ``project_tags`` and mark the asset tagged if any were added.

    The color of each appended tag is ``palette[len(tags) % len(palette)]`` where
    ``tags`` is the list being built, so the k-th tag of a project always receives
    the same color. ``project_tags`` itself is not mutated.
    """

    if not palette:
        raise ValueError("Tag palette must contain at least one color.")

    tags = list(project_tags)
    known = {tag.name for tag in tags}
    added: List[Tag] = []

    for name in region_tag_names(metadata):
        if name in known:
            continue
        tag = Tag(name=name, color=palette[len(tags) % len(palette)])
        tags.append(tag)
        added.append(tag)
        known.add(name)

    if added:
        metadata.asset.state = AssetState.TAGGED
        logger.info("Added %d tag(s) from asset %s: %s", len(added), metadata.asset.id, [t.name for t in added])

    return TagSyncResult(tags=tags, added=added)


def tag_for_hotkey(tags: Sequence[Tag], key: str) -> Optional[Tag]:
    """Map a digit key to a tag: '1'-'9' select tags[0]-tags[8], '0' selects tags[9]."""

    if len(key) != 1 or key not in "0123456789":
        return None
    index = 9 if key == "0" else int(key) - 1
    if index < len(tags):
        return tags[index]
    return None


def toggle_tag(locked: Sequence[str], name: str) -> List[str]:
    """Return ``locked`` with ``name`` removed if present, otherwise appended."""

    if name in locked:
        return [item for item in locked if item != name]
    return [*locked, name]
