# Path: tagging/state.py
# Purpose: Derive asset visitation/tagging state and propagate it to the root asset.
# Layer: tagging.
# Details: Child assets (video frames) push their state to the root video unless the root is already tagged.

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from tagging.models.domain import Asset, AssetMetadata, AssetState, AssetType, Project
from tagging.storage.base import MetadataStore

logger = logging.getLogger(__name__)

AssetLookup = Callable[[str], Optional[Asset]]


def is_taggable(asset: Asset) -> bool:
    """Return True for asset types that carry regions directly (not videos or unknown files)."""

    return asset.type not in (AssetType.UNKNOWN, AssetType.VIDEO)


def apply_asset_state(metadata: AssetMetadata) -> AssetState:
    """Update ``metadata.asset.state`` from its regions and return the new state."""

    asset = metadata.asset
    if is_taggable(asset):
        asset.state = AssetState.TAGGED if metadata.regions else AssetState.VISITED
    elif asset.state == AssetState.NOT_VISITED:
        asset.state = AssetState.VISITED
    return asset.state


class AssetStatePropagator:
    """Apply state changes to an asset and mirror them onto its root asset.

    External calls:
    - tagging/storage/base.py::MetadataStore.load_metadata - fetch the root asset's metadata.
    - tagging/storage/base.py::MetadataStore.save_metadata - persist the root when its state changes.
    """

    def __init__(self, metadata_store: MetadataStore, lookup: AssetLookup) -> None:
        self.metadata_store = metadata_store
        self.lookup = lookup

    async def propagate(self, project: Project, metadata: AssetMetadata) -> Asset:
        """Update the changed asset's state and return a copy of its root with the resolved state."""

        state = apply_asset_state(metadata)
        asset = metadata.asset

        if asset.is_root:
            return replace(asset, state=state)

        root = self.lookup(asset.root_id)
        if root is None:
            raise KeyError(f"Root asset {asset.root_id} not found for asset {asset.id}")

        root_metadata = await self.metadata_store.load_metadata(project, root)
        if root_metadata.asset.state != AssetState.TAGGED:
            root_metadata.asset.state = state
            await self.metadata_store.save_metadata(project, root_metadata)
            logger.debug("Root asset %s state set to %s from child %s", root.id, state.value, asset.id)

        return replace(root, state=root_metadata.asset.state)
