# Path: tagging/catalog.py
# Purpose: Maintain the ordered, deduplicated list of root assets for a project.
# Layer: tagging.
# Details: Supports building from known + discovered assets, initial selection, navigation, and in-place updates.

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from tagging.models.domain import Asset, AssetType, Project


class AssetCatalog:
    """Ordered sequence of root assets; each asset id appears at most once."""

    def __init__(self) -> None:
        self._assets: List[Asset] = []

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[Asset]:
        return iter(self._assets)

    @property
    def assets(self) -> List[Asset]:
        return list(self._assets)

    def build(self, known: Iterable[Asset], discovered: Iterable[Asset]) -> List[Asset]:
        """Replace the contents with ``known`` then ``discovered``, keeping the first copy of each id."""

        seen = set()
        ordered: List[Asset] = []
        for asset in [*known, *discovered]:
            if asset.id in seen:
                continue
            seen.add(asset.id)
            ordered.append(asset)
        self._assets = ordered
        return self.assets

    def get(self, asset_id: str) -> Optional[Asset]:
        for asset in self._assets:
            if asset.id == asset_id:
                return asset
        return None

    def index_of(self, asset_id: str) -> int:
        """Return the position of ``asset_id`` or -1 when absent."""

        for index, asset in enumerate(self._assets):
            if asset.id == asset_id:
                return index
        return -1

    def initial_selection(self, last_visited_asset_id: Optional[str]) -> Optional[Asset]:
        """Return the last visited asset when present, else the first asset, else None."""

        if not self._assets:
            return None
        if last_visited_asset_id is not None:
            match = self.get(last_visited_asset_id)
            if match is not None:
                return match
        return self._assets[0]

    def navigate(self, current: Asset, direction: int) -> Optional[Asset]:
        """Return the neighbour of ``current`` in ``direction``, clamped to the list bounds."""

        if direction == 0:
            raise ValueError("Navigation direction must be positive or negative.")
        if not self._assets:
            return None
        step = 1 if direction > 0 else -1
        index = self.index_of(current.root_id) + step
        index = min(len(self._assets) - 1, max(0, index))
        return self._assets[index]

    def update(self, asset: Asset) -> bool:
        """Replace the entry with the same id; returns False when the asset is not catalogued."""

        index = self.index_of(asset.id)
        if index < 0:
            return False
        self._assets[index] = asset
        return True


def child_assets(project: Project, root: Asset) -> List[Asset]:
    """Return the video frames of ``root`` known to the project, ordered by timestamp."""

    children = [
        asset
        for asset in project.assets.values()
        if asset.parent_id == root.id and asset.id != root.id and asset.type == AssetType.VIDEO_FRAME
    ]
    return sorted(children, key=lambda asset: asset.timestamp or 0.0)
