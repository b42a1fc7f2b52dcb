# Path: tagging/orchestrator.py
# Purpose: Sequence tag sync, state propagation, prediction merging, persistence, and catalog bookkeeping.
# Layer: tagging.
# Details: One instance per project session; owns the catalog, selection, detector, and single-flight flag.

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from config.settings import DEFAULT_TAG_PALETTE
from tagging.catalog import AssetCatalog, child_assets
from tagging.detectors import Detector, NullDetector, create_detector
from tagging.models.domain import Asset, AssetMetadata, Project, Region, Tag
from tagging.predictions import merge_predictions
from tagging.state import AssetStatePropagator, is_taggable
from tagging.storage.base import AssetSource, AttributeReader, ImageLoader, MetadataStore, ProjectStore
from tagging.tags import sync_project_tags, toggle_tag

logger = logging.getLogger(__name__)


class ReconciliationOrchestrator:
    """Entry points the host calls on asset selection and on metadata change.

    Only ``load_root_assets`` is single-flight. ``select_asset``,
    ``on_metadata_changed`` and ``predict`` are not guarded: two overlapping
    calls may interleave at their await points, and the later write wins.

    External calls:
    - tagging/storage/base.py::MetadataStore - load/save per-asset metadata.
    - tagging/storage/base.py::ProjectStore.save_project - persist the project document.
    - tagging/storage/base.py::AssetSource.list_root_assets - enumerate root assets.
    - tagging/storage/base.py::AttributeReader.read_dimensions - best-effort size lookup.
    - tagging/detectors/base.py::Detector.detect - active-learning suggestions.
    """

    def __init__(
        self,
        project: Project,
        metadata_store: MetadataStore,
        project_store: ProjectStore,
        asset_source: AssetSource,
        attribute_reader: Optional[AttributeReader] = None,
        image_loader: Optional[ImageLoader] = None,
        detector: Optional[Detector] = None,
        palette: Sequence[str] = DEFAULT_TAG_PALETTE,
    ) -> None:
        self.project = project
        self.metadata_store = metadata_store
        self.project_store = project_store
        self.asset_source = asset_source
        self.attribute_reader = attribute_reader
        self.image_loader = image_loader
        self.detector: Detector = detector or NullDetector()
        self.palette = list(palette)

        self.catalog = AssetCatalog()
        self.selected: Optional[AssetMetadata] = None
        self.child_assets: List[Asset] = []
        self.locked_tags: List[str] = []
        self._loading_assets = False
        self._propagator = AssetStatePropagator(metadata_store, self._lookup_asset)

    @property
    def is_loading_assets(self) -> bool:
        return self._loading_assets

    # Detector
    async def load_detector(self, bundled_model_dir: Path | None = None) -> Detector:
        """Create and load the detector configured by the project's active-learning settings."""

        settings = self.project.active_learning
        detector = create_detector(settings, bundled_model_dir)
        model_path = settings.resolve_model_path(bundled_model_dir)
        if model_path:
            logger.info("Loading %s detector from %s", detector.name, model_path)
            await detector.load(model_path)
        self.detector = detector
        return detector

    # Catalog
    async def load_root_assets(self) -> bool:
        """Build the catalog and select the initial asset.

        Returns False without doing anything when a load is already in flight or
        the catalog is already populated.
        """

        if self._loading_assets or len(self.catalog) > 0:
            return False

        self._loading_assets = True
        try:
            known = self.project.root_assets()
            discovered = await self.asset_source.list_root_assets(self.project)
            self.catalog.build(known, discovered)
            logger.info(
                "Catalog built for project %s: %d known, %d discovered, %d total",
                self.project.name,
                len(known),
                len(discovered),
                len(self.catalog),
            )
            initial = self.catalog.initial_selection(self.project.last_visited_asset_id)
            if initial is not None:
                await self.select_asset(initial)
        finally:
            self._loading_assets = False
        return True

    # Selection
    async def select_asset(self, asset: Asset) -> AssetMetadata:
        """Load, reconcile, and select ``asset``."""

        metadata = await self.metadata_store.load_metadata(self.project, asset)
        await self.sync_tags(metadata)
        await self._fill_size(metadata)
        self.project.last_visited_asset_id = metadata.asset.root_id
        await self.on_metadata_changed(metadata)

        self.selected = metadata
        logger.debug("Selected asset %s", metadata.asset.id)

        if (
            self.project.active_learning.auto_detect
            and self.detector.is_ready
            and is_taggable(metadata.asset)
            and not metadata.asset.predicted
        ):
            predicted = await self.predict()
            if predicted is not None:
                return predicted
        return metadata

    async def select_child_asset(self, child: Asset) -> Optional[AssetMetadata]:
        """Select a child asset (e.g. a paused video frame) unless it is already selected."""

        if self.selected is not None and self.selected.asset.id == child.id:
            return None
        return await self.select_asset(child)

    async def go_to_root_asset(self, direction: int) -> Optional[AssetMetadata]:
        """Select the previous (-1) or next (+1) root asset, staying put at the edges."""

        if self.selected is None:
            return None
        target = self.catalog.navigate(self.selected.asset, direction)
        if target is None:
            return None
        return await self.select_asset(target)

    # Tags
    async def sync_tags(self, metadata: AssetMetadata) -> bool:
        """Register region tags missing from the project; persists metadata and project when tags were added."""

        result = sync_project_tags(metadata, self.project.tags, self.palette)
        if not result.updated:
            return False
        self.project.tags = result.tags
        await self.metadata_store.save_metadata(self.project, metadata)
        await self.project_store.save_project(self.project)
        return True

    async def update_project_tags(self, tags: Sequence[Tag]) -> None:
        """Replace the project tag list (e.g. after editing tags in the footer) and persist it."""

        self.project.tags = list(tags)
        await self.project_store.save_project(self.project)

    def toggle_locked_tag(self, name: str) -> List[str]:
        """Lock or unlock ``name`` so it is applied to every newly drawn region."""

        self.locked_tags = toggle_tag(self.locked_tags, name)
        return self.locked_tags

    # Metadata
    async def on_metadata_changed(self, metadata: AssetMetadata) -> Asset:
        """Propagate state, persist metadata and project, and refresh the catalog entry of the root."""

        root = await self._propagator.propagate(self.project, metadata)
        self.project.assets[metadata.asset.id] = replace(metadata.asset)
        if root.id != metadata.asset.id:
            self.project.assets[root.id] = replace(root)
        await self.metadata_store.save_metadata(self.project, metadata)
        await self.project_store.save_project(self.project)

        self.catalog.update(root)
        self.child_assets = child_assets(self.project, root)
        return root

    async def update_regions(self, regions: Sequence[Region]) -> AssetMetadata:
        """Replace the selected asset's regions and run the metadata-changed pipeline."""

        if self.selected is None:
            raise RuntimeError("No asset is selected.")
        self.selected.regions = list(regions)
        await self.sync_tags(self.selected)
        await self.on_metadata_changed(self.selected)
        return self.selected

    # Active learning
    async def predict(self) -> Optional[AssetMetadata]:
        """Merge detector suggestions into the selected asset; returns None when prediction is skipped."""

        if self.selected is None or not self.detector.is_ready:
            return None
        if not is_taggable(self.selected.asset):
            logger.debug("Skipping prediction for container asset %s", self.selected.asset.id)
            return None
        if self.image_loader is None:
            raise RuntimeError("An image loader is required for prediction.")

        current = self.selected
        image = await self.image_loader.load_image(current.asset)
        detections = await self.detector.detect(image)
        logger.info("Detector returned %d object(s) for asset %s", len(detections), current.asset.id)

        regions = merge_predictions(current.regions, detections, self.project.active_learning.predict_tag)
        updated = AssetMetadata(asset=current.asset, regions=regions)
        updated.asset.predicted = True

        await self.sync_tags(updated)
        await self.on_metadata_changed(updated)
        self.selected = updated
        return updated

    # Helpers
    async def _fill_size(self, metadata: AssetMetadata) -> None:
        if metadata.asset.size is not None or self.attribute_reader is None:
            return
        try:
            metadata.asset.size = await self.attribute_reader.read_dimensions(metadata.asset)
        except Exception as exc:  # noqa: BLE001 - size is optional, selection continues without it
            logger.warning("Error computing size of asset %s: %s", metadata.asset.id, exc)

    def _lookup_asset(self, asset_id: str) -> Optional[Asset]:
        return self.catalog.get(asset_id) or self.project.assets.get(asset_id)
