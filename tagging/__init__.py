# Path: tagging/__init__.py
# Purpose: Package initializer for the asset tagging reconciliation engine.
# Layer: tagging.
# Details: Aggregates models, tag sync, state propagation, prediction merging, catalog, and orchestration.

from .catalog import AssetCatalog, child_assets
from .orchestrator import ReconciliationOrchestrator
from .predictions import merge_predictions
from .state import AssetStatePropagator, apply_asset_state, is_taggable
from .tags import TagSyncResult, sync_project_tags, tag_for_hotkey, toggle_tag

__all__ = [
    "AssetCatalog",
    "AssetStatePropagator",
    "ReconciliationOrchestrator",
    "TagSyncResult",
    "apply_asset_state",
    "child_assets",
    "is_taggable",
    "merge_predictions",
    "sync_project_tags",
    "tag_for_hotkey",
    "toggle_tag",
]
