# Path: scripts/reconcile_project.py
# Purpose: CLI tool to reconcile tags and asset states across every root asset of a project.
# Layer: scripts.
# Details: Demonstrates how to wire settings, storage, detector, and the orchestrator together.

from __future__ import annotations

import argparse
import asyncio
import uuid
from collections import Counter
from pathlib import Path

from tqdm import tqdm

from config import AppSettings, setup_logging
from tagging.models.domain import Project
from tagging.orchestrator import ReconciliationOrchestrator
from tagging.storage import FolderAssetSource, LocalFileStorage, PillowAttributeReader, PillowImageLoader


async def reconcile(settings: AppSettings, project_name: str, predict: bool) -> ReconciliationOrchestrator:
    """Select every root asset once so tags, sizes, and states are brought up to date."""

    storage = LocalFileStorage(settings.storage.project_dir)
    try:
        project = await storage.load_project(project_name)
    except FileNotFoundError:
        project = Project(id=uuid.uuid4().hex, name=project_name, active_learning=settings.active_learning)

    orchestrator = ReconciliationOrchestrator(
        project=project,
        metadata_store=storage,
        project_store=storage,
        asset_source=FolderAssetSource(settings.storage.source_dir),
        attribute_reader=PillowAttributeReader(),
        image_loader=PillowImageLoader(),
        palette=settings.tag_palette,
    )
    if predict:
        await orchestrator.load_detector(settings.bundled_model_dir)

    await orchestrator.load_root_assets()
    for asset in tqdm(orchestrator.catalog.assets, desc="Reconciling assets", unit="asset"):
        await orchestrator.select_asset(asset)
        if predict:
            await orchestrator.predict()
    return orchestrator


def main() -> None:
    """Run reconciliation over a project and print a summary."""

    parser = argparse.ArgumentParser(description="Reconcile tags and states for a labeling project")
    parser.add_argument("--project", required=True, help="Project name")
    parser.add_argument("--config", type=Path, default=None, help="Optional JSON settings file")
    parser.add_argument("--predict", action="store_true", help="Merge detector suggestions into every asset")
    args = parser.parse_args()

    settings = AppSettings.from_file(args.config) if args.config else AppSettings.from_env()
    setup_logging(settings.log_level)

    orchestrator = asyncio.run(reconcile(settings, args.project, args.predict))
    states = Counter(asset.state.value for asset in orchestrator.catalog)
    print(f"Project {orchestrator.project.name}: {len(orchestrator.project.tags)} tag(s)")
    for state, count in sorted(states.items()):
        print(f"  {state}: {count}")


if __name__ == "__main__":
    main()
