# Path: api/app.py
# Purpose: Expose a FastAPI application for driving a tagging session over HTTP.
# Layer: api.
# Details: Thin async endpoints delegating to the reconciliation orchestrator.

from __future__ import annotations

from typing import Any, Dict, List, Optional

from tagging.models.domain import Region, Tag
from tagging.orchestrator import ReconciliationOrchestrator


def create_app(orchestrator: Optional[ReconciliationOrchestrator] = None):  # type: ignore[override]
    """Create a FastAPI app instance bound to the provided orchestrator."""

    from fastapi import FastAPI, HTTPException

    app = FastAPI(title="Asset Tagging API", version="0.1.0")

    def _require() -> ReconciliationOrchestrator:
        if orchestrator is None:
            raise HTTPException(status_code=500, detail="Tagging orchestrator is not configured.")
        return orchestrator

    def _selected_payload(session: ReconciliationOrchestrator) -> Dict[str, Any]:
        if session.selected is None:
            raise HTTPException(status_code=409, detail="No asset is selected.")
        return {
            "selected": session.selected.to_dict(),
            "child_assets": [child.to_dict() for child in session.child_assets],
        }

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "ok"}

    @app.get("/assets")
    def list_assets() -> Dict[str, Any]:
        """Return the catalogued root assets in display order."""

        session = _require()
        return {
            "assets": [asset.to_dict() for asset in session.catalog],
            "loading": session.is_loading_assets,
        }

    @app.post("/assets/load")
    async def load_assets() -> Dict[str, Any]:
        """Build the catalog if it has not been built yet."""

        session = _require()
        loaded = await session.load_root_assets()
        return {"loaded": loaded, "count": len(session.catalog)}

    @app.post("/assets/navigate")
    async def navigate(payload: Dict[str, Any]):
        """Move the selection to the previous or next root asset."""

        session = _require()
        try:
            direction = int(payload.get("direction", 1))
            await session.go_to_root_asset(direction)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _selected_payload(session)

    @app.post("/assets/{asset_id}/select")
    async def select(asset_id: str):
        """Select a catalogued root asset or a known child asset."""

        session = _require()
        asset = session.catalog.get(asset_id) or session.project.assets.get(asset_id)
        if asset is None:
            raise HTTPException(status_code=404, detail=f"Asset {asset_id} not found.")
        await session.select_asset(asset)
        return _selected_payload(session)

    @app.put("/assets/{asset_id}/regions")
    async def update_regions(asset_id: str, payload: Dict[str, Any]):
        """Replace the regions of the selected asset."""

        session = _require()
        if session.selected is None or session.selected.asset.id != asset_id:
            raise HTTPException(status_code=409, detail=f"Asset {asset_id} is not the selected asset.")
        regions: List[Region] = [Region.from_dict(region) for region in payload.get("regions", [])]
        await session.update_regions(regions)
        return _selected_payload(session)

    @app.post("/predict")
    async def predict():
        """Run the detector over the selected asset."""

        session = _require()
        if session.selected is None:
            raise HTTPException(status_code=409, detail="No asset is selected.")
        result = await session.predict()
        payload = _selected_payload(session)
        payload["predicted"] = result is not None
        return payload

    @app.get("/tags")
    def list_tags() -> Dict[str, Any]:
        session = _require()
        return {"tags": [{"name": tag.name, "color": tag.color} for tag in session.project.tags]}

    @app.put("/tags")
    async def replace_tags(payload: Dict[str, Any]):
        """Replace the project tag list."""

        session = _require()
        tags = [Tag(name=str(tag["name"]), color=str(tag["color"])) for tag in payload.get("tags", [])]
        await session.update_project_tags(tags)
        return {"tags": [{"name": tag.name, "color": tag.color} for tag in session.project.tags]}

    return app
