"""Tests for the root asset catalog."""

from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import make_asset
from tagging.catalog import AssetCatalog, child_assets
from tagging.models.domain import AssetState, AssetType, Project


def _ids(catalog: AssetCatalog) -> list:
    return [asset.id for asset in catalog]


def _catalog(assets) -> AssetCatalog:
    catalog = AssetCatalog()
    catalog.build(assets, [])
    return catalog


def test_build_keeps_known_assets_first_and_drops_duplicates() -> None:
    known_b = make_asset("B", name="project copy")
    discovered_b = make_asset("B", name="source copy")
    catalog = AssetCatalog()

    catalog.build([make_asset("A"), known_b], [discovered_b, make_asset("C")])

    assert _ids(catalog) == ["A", "B", "C"]
    assert catalog.get("B").name == "project copy"


def test_initial_selection_prefers_last_visited() -> None:
    catalog = _catalog([make_asset("A"), make_asset("B")])

    assert catalog.initial_selection("B").id == "B"
    assert catalog.initial_selection("missing").id == "A"
    assert catalog.initial_selection(None).id == "A"
    assert AssetCatalog().initial_selection("A") is None


def test_navigation_is_clamped_at_both_edges() -> None:
    assets = [make_asset("A"), make_asset("B"), make_asset("C")]
    catalog = _catalog(assets)

    assert catalog.navigate(assets[2], 1).id == "C"
    assert catalog.navigate(assets[0], -1).id == "A"
    assert catalog.navigate(assets[1], 1).id == "C"
    assert catalog.navigate(assets[1], -1).id == "A"


def test_navigation_from_child_uses_its_root() -> None:
    catalog = _catalog([make_asset("A"), make_asset("V", AssetType.VIDEO), make_asset("C")])
    frame = make_asset("F", AssetType.VIDEO_FRAME, parent_id="V")

    assert catalog.navigate(frame, 1).id == "C"


def test_navigation_rejects_zero_direction() -> None:
    catalog = _catalog([make_asset("A")])

    with pytest.raises(ValueError):
        catalog.navigate(make_asset("A"), 0)
    assert AssetCatalog().navigate(make_asset("A"), 1) is None


def test_update_replaces_entry_in_place() -> None:
    catalog = _catalog([make_asset("A"), make_asset("B"), make_asset("C")])

    assert catalog.update(replace(catalog.get("B"), state=AssetState.TAGGED)) is True
    assert catalog.update(make_asset("Z")) is False

    assert _ids(catalog) == ["A", "B", "C"]
    assert catalog.get("B").state == AssetState.TAGGED


def test_child_assets_are_frames_sorted_by_timestamp() -> None:
    video = make_asset("V", AssetType.VIDEO)
    project = Project(id="p", name="p")
    project.assets = {
        "V": video,
        "f2": make_asset("f2", AssetType.VIDEO_FRAME, parent_id="V", timestamp=2.0),
        "f1": make_asset("f1", AssetType.VIDEO_FRAME, parent_id="V", timestamp=1.0),
        "other": make_asset("other", AssetType.VIDEO_FRAME, parent_id="W", timestamp=0.5),
    }

    assert [asset.id for asset in child_assets(project, video)] == ["f1", "f2"]
