"""Tests for asset state derivation and root propagation."""

from __future__ import annotations

import asyncio

import pytest

from conftest import FakeMetadataStore, make_asset, make_region
from tagging.models.domain import AssetMetadata, AssetState, AssetType, Project
from tagging.state import AssetStatePropagator, apply_asset_state, is_taggable


def test_taggable_types_exclude_videos_and_unknown() -> None:
    assert is_taggable(make_asset("i", AssetType.IMAGE))
    assert is_taggable(make_asset("f", AssetType.VIDEO_FRAME))
    assert not is_taggable(make_asset("v", AssetType.VIDEO))
    assert not is_taggable(make_asset("u", AssetType.UNKNOWN))


def test_taggable_asset_state_follows_regions() -> None:
    tagged = AssetMetadata(asset=make_asset("a"), regions=[make_region("r", ["cat"])])
    untagged = AssetMetadata(asset=make_asset("b", state=AssetState.TAGGED), regions=[])

    assert apply_asset_state(tagged) == AssetState.TAGGED
    assert apply_asset_state(untagged) == AssetState.VISITED


def test_video_container_is_only_marked_visited() -> None:
    fresh = AssetMetadata(asset=make_asset("v", AssetType.VIDEO))
    tagged = AssetMetadata(asset=make_asset("w", AssetType.VIDEO, state=AssetState.TAGGED))

    assert apply_asset_state(fresh) == AssetState.VISITED
    assert apply_asset_state(tagged) == AssetState.TAGGED


def _propagator(store: FakeMetadataStore, *assets) -> AssetStatePropagator:
    by_id = {asset.id: asset for asset in assets}
    return AssetStatePropagator(store, by_id.get)


def test_root_asset_resolves_to_itself_without_store_access() -> None:
    store = FakeMetadataStore()
    metadata = AssetMetadata(asset=make_asset("a"), regions=[make_region("r", ["cat"])])

    root = asyncio.run(_propagator(store).propagate(Project(id="p", name="p"), metadata))

    assert root.id == "a"
    assert root.state == AssetState.TAGGED
    assert root is not metadata.asset
    assert store.saved == []


def test_child_edit_tags_a_visited_root() -> None:
    store = FakeMetadataStore()
    video = make_asset("video", AssetType.VIDEO, state=AssetState.VISITED)
    store.put(AssetMetadata(asset=video))
    frame = make_asset("frame", AssetType.VIDEO_FRAME, parent_id="video", timestamp=1.5)
    metadata = AssetMetadata(asset=frame, regions=[make_region("r", ["car"])])

    root = asyncio.run(_propagator(store, video).propagate(Project(id="p", name="p"), metadata))

    assert root.id == "video"
    assert root.state == AssetState.TAGGED
    assert store.saved == ["video"]
    assert store.get("video").asset.state == AssetState.TAGGED


def test_tagged_root_is_never_downgraded_or_resaved() -> None:
    store = FakeMetadataStore()
    video = make_asset("video", AssetType.VIDEO, state=AssetState.TAGGED)
    store.put(AssetMetadata(asset=video))
    frame = make_asset("frame", AssetType.VIDEO_FRAME, parent_id="video")
    metadata = AssetMetadata(asset=frame, regions=[])

    root = asyncio.run(_propagator(store, video).propagate(Project(id="p", name="p"), metadata))

    assert metadata.asset.state == AssetState.VISITED
    assert root.state == AssetState.TAGGED
    assert store.saved == []


def test_parent_pointing_at_itself_is_treated_as_root() -> None:
    store = FakeMetadataStore()
    metadata = AssetMetadata(asset=make_asset("a", parent_id="a"))

    root = asyncio.run(_propagator(store).propagate(Project(id="p", name="p"), metadata))

    assert root.id == "a"
    assert root.state == AssetState.VISITED


def test_unknown_root_raises_key_error() -> None:
    store = FakeMetadataStore()
    metadata = AssetMetadata(asset=make_asset("frame", AssetType.VIDEO_FRAME, parent_id="missing"))

    with pytest.raises(KeyError):
        asyncio.run(_propagator(store).propagate(Project(id="p", name="p"), metadata))
