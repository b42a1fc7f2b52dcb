# Path: tagging/storage/base.py
# Purpose: Define the external collaborator contracts consumed by the reconciliation engine.
# Layer: tagging/storage.
# Details: Protocols for metadata, project, asset enumeration, attribute reading, and image loading.

from __future__ import annotations

from typing import List, Protocol

from PIL import Image

from tagging.models.domain import Asset, AssetMetadata, Project, Size


class MetadataStore(Protocol):
    """Adapter responsible for reading and writing per-asset metadata."""

    async def load_metadata(self, project: Project, asset: Asset) -> AssetMetadata:
        """Return the persisted metadata of ``asset``, or an empty record when none exists."""

    async def save_metadata(self, project: Project, metadata: AssetMetadata) -> None:
        """Persist ``metadata``; I/O failures propagate to the caller."""


class ProjectStore(Protocol):
    """Adapter responsible for persisting the project document."""

    async def save_project(self, project: Project) -> None:
        """Persist ``project``; I/O failures propagate to the caller."""


class AssetSource(Protocol):
    """Enumerate root assets from an external location. No ordering is guaranteed."""

    async def list_root_assets(self, project: Project) -> List[Asset]:
        """Return all parentless assets currently available from the source."""


class AttributeReader(Protocol):
    """Best-effort reader for asset dimensions."""

    async def read_dimensions(self, asset: Asset) -> Size:
        """Return the pixel size of ``asset`` or raise when it cannot be determined."""


class ImageLoader(Protocol):
    """Load the pixels of an asset for detector inference."""

    async def load_image(self, asset: Asset) -> Image.Image:
        """Return the decoded image for ``asset``."""
