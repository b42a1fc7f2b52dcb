# Path: tagging/storage/__init__.py
# Purpose: Package initializer for storage contracts and local implementations.
# Layer: tagging/storage.
# Details: Exposes collaborator protocols plus file, folder, and Pillow-backed adapters.

from .attributes import PillowAttributeReader, PillowImageLoader
from .base import AssetSource, AttributeReader, ImageLoader, MetadataStore, ProjectStore
from .folder_source import FolderAssetSource, SUPPORTED_EXTENSIONS
from .local_file import LocalFileStorage

__all__ = [
    "AssetSource",
    "AttributeReader",
    "FolderAssetSource",
    "ImageLoader",
    "LocalFileStorage",
    "MetadataStore",
    "PillowAttributeReader",
    "PillowImageLoader",
    "ProjectStore",
    "SUPPORTED_EXTENSIONS",
]
