# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models and logging setup for application-wide configuration.

from .logging import setup_logging
from .settings import ActiveLearningSettings, AppSettings, DEFAULT_TAG_PALETTE, StorageSettings

__all__ = ["ActiveLearningSettings", "AppSettings", "DEFAULT_TAG_PALETTE", "StorageSettings", "setup_logging"]
