# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for storage locations, active learning, tag colors, and logging.

import json
import os
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

DEFAULT_TAG_PALETTE: List[str] = [
    "#5db300",
    "#e81123",
    "#6917aa",
    "#015cda",
    "#4894fe",
    "#6b849c",
    "#70c400",
    "#eb0078",
    "#ff6b08",
    "#ad00b8",
    "#0b9a92",
    "#f3b200",
    "#a32eba",
    "#5f9ea0",
    "#d13438",
    "#00a2ed",
]


class ActiveLearningSettings(BaseModel):
    """Settings controlling detector-assisted region suggestions for a project."""

    model_path_type: str = Field(default="coco", description="Either 'coco' for the bundled model or 'file'.")
    model_path: str = Field(default="", description="Model location used when model_path_type is 'file'.")
    auto_detect: bool = Field(default=False, description="Run the detector automatically on selection.")
    predict_tag: bool = Field(default=True, description="Tag suggested regions with the detected class.")
    detector: str = Field(default="threshold", description="Identifier of the detector implementation.")

    def resolve_model_path(self, bundled_model_dir: Path | None = None) -> str:
        """Return the model path to load, or an empty string when no detector is configured."""

        if self.model_path_type == "coco":
            return str(bundled_model_dir) if bundled_model_dir else ""
        return self.model_path


class StorageSettings(BaseModel):
    """Settings describing where project files and source assets live."""

    project_dir: Path = Field(default=Path("storage/projects"), description="Folder holding project and metadata JSON.")
    source_dir: Path = Field(default=Path("storage/assets"), description="Folder enumerated for root assets.")


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    storage: StorageSettings = Field(default_factory=StorageSettings)
    active_learning: ActiveLearningSettings = Field(default_factory=ActiveLearningSettings)
    tag_palette: List[str] = Field(default_factory=lambda: list(DEFAULT_TAG_PALETTE), description="Ordered tag colors.")
    bundled_model_dir: Path | None = Field(default=None, description="Location of the bundled detector model.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_file(cls, path: Path | str) -> "AppSettings":
        """Load settings from a JSON file."""

        cfg_path = Path(path)
        if not cfg_path.exists():
            raise FileNotFoundError(f"Settings file {cfg_path} not found")
        return cls.model_validate(json.loads(cfg_path.read_text(encoding="utf-8")))

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings from the file named by TAGGING_CONFIG when set."""

        config_path = os.environ.get("TAGGING_CONFIG")
        if config_path:
            return cls.from_file(config_path)
        return cls()


__all__ = [
    "ActiveLearningSettings",
    "AppSettings",
    "DEFAULT_TAG_PALETTE",
    "StorageSettings",
]
