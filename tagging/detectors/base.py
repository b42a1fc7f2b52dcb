# Path: tagging/detectors/base.py
# Purpose: Define the Detector interface used for active-learning region suggestions.
# Layer: tagging/detectors.
# Details: Provides an abstract detector and a null variant used when no model is configured.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from PIL import Image

from tagging.models.domain import DetectedObject


class Detector(ABC):
    """Abstract base class for object detectors."""

    name: str

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """Return True once a model has been loaded and ``detect`` may be called."""

    @abstractmethod
    async def load(self, path: str) -> None:
        """Load model resources from ``path``."""

    @abstractmethod
    async def detect(self, image: Image.Image) -> List[DetectedObject]:
        """Return detected objects as ``[x, y, width, height]`` boxes with class labels."""


class NullDetector(Detector):
    """Detector used when active learning is disabled; never becomes ready."""

    name = "null"

    @property
    def is_ready(self) -> bool:
        return False

    async def load(self, path: str) -> None:
        return None

    async def detect(self, image: Image.Image) -> List[DetectedObject]:
        return []
