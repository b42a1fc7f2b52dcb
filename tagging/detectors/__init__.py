# Path: tagging/detectors/__init__.py
# Purpose: Package initializer for detector implementations and interfaces.
# Layer: tagging/detectors.
# Details: Exposes the base interface, reference implementations, and a settings-driven factory.

from __future__ import annotations

from pathlib import Path
from typing import Dict, Type

from config.settings import ActiveLearningSettings

from .base import Detector, NullDetector
from .threshold_detector import ThresholdDetector

DETECTORS: Dict[str, Type[Detector]] = {
    ThresholdDetector.name: ThresholdDetector,
}


def create_detector(settings: ActiveLearningSettings, bundled_model_dir: Path | None = None) -> Detector:
    """Return an unloaded detector for ``settings``, or a NullDetector when no model path resolves."""

    if not settings.resolve_model_path(bundled_model_dir):
        return NullDetector()
    detector_cls = DETECTORS.get(settings.detector)
    if detector_cls is None:
        raise ValueError(f"Unknown detector: {settings.detector}")
    return detector_cls()


__all__ = ["DETECTORS", "Detector", "NullDetector", "ThresholdDetector", "create_detector"]
