# Path: tagging/detectors/threshold_detector.py
# Purpose: Provide a lightweight reference detector built on numpy intensity statistics.
# Layer: tagging/detectors.
# Details: Flags pixels far from the mean intensity and boxes each contiguous band of such rows.

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import List, Tuple

import numpy as np
from PIL import Image

from tagging.models.domain import DetectedObject

from .base import Detector

logger = logging.getLogger(__name__)

PARAMS_FILE = "detector.json"


class ThresholdDetector(Detector):
    """Deterministic stand-in for a learned detector.

    ``load`` accepts either a parameter file or a directory containing
    ``detector.json`` with optional ``label``, ``k`` and ``min_pixels`` keys.
    """

    name = "threshold"

    def __init__(self, label: str = "object", k: float = 1.5, min_pixels: int = 4) -> None:
        self.label = label
        self.k = k
        self.min_pixels = min_pixels
        self._loaded = False

    @property
    def is_ready(self) -> bool:
        return self._loaded

    async def load(self, path: str) -> None:
        target = Path(path)
        if not target.exists():
            raise FileNotFoundError(f"Detector model {target} not found")
        params_path = target / PARAMS_FILE if target.is_dir() else target
        if params_path.exists():
            params = json.loads(await asyncio.to_thread(params_path.read_text, encoding="utf-8"))
            self.label = str(params.get("label", self.label))
            self.k = float(params.get("k", self.k))
            self.min_pixels = int(params.get("min_pixels", self.min_pixels))
        self._loaded = True
        logger.info("Threshold detector loaded from %s (label=%s, k=%.2f)", target, self.label, self.k)

    async def detect(self, image: Image.Image) -> List[DetectedObject]:
        if not self._loaded:
            raise RuntimeError("ThresholdDetector.detect called before load().")
        return await asyncio.to_thread(self._detect, image)

    def _detect(self, image: Image.Image) -> List[DetectedObject]:
        gray = np.asarray(image.convert("L"), dtype=np.float32)
        std = float(gray.std())
        if gray.size == 0 or std == 0:
            return []

        mask = np.abs(gray - float(gray.mean())) > self.k * std
        detections: List[DetectedObject] = []
        for top, bottom in self._row_bands(mask.any(axis=1)):
            band = mask[top:bottom]
            count = int(band.sum())
            if count < self.min_pixels:
                continue
            columns = np.flatnonzero(band.any(axis=0))
            left, right = int(columns[0]), int(columns[-1]) + 1
            detections.append(
                DetectedObject(
                    class_name=self.label,
                    bbox=[float(left), float(top), float(right - left), float(bottom - top)],
                    score=count / float((right - left) * (bottom - top)),
                )
            )
        return detections

    @staticmethod
    def _row_bands(rows: np.ndarray) -> List[Tuple[int, int]]:
        """Return ``(start, stop)`` pairs for runs of True values."""

        bands: List[Tuple[int, int]] = []
        start = None
        for index, flagged in enumerate(rows.tolist()):
            if flagged and start is None:
                start = index
            elif not flagged and start is not None:
                bands.append((start, index))
                start = None
        if start is not None:
            bands.append((start, len(rows)))
        return bands
