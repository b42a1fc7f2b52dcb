# Path: config/logging.py
# Purpose: Configure application logging for the tagging engine.
# Layer: config.
# Details: Installs a single stream handler on the package logger; safe to call repeatedly.

from __future__ import annotations

import logging

LOGGER_NAME = "tagging"


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a stream handler to the ``tagging`` logger and apply ``level``."""

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger
