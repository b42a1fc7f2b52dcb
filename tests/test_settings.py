"""Tests for settings loading and logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from config import AppSettings, DEFAULT_TAG_PALETTE, setup_logging
from config.settings import ActiveLearningSettings


def test_defaults_use_builtin_palette() -> None:
    settings = AppSettings()

    assert settings.tag_palette == DEFAULT_TAG_PALETTE
    assert settings.active_learning.predict_tag is True
    assert settings.active_learning.auto_detect is False


def test_model_path_resolution() -> None:
    assert ActiveLearningSettings().resolve_model_path(None) == ""
    assert ActiveLearningSettings().resolve_model_path(Path("models/coco")) == str(Path("models/coco"))
    file_settings = ActiveLearningSettings(model_path_type="file", model_path="custom/model.json")
    assert file_settings.resolve_model_path(Path("models/coco")) == "custom/model.json"


def test_settings_load_from_file_and_env(tmp_path, monkeypatch) -> None:
    cfg_path = tmp_path / "settings.json"
    cfg_path.write_text(
        json.dumps({"storage": {"project_dir": "projects"}, "active_learning": {"auto_detect": True}}),
        encoding="utf-8",
    )

    settings = AppSettings.from_file(cfg_path)
    assert settings.storage.project_dir == Path("projects")
    assert settings.active_learning.auto_detect is True

    monkeypatch.setenv("TAGGING_CONFIG", str(cfg_path))
    assert AppSettings.from_env().active_learning.auto_detect is True

    monkeypatch.delenv("TAGGING_CONFIG")
    assert AppSettings.from_env().active_learning.auto_detect is False

    with pytest.raises(FileNotFoundError):
        AppSettings.from_file(tmp_path / "missing.json")


def test_setup_logging_is_idempotent() -> None:
    logger = logging.getLogger("tagging")
    saved_handlers, saved_level, saved_propagate = list(logger.handlers), logger.level, logger.propagate
    try:
        logger.handlers.clear()
        setup_logging("debug")
        setup_logging("debug")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        logger.handlers[:] = saved_handlers
        logger.setLevel(saved_level)
        logger.propagate = saved_propagate
