"""Tests for configuration defaults and tool panel settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from toolpanel.config.controller import (
    BUNDLED_CONFIG_DIR,
    CONFIG_DIR_ENV,
    DEFAULT_PREDICTION_ENDPOINT,
    ConfigController,
)
from toolpanel.settings import ToolPanelSettings


@pytest.fixture(autouse=True)
def _reset_singletons(monkeypatch):
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
    ConfigController._instance = None
    yield
    ConfigController._instance = None


def _write_default(config_dir: Path, text: str) -> Path:
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "default.yaml").write_text(text, encoding="utf-8")
    return config_dir


def test_empty_config_gets_tool_panel_defaults(tmp_path: Path, monkeypatch) -> None:
    config_dir = _write_default(tmp_path / "conf", "{}\n")
    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))

    config = ConfigController.get_instance().get_config()
    panel_cfg = config["tool_panel"]

    assert config["logging_level"] == "INFO"
    assert panel_cfg["log_capacity"] == 50
    assert panel_cfg["palette_feedback_delay_ms"] == 500
    assert panel_cfg["cancel_pending_on_reset"] is False
    assert panel_cfg["prediction"]["endpoint"] == DEFAULT_PREDICTION_ENDPOINT
    assert panel_cfg["prediction"]["timeout_s"] == 30.0
    assert config["realtime"]["url"].startswith("wss://")


def test_default_instance_ignores_working_directory(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    controller = ConfigController.get_instance()

    assert controller.paths.config_dir == BUNDLED_CONFIG_DIR
    assert controller.paths.config_file == BUNDLED_CONFIG_DIR / "default.yaml"
    assert controller.get_config()["tool_panel"]["log_capacity"] == 50


def test_override_file_is_deep_merged(tmp_path: Path, monkeypatch) -> None:
    config_dir = _write_default(
        tmp_path / "conf",
        "tool_panel:\n  log_capacity: 20\n  prediction:\n    timeout_s: 12\n",
    )
    (config_dir / "override.yaml").write_text(
        "tool_panel:\n  prediction:\n    endpoint: https://flows.example.com/api/v1/prediction/x\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))

    settings = ToolPanelSettings.from_config()

    assert settings.log_capacity == 20
    assert settings.prediction_timeout_s == 12.0
    assert settings.prediction_endpoint == "https://flows.example.com/api/v1/prediction/x"
    assert settings.palette_feedback_delay_s == 0.5


def test_override_only_dir_uses_bundled_defaults(tmp_path: Path) -> None:
    (tmp_path / "override.yaml").write_text("tool_panel:\n  log_capacity: 7\n", encoding="utf-8")

    controller = ConfigController(config_dir=tmp_path)
    panel_cfg = controller.get_config()["tool_panel"]

    assert panel_cfg["log_capacity"] == 7
    assert panel_cfg["palette_feedback_delay_ms"] == 500


def test_save_config_archives_previous_override(tmp_path: Path) -> None:
    config_dir = _write_default(tmp_path, "{}\n")
    (config_dir / "override.yaml").write_text("logging_level: DEBUG\n", encoding="utf-8")

    controller = ConfigController(config_dir=config_dir)
    assert controller.get_config()["logging_level"] == "DEBUG"
    controller.set_config({"logging_level": "WARNING"})

    assert (config_dir / "override_0001.yaml").exists()
    assert "WARNING" in (config_dir / "override.yaml").read_text(encoding="utf-8")
