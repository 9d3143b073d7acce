"""Configuration controller for YAML-based settings."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

import yaml

DEFAULT_PREDICTION_ENDPOINT = (
    "http://127.0.0.1:3001/api/v1/prediction/445d78bd-6f55-4465-97b0-ba42c14d8a95"
)
DEFAULT_REALTIME_URL = "wss://api.openai.com/v1/realtime?model=gpt-realtime"
CONFIG_DIR_ENV = "TOOL_PANEL_CONFIG_DIR"
BUNDLED_CONFIG_DIR = Path(__file__).resolve().parent


def default_config_dir() -> Path:
    """Return the active config directory.

    ``$TOOL_PANEL_CONFIG_DIR`` wins; otherwise the directory holding the
    bundled ``default.yaml``, so the result does not depend on the cwd.
    """

    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return BUNDLED_CONFIG_DIR


@dataclass(frozen=True)
class ConfigPaths:
    """Filesystem paths for configuration files."""

    config_dir: Path
    config_file: Path
    override_file: Path


class ConfigController:
    """Singleton controller for loading and updating configuration."""

    _instance: "ConfigController | None" = None

    def __init__(
        self,
        config_file: str = "default.yaml",
        config_dir: Path | None = None,
    ) -> None:
        if ConfigController._instance is not None:
            raise RuntimeError("You cannot create another ConfigController class")

        config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
        self.paths = ConfigPaths(
            config_dir=config_dir,
            config_file=config_dir / config_file,
            override_file=config_dir / "override.yaml",
        )
        self.config: dict[str, Any] = {}
        self.load_config()

    @classmethod
    def get_instance(cls) -> "ConfigController":
        """Return the singleton instance of the controller."""

        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def load_config(self) -> None:
        """Load configuration from default and override YAML files."""

        config_file = self.paths.config_file
        if not config_file.exists():
            # A config dir may hold only override.yaml.
            config_file = BUNDLED_CONFIG_DIR / config_file.name
        with config_file.open("r", encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}

        if self.paths.override_file.exists():
            with self.paths.override_file.open("r", encoding="utf-8") as file:
                override_config = yaml.safe_load(file) or {}
            if override_config:
                config = self._deep_merge(config, override_config)

        self.config = self._normalize_config(config)

    def save_config(self, config: dict[str, Any]) -> None:
        """Persist configuration to override.yaml, archiving previous overrides."""

        if self.paths.override_file.exists():
            archive_index = 1
            archive_file = self._archive_path(archive_index)
            while archive_file.exists():
                archive_index += 1
                archive_file = self._archive_path(archive_index)
            self.paths.override_file.rename(archive_file)

        with self.paths.override_file.open("w", encoding="utf-8") as file:
            yaml.safe_dump(config, file)

    def get_config(self) -> dict[str, Any]:
        """Return the currently loaded configuration."""

        return dict(self.config)

    def set_config(self, config: dict[str, Any]) -> None:
        """Set and persist configuration values."""

        self.config = dict(config)
        self.save_config(self.config)

    def _archive_path(self, index: int) -> Path:
        """Return the archive path for a given override index."""

        filename = f"override_{index:04d}.yaml"
        return self.paths.config_dir / filename

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge dictionaries, overriding base values with override values."""

        merged = dict(base)
        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _normalize_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Fill tool panel and realtime defaults, coercing scalar types."""

        normalized = dict(config)
        normalized["logging_level"] = str(normalized.get("logging_level", "INFO"))

        panel_cfg = dict(normalized.get("tool_panel") or {})
        prediction_cfg = dict(panel_cfg.get("prediction") or {})

        panel_cfg["log_capacity"] = max(1, int(panel_cfg.get("log_capacity", 50)))
        panel_cfg["palette_feedback_delay_ms"] = max(
            0, int(panel_cfg.get("palette_feedback_delay_ms", 500))
        )
        panel_cfg["cancel_pending_on_reset"] = bool(
            panel_cfg.get("cancel_pending_on_reset", False)
        )

        prediction_cfg["endpoint"] = str(
            prediction_cfg.get("endpoint") or DEFAULT_PREDICTION_ENDPOINT
        ).strip()
        prediction_cfg["timeout_s"] = max(1.0, float(prediction_cfg.get("timeout_s", 30.0)))

        panel_cfg["prediction"] = prediction_cfg
        normalized["tool_panel"] = panel_cfg

        realtime_cfg = dict(normalized.get("realtime") or {})
        realtime_cfg["url"] = str(realtime_cfg.get("url") or DEFAULT_REALTIME_URL).strip()
        normalized["realtime"] = realtime_cfg
        return normalized
