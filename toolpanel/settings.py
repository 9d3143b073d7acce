"""Typed tool panel settings derived from the YAML configuration."""

from __future__ import annotations

from dataclasses import dataclass

from toolpanel.config import ConfigController
from toolpanel.config.controller import DEFAULT_PREDICTION_ENDPOINT, DEFAULT_REALTIME_URL


@dataclass(frozen=True)
class ToolPanelSettings:
    """Runtime knobs for the controller, handlers and transport."""

    log_capacity: int = 50
    palette_feedback_delay_ms: int = 500
    cancel_pending_on_reset: bool = False
    prediction_endpoint: str = DEFAULT_PREDICTION_ENDPOINT
    prediction_timeout_s: float = 30.0
    realtime_url: str = DEFAULT_REALTIME_URL

    @property
    def palette_feedback_delay_s(self) -> float:
        return self.palette_feedback_delay_ms / 1000.0

    @classmethod
    def from_config(cls) -> "ToolPanelSettings":
        config = ConfigController.get_instance().get_config()
        panel_cfg = config.get("tool_panel", {})
        prediction_cfg = panel_cfg.get("prediction", {})
        realtime_cfg = config.get("realtime", {})
        return cls(
            log_capacity=int(panel_cfg.get("log_capacity", 50)),
            palette_feedback_delay_ms=int(panel_cfg.get("palette_feedback_delay_ms", 500)),
            cancel_pending_on_reset=bool(panel_cfg.get("cancel_pending_on_reset", False)),
            prediction_endpoint=str(prediction_cfg.get("endpoint", DEFAULT_PREDICTION_ENDPOINT)),
            prediction_timeout_s=float(prediction_cfg.get("timeout_s", 30.0)),
            realtime_url=str(realtime_cfg.get("url", DEFAULT_REALTIME_URL)),
        )
