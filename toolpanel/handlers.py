"""Tool handlers that turn a function call into a follow-up instruction."""

from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
from typing import TYPE_CHECKING, Any

from toolpanel.core.logging import log_warning
from toolpanel.catalog import DISPLAY_COLOR_PALETTE, FOREIGN_WORKER_ENQUIRY
from toolpanel.errors import PredictionError
from toolpanel.log_recorder import API_ERROR, API_REQUEST, API_RESPONSE
from toolpanel.models import OutcomeStatus, ToolOutcome
from toolpanel.prediction_client import PredictionClient, build_prediction_payload

if TYPE_CHECKING:
    from toolpanel.controller import ToolPanelController

PALETTE_FEEDBACK_INSTRUCTIONS = """
ask for feedback about the color palette - don't repeat
the colors, just ask if they like the colors.
"""

PREDICTION_APOLOGY = "Sorry, there was an error processing your request."


class ToolHandler(ABC):
    """Interface for tool handlers."""

    name: str = ""
    initial_status: OutcomeStatus = OutcomeStatus.LOCAL

    @abstractmethod
    def handle(self, host: "ToolPanelController", outcome: ToolOutcome) -> None:
        """Start work for ``outcome``; it must lead to exactly one follow-up instruction."""


class ColorPaletteHandler(ToolHandler):
    """Local palette display followed by a delayed feedback prompt."""

    name = DISPLAY_COLOR_PALETTE
    initial_status = OutcomeStatus.LOCAL

    def __init__(self, delay_s: float = 0.5) -> None:
        self._delay_s = max(0.0, float(delay_s))

    def handle(self, host: "ToolPanelController", outcome: ToolOutcome) -> None:
        host.spawn(self._send_feedback(host), name=f"palette-feedback-{outcome.sequence}")

    async def _send_feedback(self, host: "ToolPanelController") -> None:
        await asyncio.sleep(self._delay_s)
        host.send_instruction(PALETTE_FEEDBACK_INSTRUCTIONS)


class ForeignWorkerEnquiryHandler(ToolHandler):
    """Forward the question to the prediction endpoint and relay its answer."""

    name = FOREIGN_WORKER_ENQUIRY
    initial_status = OutcomeStatus.PENDING

    def __init__(self, client: PredictionClient) -> None:
        self._client = client

    def handle(self, host: "ToolPanelController", outcome: ToolOutcome) -> None:
        payload = build_prediction_payload(
            outcome.arguments["question"],
            outcome.arguments["sessionId"],
        )
        host.log.append(API_REQUEST, payload)
        host.spawn(
            self._enquire(host, outcome, payload),
            name=f"prediction-{outcome.sequence}",
        )

    async def _enquire(
        self,
        host: "ToolPanelController",
        outcome: ToolOutcome,
        payload: dict[str, Any],
    ) -> None:
        try:
            body = await asyncio.to_thread(self._client.predict, payload)
        except PredictionError as exc:
            self._fail(host, outcome, str(exc))
            return
        except Exception as exc:  # noqa: BLE001 - the conversation must never stall
            self._fail(host, outcome, f"{type(exc).__name__}: {exc}")
            return

        text = body.get("text") if isinstance(body, dict) else None
        if not isinstance(text, str):
            self._fail(host, outcome, "Prediction response is missing a text field")
            return

        host.log.append(API_RESPONSE, body)
        host.settle_outcome(outcome, OutcomeStatus.RESOLVED, result=body)
        host.send_instruction(text)

    def _fail(self, host: "ToolPanelController", outcome: ToolOutcome, detail: str) -> None:
        log_warning("Prediction request failed: %s", detail)
        host.log.append(API_ERROR, {"error": detail})
        host.settle_outcome(outcome, OutcomeStatus.FAILED, error=detail)
        host.send_instruction(PREDICTION_APOLOGY)


def build_handlers(
    *,
    palette_delay_s: float,
    prediction_client: PredictionClient,
) -> dict[str, ToolHandler]:
    handlers: list[ToolHandler] = [
        ColorPaletteHandler(palette_delay_s),
        ForeignWorkerEnquiryHandler(prediction_client),
    ]
    return {handler.name: handler for handler in handlers}
