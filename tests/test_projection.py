"""Tests for the tool panel display projection."""

from __future__ import annotations

import io

from rich.console import Console

from toolpanel.log_recorder import LogRecorder
from toolpanel.models import FunctionCallRequest, OutcomeStatus, ToolOutcome
from toolpanel.projection import (
    IDLE_PROMPT,
    NOT_STARTED_MESSAGE,
    EnquiryView,
    PaletteView,
    PlaceholderView,
    Swatch,
    project,
    render,
    render_log,
)


def _outcome(name: str, arguments: dict, status: OutcomeStatus = OutcomeStatus.LOCAL, **kwargs) -> ToolOutcome:
    return ToolOutcome(
        request=FunctionCallRequest(name=name, arguments_json="{}", call_id="call_9"),
        arguments=arguments,
        sequence=1,
        status=status,
        **kwargs,
    )


def _render_text(renderable) -> str:
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def test_placeholders_for_inactive_and_idle_sessions() -> None:
    assert project(False, _outcome("display_color_palette", {})) == PlaceholderView(NOT_STARTED_MESSAGE)
    assert project(True, None) == PlaceholderView(IDLE_PROMPT)


def test_palette_renders_one_swatch_per_color_in_order() -> None:
    colors = ["#001", "#002", "#003", "#004", "#005"]
    view = project(True, _outcome("display_color_palette", {"theme": "ocean", "colors": colors}))

    assert isinstance(view, PaletteView)
    assert view.theme == "ocean"
    assert [swatch.color for swatch in view.swatches] == colors
    assert view.call_record["name"] == "display_color_palette"
    assert view.call_record["call_id"] == "call_9"

    text = _render_text(render(view))
    positions = [text.index(color) for color in colors]
    assert positions == sorted(positions)


def test_swatch_background_normalizes_hex() -> None:
    assert Swatch("#0aF").background == "#00aaff"
    assert Swatch("#123456").background == "#123456"
    assert Swatch("teal").background is None


def test_enquiry_card_tracks_resolution() -> None:
    pending = project(True, _outcome("foreign_worker_enquiry", {"question": "Q?", "sessionId": "s"}, OutcomeStatus.PENDING))
    assert isinstance(pending, EnquiryView)
    assert pending.pending is True
    assert "Waiting for an answer" in _render_text(render(pending))

    resolved = project(
        True,
        _outcome(
            "foreign_worker_enquiry",
            {"question": "Q?", "sessionId": "s"},
            OutcomeStatus.RESOLVED,
            result={"text": "Yes."},
        ),
    )
    assert resolved.pending is False
    assert resolved.answer == "Yes."


def test_unknown_tool_renders_nothing() -> None:
    view = project(True, _outcome("launch_rocket", {"target": "moon"}))

    assert view is None
    _render_text(render(view))


def test_log_table_keeps_stored_order() -> None:
    recorder = LogRecorder(clock=lambda: "t")
    recorder.append("API Request", {"question": "q"})
    recorder.append("API Response", {"text": "a"})

    text = _render_text(render_log(recorder.entries()))

    assert text.index("API Response") < text.index("API Request")
