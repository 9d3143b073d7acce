"""Display projection of the current tool outcome."""

from __future__ import annotations

from dataclasses import dataclass
import json
import re
from typing import Any, Iterable, Union

from rich.console import Group, RenderableType
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from toolpanel.catalog import DISPLAY_COLOR_PALETTE, FOREIGN_WORKER_ENQUIRY
from toolpanel.log_recorder import LogEntry
from toolpanel.models import OutcomeStatus, ToolOutcome

PANEL_TITLE = "Tools Panel"
NOT_STARTED_MESSAGE = "Start the session to use these tools..."
IDLE_PROMPT = "Ask about color palettes or foreign worker requirements..."

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class PlaceholderView:
    message: str


@dataclass(frozen=True)
class Swatch:
    color: str

    @property
    def background(self) -> str | None:
        """Six-digit hex form usable as a terminal background, if the color parses."""

        if not _HEX_COLOR.match(self.color):
            return None
        digits = self.color[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return f"#{digits.lower()}"


@dataclass(frozen=True)
class PaletteView:
    theme: str
    swatches: tuple[Swatch, ...]
    call_record: dict[str, Any]


@dataclass(frozen=True)
class EnquiryView:
    question: str
    status: OutcomeStatus
    call_record: dict[str, Any]
    answer: str | None = None
    error: str | None = None

    @property
    def pending(self) -> bool:
        return self.status is OutcomeStatus.PENDING


View = Union[PlaceholderView, PaletteView, EnquiryView]


def project(session_active: bool, outcome: ToolOutcome | None) -> View | None:
    """Map session state to what the panel shows; ``None`` means show nothing."""

    if not session_active:
        return PlaceholderView(NOT_STARTED_MESSAGE)
    if outcome is None:
        return PlaceholderView(IDLE_PROMPT)

    record = outcome.request.to_record()
    if outcome.name == DISPLAY_COLOR_PALETTE:
        colors = outcome.arguments.get("colors") or []
        return PaletteView(
            theme=str(outcome.arguments.get("theme", "")),
            swatches=tuple(Swatch(str(color)) for color in colors),
            call_record=record,
        )
    if outcome.name == FOREIGN_WORKER_ENQUIRY:
        answer = None
        if outcome.status is OutcomeStatus.RESOLVED and outcome.result:
            answer = outcome.result.get("text")
        return EnquiryView(
            question=str(outcome.arguments.get("question", "")),
            status=outcome.status,
            call_record=record,
            answer=answer,
            error=outcome.error,
        )
    return None


def _record_json(record: dict[str, Any]) -> JSON:
    return JSON(json.dumps(record, ensure_ascii=False))


def render(view: View | None) -> RenderableType:
    """Convert a projected view into a rich renderable."""

    if view is None:
        body: RenderableType = Text("")
    elif isinstance(view, PlaceholderView):
        body = Text(view.message)
    elif isinstance(view, PaletteView):
        blocks: list[RenderableType] = [Text(f"Theme: {view.theme}")]
        for swatch in view.swatches:
            background = swatch.background
            style = f"bold black on {background}" if background else "bold"
            blocks.append(Text(f" {swatch.color:^20} ", style=style))
        blocks.append(_record_json(view.call_record))
        body = Group(*blocks)
    else:
        lines: list[RenderableType] = [
            Text("Question:", style="bold"),
            Text(view.question),
        ]
        if view.pending:
            lines.append(Text("Waiting for an answer...", style="dim italic"))
        elif view.answer is not None:
            lines.append(Text(view.answer, style="green"))
        elif view.error is not None:
            lines.append(Text(view.error, style="red"))
        lines.append(_record_json(view.call_record))
        body = Group(*lines)
    return Panel(body, title=PANEL_TITLE)


def render_log(entries: Iterable[LogEntry]) -> Table:
    """Tabulate log entries in the order given (the recorder stores newest first)."""

    table = Table(title="Event Log")
    table.add_column("Time", no_wrap=True)
    table.add_column("Category", style="bold")
    table.add_column("Payload")
    for entry in entries:
        table.add_row(
            entry.timestamp,
            entry.category,
            json.dumps(entry.payload, ensure_ascii=False, default=str),
        )
    return table
