"""Exception types raised by the tool panel."""

from __future__ import annotations


class ToolPanelError(Exception):
    """Base class for tool panel failures."""


class ToolArgumentsError(ToolPanelError):
    """Function call arguments failed to parse or validate."""

    def __init__(self, tool_name: str, detail: str) -> None:
        super().__init__(f"{tool_name}: {detail}")
        self.tool_name = tool_name
        self.detail = detail


class PredictionError(ToolPanelError):
    """The remote prediction endpoint could not produce an answer."""
