"""Realtime tool panel: tool registration, dispatch and diagnostic logging."""

from toolpanel.catalog import ToolCatalog, ToolDeclaration, default_catalog
from toolpanel.controller import ToolPanelController
from toolpanel.event_feed import EventFeed
from toolpanel.log_recorder import LogEntry, LogRecorder
from toolpanel.models import FunctionCallRequest, OutcomeStatus, ToolOutcome
from toolpanel.projection import project, render, render_log
from toolpanel.settings import ToolPanelSettings

__all__ = [
    "EventFeed",
    "FunctionCallRequest",
    "LogEntry",
    "LogRecorder",
    "OutcomeStatus",
    "ToolCatalog",
    "ToolDeclaration",
    "ToolOutcome",
    "ToolPanelController",
    "ToolPanelSettings",
    "default_catalog",
    "project",
    "render",
    "render_log",
]
