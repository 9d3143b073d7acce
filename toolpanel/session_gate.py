"""Once-per-session guard for tool catalog registration."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from toolpanel.core.logging import compact_tools, log_info
from toolpanel.catalog import ToolCatalog

SendClientEvent = Callable[[dict[str, Any]], None]


class SessionGate:
    """Send the catalog on the first ``session.created`` of a session, and never again."""

    def __init__(self, catalog: ToolCatalog, send_client_event: SendClientEvent) -> None:
        self._catalog = catalog
        self._send = send_client_event
        self._registered = False

    @property
    def registered(self) -> bool:
        return self._registered

    def check(self, oldest_event: Mapping[str, Any] | None) -> dict[str, Any] | None:
        """Register tools if ``oldest_event`` opens an unregistered session.

        Returns the registration event that was sent, or ``None`` for a no-op.
        """

        if self._registered or not oldest_event:
            return None
        if oldest_event.get("type") != "session.created":
            return None

        event = self._catalog.registration_event()
        self._send(event)
        self._registered = True
        log_info(
            "Registered tools: %s",
            compact_tools(event["session"]["tools"]),
            style="bold cyan",
        )
        return event

    def reset(self) -> None:
        self._registered = False
