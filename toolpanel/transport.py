"""Transports that carry client events to and from a realtime session."""

from __future__ import annotations

import asyncio
import contextlib
import json
from typing import Any

from websockets.exceptions import ConnectionClosed

from toolpanel.core.logging import log_warning, log_ws_event, logger
from toolpanel.event_feed import EventFeed


class RecordingTransport:
    """In-memory sink that keeps every outbound event, in send order."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []

    def send_client_event(self, event: dict[str, Any]) -> None:
        self.sent.append(event)

    def sent_of_type(self, event_type: str) -> list[dict[str, Any]]:
        return [event for event in self.sent if event.get("type") == event_type]


class WebsocketTransport:
    """Pump an open websocket: inbound frames feed ``feed``, outbound events are queued."""

    def __init__(self, feed: EventFeed) -> None:
        self.feed = feed
        self._outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    def send_client_event(self, event: dict[str, Any]) -> None:
        self._outbox.put_nowait(event)

    async def run(self, websocket: Any) -> None:
        """Read and write until the connection closes."""

        writer = asyncio.create_task(self._write_loop(websocket))
        try:
            await self._read_loop(websocket)
        finally:
            writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await writer

    async def _read_loop(self, websocket: Any) -> None:
        while True:
            try:
                message = await websocket.recv()
            except ConnectionClosed:
                log_warning("⚠️ WebSocket connection lost.")
                return
            try:
                event = json.loads(message)
            except json.JSONDecodeError:
                logger.warning("Skipping non-JSON frame from realtime session.")
                continue
            if not isinstance(event, dict):
                continue
            log_ws_event("Incoming", event)
            self.feed.push(event)

    async def _write_loop(self, websocket: Any) -> None:
        while True:
            event = await self._outbox.get()
            try:
                await websocket.send(json.dumps(event))
            except ConnectionClosed:
                log_warning("Dropping outbound %s: connection closed.", event.get("type"))
                return
