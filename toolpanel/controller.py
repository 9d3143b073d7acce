"""Session-scoped controller that routes realtime function calls to tool handlers."""

from __future__ import annotations

import asyncio
from dataclasses import replace
import itertools
import logging
from typing import Any, Callable, Coroutine, Mapping, Sequence

from toolpanel.core.logging import log_error, log_tool_call, log_warning, log_ws_event
from toolpanel.catalog import ToolCatalog, default_catalog
from toolpanel.errors import ToolArgumentsError
from toolpanel.event_feed import EventFeed, SessionEvent
from toolpanel.handlers import ToolHandler, build_handlers
from toolpanel.log_recorder import (
    ARGUMENT_ERROR,
    FUNCTION_CALL,
    SESSION_RESET,
    TOOLS_REGISTERED,
    LogRecorder,
)
from toolpanel.models import FunctionCallRequest, OutcomeStatus, ToolOutcome
from toolpanel.prediction_client import PredictionClient
from toolpanel.projection import View, project
from toolpanel.session_gate import SessionGate
from toolpanel.settings import ToolPanelSettings

LOGGER = logging.getLogger(__name__)

SendClientEvent = Callable[[dict[str, Any]], None]
StateListener = Callable[["ToolPanelController"], None]


class ToolPanelController:
    """Owns the registration flag, diagnostic log and current tool outcome for one session.

    Feed updates arrive through :meth:`on_events`. Tool handlers schedule their
    follow-up work as asyncio tasks, so dispatch must run inside an event loop.
    """

    def __init__(
        self,
        send_client_event: SendClientEvent,
        *,
        settings: ToolPanelSettings | None = None,
        catalog: ToolCatalog | None = None,
        handlers: Mapping[str, ToolHandler] | None = None,
        prediction_client: PredictionClient | None = None,
    ) -> None:
        self.settings = settings or ToolPanelSettings()
        self.catalog = default_catalog if catalog is None else catalog
        self._send = send_client_event
        if handlers is None:
            client = prediction_client or PredictionClient(
                self.settings.prediction_endpoint,
                timeout_s=self.settings.prediction_timeout_s,
            )
            handlers = build_handlers(
                palette_delay_s=self.settings.palette_feedback_delay_s,
                prediction_client=client,
            )
        self._handlers = dict(handlers)
        self.log = LogRecorder(self.settings.log_capacity)
        self._gate = SessionGate(self.catalog, self._emit)
        self.session_active = True
        self.current_outcome: ToolOutcome | None = None
        self._sequence = itertools.count(1)
        self._last_processed: SessionEvent | None = None
        self._pending: set[asyncio.Task[Any]] = set()
        self._state_listeners: list[StateListener] = []

    @property
    def registered(self) -> bool:
        return self._gate.registered

    @property
    def pending_tasks(self) -> int:
        return len(self._pending)

    def attach(self, feed: EventFeed) -> Callable[[], None]:
        """Subscribe to ``feed``; returns the unsubscribe callable."""

        return feed.subscribe(self.on_events)

    def add_state_listener(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def on_events(self, events: Sequence[SessionEvent]) -> None:
        """Handle one feed update; ``events`` is ordered newest-first."""

        if not self.session_active or not events:
            return

        registration = self._gate.check(events[-1])
        if registration is not None:
            self.log.append(TOOLS_REGISTERED, {"tools": self.catalog.names})

        newest = events[0]
        if newest is self._last_processed:
            return
        self._last_processed = newest
        self._process_output(newest)

    def _process_output(self, event: SessionEvent) -> None:
        if event.get("type") != "response.done":
            return
        response = event.get("response")
        output = response.get("output") if isinstance(response, Mapping) else None
        if not isinstance(output, list):
            if output is not None:
                log_warning("Ignoring response.done with non-list output (%s).", type(output).__name__)
            return
        for item in output:
            if not isinstance(item, Mapping) or item.get("type") != "function_call":
                continue
            request = FunctionCallRequest.from_output_item(item)
            try:
                self.dispatch(request)
            except Exception:  # noqa: BLE001 - one bad call must not stop its siblings
                LOGGER.exception("Dispatch failed for %s", request.name)

    def dispatch(self, request: FunctionCallRequest) -> ToolOutcome | None:
        """Log, record and route one function call; returns the new outcome."""

        handler = self._handlers.get(request.name)
        declaration = self.catalog.get(request.name)
        if handler is None or declaration is None:
            log_warning("Ignoring function call to unknown tool %r.", request.name)
            return None

        try:
            arguments = declaration.parse_arguments(request.arguments_json)
        except ToolArgumentsError as exc:
            log_warning("Rejected arguments for %s: %s", request.name, exc.detail)
            self.log.append(
                ARGUMENT_ERROR,
                {
                    "name": request.name,
                    "arguments": request.arguments_json,
                    "error": exc.detail,
                },
            )
            return None

        log_tool_call(request.name, arguments)
        self.log.append(FUNCTION_CALL, {"name": request.name, "arguments": arguments})
        outcome = ToolOutcome(
            request=request,
            arguments=arguments,
            sequence=next(self._sequence),
            status=handler.initial_status,
        )
        self._set_outcome(outcome)
        handler.handle(self, outcome)
        return outcome

    def send_instruction(self, instructions: str) -> None:
        self._emit(
            {
                "type": "response.create",
                "response": {"instructions": instructions},
            }
        )

    def settle_outcome(
        self,
        outcome: ToolOutcome,
        status: OutcomeStatus,
        *,
        result: dict[str, Any] | None = None,
        error: str | None = None,
    ) -> bool:
        """Record a late resolution if ``outcome`` is still current."""

        current = self.current_outcome
        if current is None or current.sequence != outcome.sequence:
            LOGGER.debug("Dropping stale %s result for call #%s.", outcome.name, outcome.sequence)
            return False
        self._set_outcome(replace(current, status=status, result=result, error=error))
        return True

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str | None = None) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_error("Background task %s failed", task.get_name(), exc_info=exc)

    async def wait_pending(self) -> None:
        """Wait until every deferred instruction and remote call has finished."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def deactivate(self) -> None:
        """End the session: clear flag, outcome and log, then record the reset."""

        self.session_active = False
        self._gate.reset()
        self.current_outcome = None
        self._last_processed = None
        if self.settings.cancel_pending_on_reset:
            for task in list(self._pending):
                task.cancel()
        self.log.clear()
        self.log.append(SESSION_RESET, None)
        self._notify()

    def activate(self) -> None:
        """Start a new session on this controller; the caller supplies a fresh feed."""

        self.session_active = True
        self._last_processed = None
        self._notify()

    def view(self) -> View | None:
        return project(self.session_active, self.current_outcome)

    def _set_outcome(self, outcome: ToolOutcome | None) -> None:
        self.current_outcome = outcome
        self._notify()

    def _emit(self, event: dict[str, Any]) -> None:
        log_ws_event("Outgoing", event)
        self._send(event)

    def _notify(self) -> None:
        for listener in list(self._state_listeners):
            try:
                listener(self)
            except Exception:  # noqa: BLE001 - display listeners are best effort
                LOGGER.exception("State listener failed")
