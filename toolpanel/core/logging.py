"""Logging utilities for realtime events and tool panel activity."""

from __future__ import annotations

import atexit
import logging
import logging.handlers
from pathlib import Path
import queue
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

console = Console()


def setup_logging() -> logging.Logger:
    logger = logging.getLogger("tool_panel")
    logger.setLevel(logging.INFO)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, console=console)
        formatter = logging.Formatter("%(message)s", datefmt="[%X]")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


logger = setup_logging()

_queue_listener: logging.handlers.QueueListener | None = None
_queue_handlers: list[logging.Handler] = []
_file_log_path: Path | None = None
_atexit_registered = False


def set_level(level_name: str) -> None:
    """Apply a level name such as ``"DEBUG"`` to the tool panel logger."""

    logger.setLevel(logging._nameToLevel.get((level_name or "").upper(), logging.INFO))


def _shutdown_file_logging() -> None:
    global _queue_listener

    if _queue_listener is not None:
        _queue_listener.stop()
        _queue_listener = None


def _remove_queue_handlers() -> None:
    for handler in _queue_handlers:
        for target_logger in (logging.getLogger(), logger):
            if handler in target_logger.handlers:
                target_logger.removeHandler(handler)
    _queue_handlers.clear()


def enable_file_logging(log_path: Path) -> None:
    """Enable background file logging to the supplied log path."""

    global _queue_listener, _file_log_path, _atexit_registered

    log_path = log_path.expanduser()
    if _file_log_path == log_path and _queue_listener is not None:
        return

    if _queue_listener is not None:
        _queue_listener.stop()
        _queue_listener = None

    _remove_queue_handlers()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    file_handler.setFormatter(formatter)

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    queue_handler = logging.handlers.QueueHandler(log_queue)
    queue_handler.setLevel(logging.INFO)

    root_logger = logging.getLogger()
    root_logger.addHandler(queue_handler)
    logger.addHandler(queue_handler)
    _queue_handlers.append(queue_handler)

    _queue_listener = logging.handlers.QueueListener(
        log_queue,
        file_handler,
        respect_handler_level=True,
    )
    _queue_listener.start()

    if getattr(_queue_listener, "_thread", None) is not None:
        _queue_listener._thread.daemon = True

    _file_log_path = log_path

    if not _atexit_registered:
        atexit.register(_shutdown_file_logging)
        _atexit_registered = True


def _format_text(message: str, style: str) -> Text:
    return Text(message, style=style)


def log_ws_event(direction: str, event: dict[str, Any]) -> None:
    event_type = event.get("type", "Unknown")
    spammy = {
        "response.output_audio.delta",
        "response.output_audio_transcript.delta",
        "response.audio.delta",
        "response.audio_transcript.delta",
        "response.function_call_arguments.delta",
    }

    if event_type in spammy:
        return

    event_emojis = {
        "session.update": "🛠️",
        "session.created": "🔌",
        "session.updated": "🔄",
        "input_audio_buffer.speech_started": "🗣️",
        "input_audio_buffer.speech_stopped": "🤫",
        "conversation.item.create": "📝",
        "response.create": "➡️",
        "response.created": "📝",
        "response.output_item.added": "➕",
        "response.output_item.done": "✅",
        "response.done": "✔️ ",
        "response.function_call_arguments.done": "📥",
        "rate_limits.updated": "⏳",
        "error": "❌",
    }
    emoji = event_emojis.get(event_type, "❓")
    icon = "⬆️ - Out" if direction == "Outgoing" else "⬇️ - In"
    style = "bold cyan" if direction == "Outgoing" else "bold green"
    logger.info(_format_text(f"{emoji} {icon} {event_type}", style=style))


def log_tool_call(function_name: str, args: Any) -> None:
    logger.info(_format_text(f"🛠️ Calling function: {function_name} with args: {args}", "bold magenta"))


def log_panel_entry(category: str, payload: Any) -> None:
    logger.info(_format_text(f"📋 {category}: {payload}", "bold yellow"))


def log_error(message: str, *args: Any, exc_info: Any = None) -> None:
    logger.error(
        _format_text(message % args if args else message, style="bold red"),
        exc_info=exc_info,
    )


def log_info(message: str, *args: Any, style: str = "bold white") -> None:
    logger.info(_format_text(message % args if args else message, style=style))


def log_warning(message: str, *args: Any) -> None:
    logger.warning(_format_text(message % args if args else message, style="bold yellow"))


def compact_tools(tools: Any) -> list[dict[str, Any]]:
    """Summarize tool declarations for log output."""

    if not isinstance(tools, list):
        return []
    compact: list[dict[str, Any]] = []
    for tool in tools:
        if not isinstance(tool, dict):
            continue
        params = ((tool.get("parameters") or {}).get("properties") or {})
        required = (tool.get("parameters") or {}).get("required") or []
        compact.append(
            {
                "name": tool.get("name"),
                "type": tool.get("type"),
                "required": required,
                "params": sorted(params.keys()),
            }
        )
    return compact
