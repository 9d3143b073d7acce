"""Command-line entry point for the realtime tool panel."""

from __future__ import annotations

import argparse
import asyncio
import json
import os
from pathlib import Path
import sys
from typing import Any, Iterator

import websockets

from toolpanel.config import ConfigController
from toolpanel.core.logging import console, enable_file_logging, log_info, logger, set_level
from toolpanel import EventFeed, ToolPanelController, ToolPanelSettings, render, render_log
from toolpanel.transport import RecordingTransport, WebsocketTransport


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Raw command-line arguments.

    Returns:
        Parsed arguments namespace.
    """

    parser = argparse.ArgumentParser(
        description="Run the realtime tool panel against a websocket or a recorded event file."
    )
    parser.add_argument(
        "--replay",
        type=Path,
        help="JSONL file of session events to feed through the panel, oldest first.",
    )
    parser.add_argument("--url", type=str, help="Realtime websocket URL (defaults to config).")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file.")
    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Run diagnostics probes and exit.",
    )
    return parser.parse_args(argv)


def iter_replay_events(path: Path) -> Iterator[dict[str, Any]]:
    with path.open("r", encoding="utf-8") as file:
        for line_number, line in enumerate(file, start=1):
            line = line.strip()
            if not line:
                continue
            event = json.loads(line)
            if not isinstance(event, dict):
                raise ValueError(f"{path}:{line_number}: event must be a JSON object")
            yield event


async def replay(path: Path, settings: ToolPanelSettings) -> RecordingTransport:
    """Push recorded events through a fresh controller and wait for follow-ups."""

    transport = RecordingTransport()
    feed = EventFeed()
    controller = ToolPanelController(transport.send_client_event, settings=settings)
    controller.attach(feed)
    for event in iter_replay_events(path):
        feed.push(event)
        await asyncio.sleep(0)
    await controller.wait_pending()

    for event in transport.sent:
        console.print_json(json.dumps(event))
    console.print(render(controller.view()))
    console.print(render_log(controller.log.entries()))
    return transport


async def run_live(url: str, settings: ToolPanelSettings) -> None:
    """Attach the panel to a realtime websocket until the connection closes."""

    feed = EventFeed()
    transport = WebsocketTransport(feed)
    controller = ToolPanelController(transport.send_client_event, settings=settings)
    controller.attach(feed)
    controller.add_state_listener(lambda panel: console.print(render(panel.view())))

    headers = {}
    api_key = os.getenv("OPENAI_API_KEY")
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"

    async with websockets.connect(
        url,
        additional_headers=headers,
        ping_interval=30,
        ping_timeout=10,
    ) as websocket:
        log_info("✅ Connected to the server.", style="bold green")
        try:
            await transport.run(websocket)
        finally:
            controller.deactivate()
            await controller.wait_pending()


def main(argv: list[str] | None = None) -> int:
    """Application entry point.

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        Process exit code.
    """

    if argv is None:
        argv = sys.argv[1:]

    args = parse_args(argv)
    if args.diagnostics:
        from toolpanel.diagnostics.run import main as diagnostics_main

        return diagnostics_main([])

    config = ConfigController.get_instance().get_config()
    set_level(config.get("logging_level", "INFO"))
    if args.log_file:
        enable_file_logging(args.log_file)
    settings = ToolPanelSettings.from_config()

    try:
        if args.replay:
            asyncio.run(replay(args.replay, settings))
        else:
            asyncio.run(run_live(args.url or settings.realtime_url, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
