"""Tests for replaying recorded session events from the command line."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from toolpanel.cli import parse_args, replay
from toolpanel.settings import ToolPanelSettings


def test_replay_emits_registration_and_palette_feedback(tmp_path: Path) -> None:
    events = [
        {"type": "session.created"},
        {
            "type": "response.done",
            "response": {
                "output": [
                    {
                        "type": "function_call",
                        "name": "display_color_palette",
                        "arguments": json.dumps(
                            {"theme": "forest", "colors": ["#0b3d0b", "#145214", "#1e6b1e", "#2a8a2a", "#39a839"]}
                        ),
                    }
                ]
            },
        },
    ]
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join(json.dumps(event) for event in events) + "\n\n", encoding="utf-8")

    transport = asyncio.run(replay(path, ToolPanelSettings(palette_feedback_delay_ms=0)))

    assert [event["type"] for event in transport.sent] == ["session.update", "response.create"]


def test_parse_args_reads_replay_path() -> None:
    args = parse_args(["--replay", "events.jsonl"])

    assert args.replay == Path("events.jsonl")
    assert args.diagnostics is False
