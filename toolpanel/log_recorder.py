"""Capacity-bounded ring log of tool panel activity."""

from __future__ import annotations

from collections import deque
import copy
from dataclasses import dataclass
from datetime import datetime, timezone
import json
from typing import Any, Callable, Deque

from toolpanel.core.logging import log_panel_entry

DEFAULT_LOG_CAPACITY = 50

FUNCTION_CALL = "Function Call"
ARGUMENT_ERROR = "Argument Error"
API_REQUEST = "API Request"
API_RESPONSE = "API Response"
API_ERROR = "API Error"
TOOLS_REGISTERED = "Tools Registered"
SESSION_RESET = "Session Reset"


@dataclass(frozen=True)
class LogEntry:
    """One diagnostic record; never modified after it is appended."""

    timestamp: str
    category: str
    payload: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "category": self.category,
            "payload": copy.deepcopy(self.payload),
        }


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class LogRecorder:
    """Newest-first buffer that evicts its oldest entry once full."""

    def __init__(
        self,
        capacity: int = DEFAULT_LOG_CAPACITY,
        *,
        clock: Callable[[], str] = _utc_now_iso,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._clock = clock
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, category: str, payload: Any = None) -> LogEntry:
        entry = LogEntry(
            timestamp=self._clock(),
            category=category,
            payload=copy.deepcopy(payload),
        )
        # appendleft on a bounded deque drops the rightmost (oldest) entry.
        self._entries.appendleft(entry)
        log_panel_entry(category, payload)
        return entry

    def entries(self) -> list[LogEntry]:
        """Return entries in stored order, newest first."""

        return list(self._entries)

    def latest(self) -> LogEntry | None:
        return self._entries[0] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def to_jsonl(self) -> str:
        return "\n".join(
            json.dumps(entry.to_dict(), ensure_ascii=False, default=str)
            for entry in self._entries
        )
