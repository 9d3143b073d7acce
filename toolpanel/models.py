"""Data models for function call requests and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


@dataclass(frozen=True)
class FunctionCallRequest:
    """A ``function_call`` entry lifted from a ``response.done`` output list."""

    name: str
    arguments_json: str
    call_id: str | None = None

    @classmethod
    def from_output_item(cls, item: Mapping[str, Any]) -> "FunctionCallRequest":
        arguments = item.get("arguments")
        return cls(
            name=str(item.get("name") or ""),
            arguments_json=arguments if isinstance(arguments, str) else "",
            call_id=item.get("call_id"),
        )

    def to_record(self) -> dict[str, Any]:
        """Return the raw call record shown alongside rendered results."""

        record: dict[str, Any] = {
            "type": "function_call",
            "name": self.name,
            "arguments": self.arguments_json,
        }
        if self.call_id is not None:
            record["call_id"] = self.call_id
        return record


class OutcomeStatus(str, Enum):
    """Resolution state of the current tool call."""

    LOCAL = "local"
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True)
class ToolOutcome:
    """The current tool call and how far it has resolved."""

    request: FunctionCallRequest
    arguments: dict[str, Any]
    sequence: int
    status: OutcomeStatus
    result: dict[str, Any] | None = None
    error: str | None = None

    @property
    def name(self) -> str:
        return self.request.name
