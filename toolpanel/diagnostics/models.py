"""Result records produced by the readiness checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DiagnosticStatus(str, Enum):
    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"


@dataclass(frozen=True)
class DiagnosticResult:
    """Outcome of one readiness check.

    ``facts`` carries what the check observed (tool names, endpoint, config
    directory) so the report shows the setup that was actually checked.
    """

    name: str
    status: DiagnosticStatus
    details: str
    facts: dict[str, Any] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.status is DiagnosticStatus.FAIL

    def summary_lines(self) -> list[str]:
        lines = [f"[{self.status.value}] {self.name}: {self.details}"]
        for key, value in self.facts.items():
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(item) for item in value)
            lines.append(f"    {key}: {value}")
        return lines
