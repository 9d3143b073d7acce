"""Tool declarations advertised to the realtime session."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any, Iterable

from toolpanel.errors import ToolArgumentsError

DISPLAY_COLOR_PALETTE = "display_color_palette"
FOREIGN_WORKER_ENQUIRY = "foreign_worker_enquiry"

COLOR_PALETTE_DESCRIPTION = """
Call this function when a user asks for a color palette.
"""

FOREIGN_WORKER_DESCRIPTION = """
Call this function when a user asks about foreign worker requirements or employment passes.
"""


@dataclass(frozen=True)
class ToolDeclaration:
    """Declarative description of one invocable tool."""

    name: str
    description: str
    properties: dict[str, dict[str, Any]]
    required: tuple[str, ...] = field(default_factory=tuple)

    def to_session_tool(self) -> dict[str, Any]:
        return {
            "type": "function",
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "strict": True,
                "properties": json.loads(json.dumps(self.properties)),
                "required": list(self.required),
            },
        }

    def parse_arguments(self, arguments_json: str | None) -> dict[str, Any]:
        """Decode and validate a raw ``arguments`` string against this declaration."""

        try:
            args = json.loads(arguments_json or "")
        except (TypeError, json.JSONDecodeError) as exc:
            raise ToolArgumentsError(self.name, f"arguments are not valid JSON ({exc})") from exc
        if not isinstance(args, dict):
            raise ToolArgumentsError(self.name, "arguments must be a JSON object")

        missing = [key for key in self.required if key not in args]
        if missing:
            raise ToolArgumentsError(self.name, f"missing required fields: {', '.join(missing)}")
        unknown = sorted(set(args) - set(self.properties))
        if unknown:
            raise ToolArgumentsError(self.name, f"undeclared fields: {', '.join(unknown)}")

        for key, value in args.items():
            spec = self.properties[key]
            if not _matches_type(spec, value):
                raise ToolArgumentsError(
                    self.name,
                    f"field {key!r} expected {spec.get('type')}, got {type(value).__name__}",
                )
        return args


def _matches_type(spec: dict[str, Any], value: Any) -> bool:
    expected = spec.get("type")
    if expected == "string":
        return isinstance(value, str)
    if expected == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "array":
        if not isinstance(value, list):
            return False
        items = spec.get("items")
        return not items or all(_matches_type(items, item) for item in value)
    if expected == "object":
        return isinstance(value, dict)
    return True


class ToolCatalog:
    """Ordered, name-unique collection of tool declarations."""

    def __init__(self, declarations: Iterable[ToolDeclaration]) -> None:
        self._declarations: dict[str, ToolDeclaration] = {}
        for declaration in declarations:
            if declaration.name in self._declarations:
                raise ValueError(f"Duplicate tool name in catalog: {declaration.name}")
            self._declarations[declaration.name] = declaration

    def __contains__(self, name: object) -> bool:
        return name in self._declarations

    def __iter__(self):
        return iter(self._declarations.values())

    def __len__(self) -> int:
        return len(self._declarations)

    @property
    def names(self) -> list[str]:
        return list(self._declarations)

    def get(self, name: str) -> ToolDeclaration | None:
        return self._declarations.get(name)

    def session_tools(self) -> list[dict[str, Any]]:
        return [declaration.to_session_tool() for declaration in self]

    def registration_event(self) -> dict[str, Any]:
        """Return the ``session.update`` event that registers every tool."""

        return {
            "type": "session.update",
            "session": {
                "tools": self.session_tools(),
                "tool_choice": "auto",
            },
        }


color_palette_tool = ToolDeclaration(
    name=DISPLAY_COLOR_PALETTE,
    description=COLOR_PALETTE_DESCRIPTION,
    properties={
        "theme": {
            "type": "string",
            "description": "Description of the theme for the color scheme.",
        },
        "colors": {
            "type": "array",
            "description": "Array of five hex color codes based on the theme.",
            "items": {
                "type": "string",
                "description": "Hex color code",
            },
        },
    },
    required=("theme", "colors"),
)

foreign_worker_tool = ToolDeclaration(
    name=FOREIGN_WORKER_ENQUIRY,
    description=FOREIGN_WORKER_DESCRIPTION,
    properties={
        "question": {
            "type": "string",
            "description": "The question about foreign worker requirements",
        },
        "sessionId": {
            "type": "string",
            "description": "Session ID for the query",
        },
    },
    required=("question", "sessionId"),
)

default_catalog = ToolCatalog([color_palette_tool, foreign_worker_tool])
