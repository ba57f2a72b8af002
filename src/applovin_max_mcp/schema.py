"""Declarative tool descriptors shared by the MCP listing and the query assembler."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from mcp.types import Tool


class ParamKind(Enum):
    """JSON-schema type of a tool parameter."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING_ARRAY = "array"


@dataclass(frozen=True)
class ParameterSpec:
    """A single tool parameter and how it is emitted into the MAX query."""

    name: str
    kind: ParamKind
    description: str
    required: bool = False
    default: Any = None
    enum: Optional[Tuple[str, ...]] = None
    item_enum: Optional[Tuple[str, ...]] = None
    lowercase: bool = True
    in_query: bool = True

    def to_json_schema(self) -> Dict[str, Any]:
        """
        Render the JSON-schema property advertised to MCP clients.

        Returns:
            Property dictionary for the tool inputSchema
        """
        schema: Dict[str, Any] = {
            "type": self.kind.value,
            "description": self.description,
        }
        if self.kind is ParamKind.STRING_ARRAY:
            items: Dict[str, Any] = {"type": "string"}
            if self.item_enum:
                items["enum"] = list(self.item_enum)
            schema["items"] = items
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = list(self.default) if isinstance(self.default, tuple) else self.default
        return schema


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and ordered parameters of one tool."""

    name: str
    description: str
    parameters: Tuple[ParameterSpec, ...]

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {p.name: p.to_json_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )


SORT_DIRECTIONS = ("ASC", "DESC")
REPORT_FORMATS = ("json", "csv")


def string_param(name: str, description: str, **kwargs: Any) -> ParameterSpec:
    return ParameterSpec(name=name, kind=ParamKind.STRING, description=description, **kwargs)


def sort_param(name: str, description: str) -> ParameterSpec:
    return ParameterSpec(
        name=name,
        kind=ParamKind.STRING,
        description=description,
        enum=SORT_DIRECTIONS,
    )


def pagination_params(limit_description: str, offset_description: str) -> Tuple[ParameterSpec, ...]:
    return (
        ParameterSpec(name="limit", kind=ParamKind.NUMBER, description=limit_description),
        ParameterSpec(name="offset", kind=ParamKind.NUMBER, description=offset_description),
    )


def not_zero_param(description: str) -> ParameterSpec:
    return ParameterSpec(name="not_zero", kind=ParamKind.BOOLEAN, description=description)


def columns_param(description: str, items: Sequence[str], default: Sequence[str]) -> ParameterSpec:
    return ParameterSpec(
        name="columns",
        kind=ParamKind.STRING_ARRAY,
        description=description,
        required=True,
        default=tuple(default),
        item_enum=tuple(items),
    )
