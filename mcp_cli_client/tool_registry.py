"""Converts MCP tool listings and results into chat-model terms."""
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

TOOL_OUTPUT_SEPARATOR = "\n\n"


class ToolDescriptor(BaseModel):
    """A tool advertised by the MCP server."""

    name: str
    description: str = ""
    input_schema: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_mcp(cls, tool: Any) -> "ToolDescriptor":
        """Build a descriptor from an MCP Tool object."""
        return cls(
            name=tool.name,
            description=tool.description or "",
            input_schema=dict(tool.inputSchema or {})
        )


def to_chat_tool(descriptor: ToolDescriptor) -> Dict[str, Any]:
    """
    Convert a tool descriptor to the function-calling format.

    Args:
        descriptor: Tool as advertised by the MCP server

    Returns:
        Tool definition for the chat completions API
    """
    parameters: Dict[str, Any] = {
        "type": "object",
        "properties": descriptor.input_schema.get("properties") or {},
    }
    required = descriptor.input_schema.get("required")
    if required:
        parameters["required"] = list(required)

    return {
        "type": "function",
        "function": {
            "name": descriptor.name,
            "description": descriptor.description,
            "parameters": parameters
        }
    }


def _field(item: Any, name: str) -> Optional[Any]:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _render_item(item: Any) -> str:
    kind = _field(item, "type")
    if kind == "text":
        value = _field(item, "text")
    elif kind == "resource":
        resource = _field(item, "resource")
        value = None
        for name in ("data", "text", "blob"):
            value = _field(resource, name) if resource is not None else None
            if value is not None:
                break
    else:
        value = None
    return "" if value is None else str(value)


def flatten_tool_output(items: Iterable[Any]) -> str:
    """
    Reduce a tool result's content items to a single text blob.

    Text items are used verbatim, resource items contribute their embedded
    data and any other kind contributes an empty string. Items are joined
    with a blank line.
    """
    return TOOL_OUTPUT_SEPARATOR.join(_render_item(item) for item in items)


def tool_names(descriptors: List[ToolDescriptor]) -> List[str]:
    return [d.name for d in descriptors]
