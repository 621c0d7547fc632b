"""Typed tool-call arguments and schema checks before dispatch."""
import json
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import JsonValue, TypeAdapter, ValidationError

from .errors import ToolArgumentError

ToolArguments = Dict[str, JsonValue]

_arguments_adapter = TypeAdapter(ToolArguments)

# JSON-schema type name -> check on a decoded JSON value
_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, list),
    "null": lambda v: v is None,
}


def parse_arguments(
    raw: Union[str, Mapping[str, Any], None],
    tool_name: Optional[str] = None
) -> ToolArguments:
    """
    Decode the arguments of a tool call.

    Args:
        raw: JSON object text as sent by the chat API, an already decoded
            mapping, or None/"" for a call without arguments
        tool_name: Tool the arguments belong to (for error messages)

    Returns:
        Mapping of parameter name to JSON value
    """
    if raw is None or raw == "":
        return {}

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ToolArgumentError(
                f"Arguments for '{tool_name}' are not valid JSON: {e}",
                tool_name=tool_name
            ) from e

    try:
        return _arguments_adapter.validate_python(raw)
    except ValidationError as e:
        raise ToolArgumentError(
            f"Arguments for '{tool_name}' must be a JSON object: {e}",
            tool_name=tool_name
        ) from e


def validate_arguments(
    tool_name: str,
    arguments: ToolArguments,
    schema: Optional[Mapping[str, Any]]
) -> None:
    """
    Check arguments against a tool's declared input schema.

    Only required parameters and declared types are enforced; parameters
    the schema does not mention are passed through to the server.
    """
    if not schema:
        return

    missing = [name for name in schema.get("required") or [] if name not in arguments]
    if missing:
        raise ToolArgumentError(
            f"Missing required argument(s) for '{tool_name}': {', '.join(missing)}",
            tool_name=tool_name
        )

    properties = schema.get("properties") or {}
    for name, value in arguments.items():
        declared = properties.get(name)
        if not isinstance(declared, Mapping) or "type" not in declared:
            continue

        types = declared["type"]
        if isinstance(types, str):
            types = [types]
        checks = [_TYPE_CHECKS[t] for t in types if t in _TYPE_CHECKS]
        if checks and not any(check(value) for check in checks):
            raise ToolArgumentError(
                f"Argument '{name}' for '{tool_name}' should be {' or '.join(types)}, "
                f"got {type(value).__name__}",
                tool_name=tool_name
            )
