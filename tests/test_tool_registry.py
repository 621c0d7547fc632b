"""Tests for tool descriptor conversion and result flattening."""
from types import SimpleNamespace

from mcp.types import EmbeddedResource, ImageContent, TextContent, TextResourceContents, Tool

from mcp_cli_client.tool_registry import ToolDescriptor, flatten_tool_output, to_chat_tool


def test_descriptor_from_mcp_tool():
    tool = Tool(
        name="add",
        description=None,
        inputSchema={"type": "object", "properties": {"a": {"type": "number"}}},
    )

    descriptor = ToolDescriptor.from_mcp(tool)

    assert descriptor.name == "add"
    assert descriptor.description == ""
    assert descriptor.input_schema["properties"] == {"a": {"type": "number"}}


def test_to_chat_tool_carries_properties_and_required(weather_tool):
    chat_tool = to_chat_tool(weather_tool)

    assert chat_tool == {
        "type": "function",
        "function": {
            "name": "get_weather",
            "description": "Current weather for a city",
            "parameters": {
                "type": "object",
                "properties": {"city": {"type": "string"}, "days": {"type": "integer"}},
                "required": ["city"],
            },
        },
    }


def test_to_chat_tool_without_schema():
    chat_tool = to_chat_tool(ToolDescriptor(name="ping"))

    assert chat_tool["function"]["parameters"] == {"type": "object", "properties": {}}


def test_flatten_mixed_items():
    items = [
        {"type": "text", "text": "a"},
        {"type": "resource", "resource": {"data": "b"}},
        {"type": "unknown"},
    ]

    assert flatten_tool_output(items) == "a\n\nb\n\n"


def test_flatten_mcp_content_models():
    items = [
        TextContent(type="text", text="hello"),
        EmbeddedResource(
            type="resource",
            resource=TextResourceContents(uri="file:///notes.txt", text="notes"),
        ),
        ImageContent(type="image", data="aGk=", mimeType="image/png"),
    ]

    assert flatten_tool_output(items) == "hello\n\nnotes\n\n"


def test_flatten_attribute_objects_and_missing_fields():
    items = [
        SimpleNamespace(type="text", text="x"),
        SimpleNamespace(type="resource", resource=SimpleNamespace()),
        SimpleNamespace(type="text", text=None),
    ]

    assert flatten_tool_output(items) == "x\n\n\n\n"


def test_flatten_empty_result():
    assert flatten_tool_output([]) == ""
