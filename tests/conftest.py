"""Shared fakes for the chat client tests."""
import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from mcp_cli_client import ChatInterface, ClientConfig
from mcp_cli_client.tool_registry import ToolDescriptor


def make_message(content: Optional[str] = None, tool_calls: Optional[List[Any]] = None):
    """Assistant message shaped like the OpenAI SDK's ChatCompletionMessage."""
    return SimpleNamespace(content=content, tool_calls=tool_calls)


def make_tool_call(name: str, arguments: Any = None):
    if isinstance(arguments, dict):
        arguments = json.dumps(arguments)
    return SimpleNamespace(
        id=f"call_{name}",
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments)
    )


def text_item(text: str):
    return {"type": "text", "text": text}


class FakeChatClient:
    """Returns queued messages and records what each call saw."""

    def __init__(self, replies: List[Any]):
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    async def chat(self, messages, tools=None, tool_choice="auto"):
        self.calls.append({"messages": messages, "tools": tools})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self):
        self.closed = True


class FakeMCPClient:
    """Serves canned tool results and records calls in order."""

    def __init__(self, descriptors=None, results=None):
        self.descriptors = descriptors or []
        self.results = results or {}
        self.calls: List[Any] = []
        self.disconnects = 0

    async def connect(self, script_path):
        return self.descriptors

    async def call_tool(self, tool_name, arguments):
        self.calls.append((tool_name, arguments))
        result = self.results[tool_name]
        if isinstance(result, Exception):
            raise result
        return result

    async def disconnect(self):
        self.disconnects += 1


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(model="test-model", ollama_url="http://ollama.test:11434")


@pytest.fixture
def weather_tool() -> ToolDescriptor:
    return ToolDescriptor(
        name="get_weather",
        description="Current weather for a city",
        input_schema={
            "type": "object",
            "properties": {"city": {"type": "string"}, "days": {"type": "integer"}},
            "required": ["city"],
        }
    )


@pytest.fixture
def make_interface(config):
    def _make(replies, descriptors=None, results=None, **kwargs):
        chat = FakeChatClient(replies)
        mcp = FakeMCPClient(descriptors, results)
        interface = ChatInterface(config, mcp_client=mcp, chat_client=chat, **kwargs)
        return interface, chat, mcp
    return _make
