"""Chat client that lets a local Ollama model call tools on an MCP server."""

from .config import ClientConfig
from .errors import (
    ChatInvocationFailure,
    ConnectionFailure,
    MCPClientError,
    ToolArgumentError,
    ToolInvocationFailure,
    UnsupportedScriptType,
)
from .mcp_client import MCPClient
from .openai_client import ChatClient
from .conversation import Conversation, HistoryMode
from .chat_interface import ChatInterface, LineReader

__all__ = [
    "ClientConfig",
    "MCPClient",
    "ChatClient",
    "Conversation",
    "HistoryMode",
    "ChatInterface",
    "LineReader",
    "MCPClientError",
    "UnsupportedScriptType",
    "ConnectionFailure",
    "ChatInvocationFailure",
    "ToolInvocationFailure",
    "ToolArgumentError",
]
