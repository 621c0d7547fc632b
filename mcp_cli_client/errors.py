"""Exception hierarchy for the MCP chat client."""
from typing import Optional


class MCPClientError(Exception):
    """Base class for all chat client errors."""


class UnsupportedScriptType(MCPClientError):
    """Server script is neither a Python nor a JavaScript file."""

    def __init__(self, script_path: str):
        self.script_path = script_path
        super().__init__(f"Server script must be a .js or .py file: {script_path}")


class ConnectionFailure(MCPClientError):
    """Spawning the MCP server or listing its tools failed."""


class ChatInvocationFailure(MCPClientError):
    """The chat model request failed."""


class ToolInvocationFailure(MCPClientError):
    """Calling a tool on the MCP server failed."""

    def __init__(self, message: str, tool_name: Optional[str] = None):
        self.tool_name = tool_name
        super().__init__(message)


class ToolArgumentError(ToolInvocationFailure):
    """Tool arguments are malformed or do not match the tool's schema."""
