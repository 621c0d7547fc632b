"""MCP client wrapper - spawns the tool server and talks to it over stdio."""
import logging
import sys
from typing import Any, Dict, List, Optional

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from .errors import ConnectionFailure, ToolInvocationFailure, UnsupportedScriptType
from .tool_registry import ToolDescriptor

logger = logging.getLogger(__name__)


def server_command_for(script_path: str, platform: str = sys.platform) -> str:
    """
    Pick the interpreter that runs a server script.

    Python servers run under this process's own interpreter, JavaScript
    servers under Node.

    Args:
        script_path: Path to the server script
        platform: Host platform name, as in sys.platform

    Returns:
        Executable to launch the script with
    """
    if script_path.endswith(".py"):
        return sys.executable
    if script_path.endswith(".js"):
        return "node.exe" if platform == "win32" else "node"
    raise UnsupportedScriptType(script_path)


class MCPClient:
    """Wrapper for MCP server communication with persistent connection.

    The server process is spawned once by connect() and stays alive for
    the whole chat session until disconnect() is called.
    """

    def __init__(self):
        self.server_params: Optional[StdioServerParameters] = None

        # Persistent connection state
        self._stdio_context: Optional[Any] = None
        self._read: Optional[Any] = None
        self._write: Optional[Any] = None
        self._session: Optional[ClientSession] = None
        self._connected: bool = False

    async def connect(self, script_path: str) -> List[ToolDescriptor]:
        """
        Spawn the server script and fetch its tool listing.

        Args:
            script_path: Path to a .py or .js MCP server

        Returns:
            Tools advertised by the server, in listing order
        """
        command = server_command_for(script_path)
        self.server_params = StdioServerParameters(
            command=command,
            args=[script_path],
            env=None
        )

        logger.info("Starting MCP server: %s %s", command, script_path)
        try:
            # Entered by hand so the connection outlives this call
            self._stdio_context = stdio_client(self.server_params)
            self._read, self._write = await self._stdio_context.__aenter__()

            self._session = ClientSession(self._read, self._write)
            await self._session.__aenter__()
            await self._session.initialize()
            self._connected = True

            tools_result = await self._session.list_tools()
        except Exception as e:
            raise ConnectionFailure(f"Could not connect to MCP server {script_path}: {e}") from e

        descriptors = [ToolDescriptor.from_mcp(tool) for tool in tools_result.tools]
        logger.info("MCP server advertised %d tool(s)", len(descriptors))
        return descriptors

    async def disconnect(self):
        """
        Close the session and the stdio connection.

        Closing the stdio connection terminates the server process. Safe to
        call more than once and after a connect() that failed halfway.
        """
        if self._session is None and self._stdio_context is None:
            return

        logger.info("Disconnecting from MCP server")

        # Clean up session
        if self._session:
            try:
                await self._session.__aexit__(None, None, None)
            except Exception as e:
                logger.warning("Error closing session: %s", e)
            self._session = None

        # Clean up stdio connection
        if self._stdio_context:
            try:
                await self._stdio_context.__aexit__(None, None, None)
            except Exception as e:
                logger.warning("Error closing stdio connection: %s", e)
            self._stdio_context = None
            self._read = None
            self._write = None

        self._connected = False

    async def call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> List[Any]:
        """
        Call a tool on the MCP server.

        Args:
            tool_name: Name of the tool to call
            arguments: Arguments to pass to the tool

        Returns:
            The result's content items
        """
        if not self._connected:
            raise ToolInvocationFailure(
                f"Cannot call '{tool_name}': not connected to an MCP server",
                tool_name=tool_name
            )

        logger.debug("Calling '%s' with args: %s", tool_name, arguments)
        try:
            result = await self._session.call_tool(tool_name, arguments=arguments)
        except Exception as e:
            raise ToolInvocationFailure(f"Tool '{tool_name}' failed: {e}", tool_name=tool_name) from e

        if result.isError:
            logger.warning("Tool '%s' reported an error result", tool_name)
        return list(result.content)

    @property
    def is_connected(self) -> bool:
        """Check if client is currently connected to MCP server."""
        return self._connected
