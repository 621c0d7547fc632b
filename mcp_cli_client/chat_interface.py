"""Chat interface - orchestrates the MCP server, the chat model and the console."""
import asyncio
import json
import logging
import sys
import threading
from typing import Any, Dict, List, Optional, TextIO

from .arguments import parse_arguments, validate_arguments
from .config import ClientConfig
from .conversation import Conversation, HistoryMode
from .mcp_client import MCPClient
from .openai_client import ChatClient
from .tool_registry import ToolDescriptor, flatten_tool_output, to_chat_tool, tool_names

logger = logging.getLogger(__name__)

QUIT_COMMAND = "quit"
PROMPT = "\nQuery: "


class LineReader:
    """Reads console lines without blocking the event loop."""

    def __init__(self, stream: Optional[TextIO] = None, output: Optional[TextIO] = None):
        """
        Args:
            stream: Input to read from (defaults to sys.stdin)
            output: Where prompts are written (defaults to sys.stdout)
        """
        self.stream = stream
        self.output = output
        self.closed = False

    async def read_line(self, prompt: str = "") -> Optional[str]:
        """
        Show a prompt and wait for one line of input.

        Returns:
            The line without its terminator, or None at end of input
        """
        if self.closed:
            raise ValueError("read from closed LineReader")

        output = self.output or sys.stdout
        output.write(prompt)
        output.flush()

        stream = self.stream or sys.stdin
        line = await self._readline_in_daemon(stream)
        if line == "":
            return None
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        return line

    @staticmethod
    async def _readline_in_daemon(stream: TextIO) -> str:
        # Daemon thread: never joined at shutdown, even with a read pending
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def deliver(value, error):
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(value)

        def worker():
            try:
                value, error = stream.readline(), None
            except Exception as e:
                value, error = None, e
            try:
                loop.call_soon_threadsafe(deliver, value, error)
            except RuntimeError:
                pass  # loop already closed

        threading.Thread(target=worker, name="line-reader", daemon=True).start()
        return await future

    def close(self):
        """Release the input stream. The process's own stdin is left open."""
        if self.closed:
            return
        self.closed = True
        if self.stream is not None and self.stream is not sys.stdin:
            self.stream.close()


class ChatInterface:
    """Main chat interface that orchestrates MCP, the chat model and the console."""

    def __init__(
        self,
        config: ClientConfig,
        mcp_client: Optional[MCPClient] = None,
        chat_client: Optional[ChatClient] = None,
        history_mode: HistoryMode = HistoryMode.CUMULATIVE
    ):
        """
        Initialize chat interface.

        Args:
            config: Model identifier and service URL
            mcp_client: MCP transport (created if not given)
            chat_client: Chat model client (created from config if not given)
            history_mode: What each follow-up call after a tool result sees
        """
        self.config = config
        self.mcp_client = mcp_client or MCPClient()
        self.chat_client = chat_client or ChatClient(config)
        self.history_mode = HistoryMode(history_mode)
        self.descriptors: List[ToolDescriptor] = []
        self.tools: List[Dict[str, Any]] = []

    async def connect_to_server(self, script_path: str):
        """
        Connect to the MCP server and load its tools.

        Args:
            script_path: Path to a .py or .js MCP server script
        """
        try:
            self.descriptors = await self.mcp_client.connect(script_path)
        except Exception as e:
            logger.error("Failed to connect to MCP server: %s", e)
            print(f"Failed to connect to MCP server: {e}")
            raise

        self.tools = [to_chat_tool(d) for d in self.descriptors]
        print(f"Connected to server with tools: {tool_names(self.descriptors)}")

    def _schema_for(self, tool_name: str) -> Optional[Dict[str, Any]]:
        for descriptor in self.descriptors:
            if descriptor.name == tool_name:
                return descriptor.input_schema
        return None

    async def process_query(self, query: str) -> str:
        """
        Answer one user query, calling tools when the model asks for them.

        Tool calls are handled one at a time in the order the model
        returned them. Each tool's flattened output is added to the history
        and followed by a chat call without tools.

        Args:
            query: User's message

        Returns:
            Tool call traces and model replies, one per line
        """
        conversation = Conversation()
        conversation.add_user_message(query)

        message = await self.chat_client.chat(
            messages=conversation.get_messages(),
            tools=self.tools
        )

        if not message.tool_calls:
            return message.content or ""

        logger.info("Model requested %d tool call(s)", len(message.tool_calls))
        base = conversation.fork()
        final_text = []

        for tool_call in message.tool_calls:
            tool_name = tool_call.function.name
            tool_args = parse_arguments(tool_call.function.arguments, tool_name)
            validate_arguments(tool_name, tool_args, self._schema_for(tool_name))

            content = await self.mcp_client.call_tool(tool_name, tool_args)
            args_json = json.dumps(tool_args, separators=(",", ":"), ensure_ascii=False)
            final_text.append(f"[Calling tool {tool_name} with args {args_json}]")

            if self.history_mode is HistoryMode.SNAPSHOT:
                history = base.fork()
            else:
                history = conversation
            history.add_tool_result(flatten_tool_output(content))

            follow_up = await self.chat_client.chat(messages=history.get_messages())
            final_text.append(follow_up.content or "")

        return "\n".join(final_text)

    async def chat_loop(self, reader: Optional[LineReader] = None):
        """
        Read queries until 'quit' or end of input.

        Args:
            reader: Line source (defaults to the console)
        """
        reader = reader or LineReader()

        try:
            print("\nMCP Client Started!")
            print(f"Type your queries or '{QUIT_COMMAND}' to exit.")

            while True:
                query = await reader.read_line(PROMPT)
                if query is None or query.lower() == QUIT_COMMAND:
                    break

                try:
                    response = await self.process_query(query)
                    print(f"\nResponse: {response}")
                except Exception as e:
                    logger.error("Query failed: %s", e, exc_info=logger.isEnabledFor(logging.DEBUG))
                    print(f"Error occurred: {e}")
        finally:
            reader.close()

    async def cleanup(self):
        """Shut down the MCP server and release the chat client."""
        try:
            await self.mcp_client.disconnect()
        finally:
            await self.chat_client.close()
