"""Chat client - talks to Ollama through its OpenAI-compatible API."""
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from .config import ClientConfig
from .errors import ChatInvocationFailure

logger = logging.getLogger(__name__)


class ChatClient:
    """Wrapper for chat completion calls against the configured model."""

    def __init__(self, config: ClientConfig, client: Optional[AsyncOpenAI] = None):
        """
        Initialize chat client.

        Args:
            config: Client configuration (model and service URL)
            client: Preconfigured AsyncOpenAI client (optional)
        """
        self.model = config.model
        self.client = client or AsyncOpenAI(
            base_url=config.chat_base_url,
            api_key=config.api_key
        )

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        tool_choice: str = "auto"
    ) -> Any:
        """
        Send a non-streaming chat completion request.

        Args:
            messages: Conversation messages
            tools: Available tools (optional)
            tool_choice: Tool choice strategy, only sent along with tools

        Returns:
            The assistant message of the first choice
        """
        kwargs = {
            "model": self.model,
            "messages": messages,
            "stream": False,
        }

        if tools:
            kwargs["tools"] = tools
            kwargs["tool_choice"] = tool_choice

        logger.debug("Chat request: %d message(s), %d tool(s)", len(messages), len(tools or []))
        try:
            response = await self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            raise ChatInvocationFailure(f"Chat request to model '{self.model}' failed: {e}") from e

        return self.get_message_from_response(response)

    def get_message_from_response(self, response) -> Any:
        """Extract message from a chat completion response."""
        if not response.choices:
            raise ChatInvocationFailure(f"Model '{self.model}' returned no choices")
        return response.choices[0].message

    async def close(self):
        await self.client.close()
