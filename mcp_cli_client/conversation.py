"""Manages conversation state."""
from enum import Enum
from typing import Any, Dict, List


class HistoryMode(str, Enum):
    """What the follow-up call after each tool result gets to see.

    CUMULATIVE: the shared history, including every tool result appended
        so far for the same model response.
    SNAPSHOT: the history as it was before the tool calls, plus only the
        current tool's result.
    """

    CUMULATIVE = "cumulative"
    SNAPSHOT = "snapshot"


class Conversation:
    """Ordered, append-only list of chat messages."""

    def __init__(self, messages: List[Dict[str, Any]] = None):
        self.messages: List[Dict[str, Any]] = list(messages or [])

    def add_user_message(self, content: str):
        """Add user message to conversation."""
        self.messages.append({
            "role": "user",
            "content": content
        })

    def add_tool_result(self, content: str):
        """Add flattened tool output to conversation."""
        self.messages.append({
            "role": "tool",
            "content": content
        })

    def fork(self) -> "Conversation":
        """Independent copy that can be extended without touching this one."""
        return Conversation(self.messages)

    def get_messages(self) -> List[Dict[str, Any]]:
        """Get all conversation messages."""
        return self.messages.copy()

    def __len__(self) -> int:
        return len(self.messages)
