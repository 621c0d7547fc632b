"""Client configuration and logging setup."""
import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_MODEL = "qwen3:4b"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_API_KEY = "ollama"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ClientConfig(BaseModel):
    """Settings read once at startup and handed to the chat interface."""

    model: str = DEFAULT_MODEL
    ollama_url: str = DEFAULT_OLLAMA_URL
    api_key: str = DEFAULT_API_KEY
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dotenv: bool = True
    ) -> "ClientConfig":
        """
        Build configuration from the environment.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            dotenv: Whether to load a .env file into os.environ first

        Returns:
            ClientConfig with empty variables treated as unset
        """
        if dotenv:
            load_dotenv()
        if environ is None:
            environ = os.environ

        return cls(
            model=environ.get("OLLAMA_MODEL") or DEFAULT_MODEL,
            ollama_url=environ.get("OLLAMA_URL") or DEFAULT_OLLAMA_URL,
            api_key=environ.get("OLLAMA_API_KEY") or DEFAULT_API_KEY,
            log_level=environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        )

    @property
    def chat_base_url(self) -> str:
        """OpenAI-compatible endpoint of the Ollama service."""
        return f"{self.ollama_url.rstrip('/')}/v1"


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """
    Configure process-wide logging to stderr.

    Args:
        level: Level name such as "INFO" or "DEBUG"

    Returns:
        The package logger
    """
    resolved = getattr(logging, level.upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    logger = logging.getLogger("mcp_cli_client")
    logger.setLevel(resolved)

    if not logger.handlers:  # Prevent handler duplication
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
