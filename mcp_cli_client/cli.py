"""Command-line entry point."""
import asyncio
import logging
import os
import sys
from typing import List, Optional

from .chat_interface import ChatInterface
from .config import ClientConfig, setup_logging
from .errors import ConnectionFailure, UnsupportedScriptType

logger = logging.getLogger(__name__)

USAGE = "Usage: python chat.py <path_to_server_script>"


async def run(config: ClientConfig, script_path: str):
    """Connect to the server, chat until the user quits, then clean up."""
    interface = ChatInterface(config)
    try:
        await interface.connect_to_server(script_path)
        await interface.chat_loop()
    finally:
        await interface.cleanup()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) < 1:
        print(USAGE)
        return 0

    config = ClientConfig.from_env()
    setup_logging(config.log_level)
    logger.debug("Using model %s at %s", config.model, config.chat_base_url)

    try:
        asyncio.run(run(config, argv[0]))
    except (UnsupportedScriptType, ConnectionFailure) as e:
        # Already reported by connect_to_server; cleanup has run
        logger.debug("Startup aborted: %s", e)
    except KeyboardInterrupt:
        print()
        sys.stdout.flush()
        sys.stderr.flush()
        # The console reader thread may still hold stdin
        os._exit(0)
    return 0


if __name__ == "__main__":
    sys.exit(main())
