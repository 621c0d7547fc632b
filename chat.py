#!/usr/bin/env python3
"""
Chat interface entry point.

Usage: python chat.py <path_to_server_script>
"""
import sys

from mcp_cli_client.cli import main


if __name__ == "__main__":
    sys.exit(main())
