"""Tests for the command-line entry point."""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from mcp_cli_client import cli
from mcp_cli_client.config import ClientConfig
from mcp_cli_client.errors import ConnectionFailure, UnsupportedScriptType


def test_missing_argument_prints_usage(capsys):
    assert cli.main([]) == 0
    assert "Usage:" in capsys.readouterr().out


def test_clean_run_exits_zero(monkeypatch):
    run = AsyncMock()
    monkeypatch.setattr(cli, "run", run)

    assert cli.main(["server.py"]) == 0
    run.assert_awaited_once()
    assert run.call_args.args[1] == "server.py"


def test_startup_failures_still_exit_zero(monkeypatch):
    monkeypatch.setattr(cli, "run", AsyncMock(side_effect=ConnectionFailure("no server")))
    assert cli.main(["server.py"]) == 0

    monkeypatch.setattr(cli, "run", AsyncMock(side_effect=UnsupportedScriptType("server.rb")))
    assert cli.main(["server.rb"]) == 0


def test_interrupt_exits_zero_without_waiting_for_reader(monkeypatch):
    exits = []
    monkeypatch.setattr(cli, "run", AsyncMock(side_effect=KeyboardInterrupt))
    monkeypatch.setattr(cli.os, "_exit", exits.append)

    cli.main(["server.py"])

    assert exits == [0]


def test_run_cleans_up_after_connection_failure():
    with patch.object(cli, "ChatInterface") as interface_cls:
        interface = interface_cls.return_value
        interface.connect_to_server = AsyncMock(side_effect=ConnectionFailure("no server"))
        interface.chat_loop = AsyncMock()
        interface.cleanup = AsyncMock()

        with pytest.raises(ConnectionFailure):
            asyncio.run(cli.run(ClientConfig(), "server.py"))

    interface.chat_loop.assert_not_awaited()
    interface.cleanup.assert_awaited_once()
