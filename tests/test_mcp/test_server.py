"""Tests for the MCP server module: protocol handlers and CLI entry point."""

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import mcp.types as types
import pytest

from superthread_mcp_server import __version__
from superthread_mcp_server.config_schema import LoggingConfig
from superthread_mcp_server.mcp import server
from superthread_mcp_server.mcp.tools import ToolRegistry, ToolSpec


def _spec(name: str) -> ToolSpec:
    async def handler(client, args):
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=f"ok:{name}")]
        )

    return ToolSpec(
        tool=types.Tool(name=name, description=name, inputSchema={"type": "object"}),
        domain="cards",
        handler=handler,
    )


class TestHandlers(unittest.TestCase):
    def setUp(self):
        server.set_client(MagicMock())
        server.set_registry(ToolRegistry([_spec("card_get")]))

    def tearDown(self):
        server.set_client(None)
        server.set_registry(None)

    def test_list_tools(self):
        tools = asyncio.run(server.handle_list_tools())
        self.assertEqual([t.name for t in tools], ["card_get"])

    def test_call_tool_dispatches(self):
        result = asyncio.run(server.handle_call_tool("card_get", {}))
        self.assertEqual(result.content[0].text, "ok:card_get")

    def test_unknown_tool_envelope(self):
        result = asyncio.run(server.handle_call_tool("wiki_get", {}))
        self.assertTrue(result.isError)
        self.assertEqual(
            result.content[0].text,
            "Error (unknown_tool): Unknown tool: wiki_get\n\n"
            "Action: Use list_tools to see available tools.",
        )

    def test_prompts(self):
        prompts = asyncio.run(server.handle_list_prompts())
        self.assertEqual(prompts[0].name, "screenshot-to-tasks")
        result = asyncio.run(
            server.handle_get_prompt(
                "screenshot-to-tasks", {"screenshot_description": "x"}
            )
        )
        self.assertEqual(len(result.messages), 1)


class TestAccessors(unittest.TestCase):
    def test_uninitialized_client(self):
        server.set_client(None)
        with self.assertRaises(RuntimeError):
            server.get_client()

    def test_uninitialized_registry(self):
        server.set_registry(None)
        with self.assertRaises(RuntimeError):
            server.get_registry()


class TestRun:
    def test_overrides_from_flags(self, capsys):
        with patch.object(server, "main", new_callable=MagicMock) as mock_main, patch.object(
            server.asyncio, "run"
        ) as mock_run:
            server.run(
                [
                    "--api-key", "stp_secret",
                    "--enabled-tools", "cards,boards",
                    "--lists-add-to-top", "Backlog",
                    "--debug",
                ]
            )

        mock_main.assert_called_once_with(
            config_overrides={
                "api_key": "stp_secret",
                "enabled_tools": "cards,boards",
                "lists_add_to_top": "Backlog",
                "debug": True,
            }
        )
        mock_run.assert_called_once()
        err = capsys.readouterr().err
        assert "api_key (hidden)" in err
        assert "stp_secret" not in err

    def test_runtime_error_exits_1(self):
        with patch.object(server, "main", new_callable=MagicMock), patch.object(
            server.asyncio, "run", side_effect=RuntimeError("Configuration error")
        ):
            with pytest.raises(SystemExit) as exc_info:
                server.run([])
        assert exc_info.value.code == 1

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            server.run(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    async def test_registry_built_from_enabled_domains(self):
        client = MagicMock()
        config = MagicMock(enabled_tools=frozenset({"tags"}))
        seen = {}

        class _Lifespan:
            async def __aenter__(self):
                return {"client": client, "config": config}

            async def __aexit__(self, *exc):
                return False

        async def fake_run(read, write, options):
            seen["registry"] = server.get_registry()
            seen["client"] = server.get_client()
            seen["server_name"] = options.server_name

        stdio = MagicMock()
        stdio.return_value.__aenter__ = AsyncMock(return_value=(MagicMock(), MagicMock()))
        stdio.return_value.__aexit__ = AsyncMock(return_value=False)

        with (
            patch.object(server, "load_logging_config", return_value=LoggingConfig(level="ERROR")),
            patch.object(server, "setup_logging") as mock_setup,
            patch.object(server, "server_lifespan", return_value=_Lifespan()),
            patch.object(server.mcp.server.stdio, "stdio_server", stdio),
            patch.object(server.server, "run", side_effect=fake_run),
        ):
            await server.main({"debug": False})

        assert mock_setup.call_args[1]["config_level"] == "ERROR"
        assert mock_setup.call_args[1]["config_file"] is None
        names = {t.name for t in seen["registry"].list_tools()}
        assert names == {"tag_creates", "tag_updates", "tag_deletes"}
        assert seen["client"] is client
        assert seen["server_name"] == "superthread-mcp-server"
        with pytest.raises(RuntimeError):
            server.get_registry()
