"""MCP Server for Superthread integration using stdio transport.

This module implements the Model Context Protocol server that lets AI
agents work with Superthread boards, cards, pages and more through
standardized tools and prompts.

Transport: stdio (for Claude Desktop/Code integration)
Protocol: JSON-RPC 2.0 over MCP
"""

import argparse
import asyncio
import logging
import sys

import mcp.server.stdio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from .. import __version__
from ..core.client import SuperthreadClient
from ..logger import setup_logging
from .lifespan import load_logging_config, server_lifespan
from .prompts import PROMPTS, get_prompt
from .tools import ALL_SPECS, ToolRegistry, build_error_response

logger = logging.getLogger(__name__)

# Initialize server instance
server = Server("superthread-mcp-server")

# Global client instance (initialized in lifespan)
_client: SuperthreadClient | None = None

# Global registry instance (initialized once config is loaded)
_registry: ToolRegistry | None = None


# ---------------------------------------------------------------------------
# Global accessors
# ---------------------------------------------------------------------------


def get_client() -> SuperthreadClient:
    """Get the global SuperthreadClient instance.

    Raises:
        RuntimeError: If client is not initialized
    """
    if _client is None:
        raise RuntimeError(
            "SuperthreadClient not initialized. Server lifespan not started."
        )
    return _client


def set_client(client: SuperthreadClient | None) -> None:
    """Set the global SuperthreadClient instance, or None to clear."""
    global _client
    _client = client


def get_registry() -> ToolRegistry:
    """Get the global ToolRegistry instance.

    Raises:
        RuntimeError: If registry is not initialized
    """
    if _registry is None:
        raise RuntimeError("ToolRegistry not initialized.")
    return _registry


def set_registry(registry: ToolRegistry | None) -> None:
    """Set the global ToolRegistry instance, or None to clear."""
    global _registry
    _registry = registry


# ---------------------------------------------------------------------------
# MCP protocol handlers
# ---------------------------------------------------------------------------


@server.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    """List the tools of every enabled domain."""
    return get_registry().list_tools()


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict | None
) -> types.CallToolResult:
    """Handle tool execution via ToolRegistry dispatch.

    Args:
        name: The name of the tool to execute.
        arguments: Tool arguments (optional).

    Returns:
        CallToolResult with tool output content and optional isError flag.
    """
    client = get_client()
    try:
        return await get_registry().call_tool(name, arguments, client)
    except ValueError as e:
        # Unknown or disabled tool name
        return build_error_response(
            "unknown_tool",
            str(e),
            "Use list_tools to see available tools.",
        )


@server.list_prompts()
async def handle_list_prompts() -> list[types.Prompt]:
    return PROMPTS


@server.get_prompt()
async def handle_get_prompt(
    name: str, arguments: dict[str, str] | None
) -> types.GetPromptResult:
    return get_prompt(name, arguments)


# ---------------------------------------------------------------------------
# Server lifecycle
# ---------------------------------------------------------------------------


async def main(config_overrides: dict | None = None):
    """Run the MCP server with stdio transport.

    Sets up logging for MCP mode (file only, never stdout), validates the
    Superthread API key via the lifespan manager, builds the tool registry
    from the enabled domains, and serves JSON-RPC over stdio.

    Args:
        config_overrides: Optional dict with config values to override
            (api_key, base_url, enabled_tools, lists_add_to_top, debug, log_file)
    """
    overrides = config_overrides or {}

    # Must run before stdio_server so nothing reaches stdout during
    # protocol negotiation
    yaml_logging = load_logging_config()
    setup_logging(
        mode="mcp",
        debug=overrides.get("debug", False),
        log_file=overrides.get("log_file"),
        config_level=yaml_logging.level,
        config_file=yaml_logging.file,
    )

    # NOTE: set_client()/set_registry() are called here rather than in the
    # lifespan so that `python -m superthread_mcp_server.mcp.server` (loaded
    # as __main__) updates this module's globals, not a second copy.
    async with server_lifespan(config_overrides=overrides) as ctx:
        config = ctx["config"]
        registry = ToolRegistry(ALL_SPECS, config.enabled_tools)
        logger.info(
            "Registered %d tools (of %d total)",
            registry.tool_count(),
            len(ALL_SPECS),
        )
        if config.enabled_tools:
            print(
                f"  {registry.tool_count()} of {len(ALL_SPECS)} tools enabled",
                file=sys.stderr,
            )

        set_registry(registry)
        set_client(ctx["client"])
        try:
            async with mcp.server.stdio.stdio_server() as (
                read_stream,
                write_stream,
            ):
                init_options = InitializationOptions(
                    server_name="superthread-mcp-server",
                    server_version=__version__,
                    capabilities=server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                )
                await server.run(read_stream, write_stream, init_options)
        finally:
            set_client(None)
            set_registry(None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="superthread-mcp-server",
        description="Superthread MCP Server - Model Context Protocol server for Superthread",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with default config (from .env, environment or config.yml)
  superthread-mcp-server

  # Pass the API key explicitly
  superthread-mcp-server --api-key stp_xxxxxxxx

  # Only expose card and board tools
  superthread-mcp-server --enabled-tools cards,boards

  # Put new cards at the top of "Backlog" and any "Todo*" list
  superthread-mcp-server --lists-add-to-top "Backlog,Todo*"

  # Custom log file location with debug logging
  superthread-mcp-server --log-file /var/log/superthread-mcp.log --debug

Note: This server uses stdio transport for JSON-RPC communication with MCP clients.
All user-facing messages are written to stderr. Do not pipe stdin/stdout manually.
        """,
    )

    parser.add_argument(
        "--api-key",
        help="Superthread personal access token (takes precedence over SUPERTHREAD_API_KEY and config files)"
        " (visible in process list -- prefer SUPERTHREAD_API_KEY env var)",
    )
    parser.add_argument(
        "--base-url",
        help="Override the Superthread API base URL (default: https://api.superthread.com/v1)",
    )
    parser.add_argument(
        "--enabled-tools",
        help="Comma-separated tool domains to expose, e.g. 'cards,boards'. "
        "If not specified, all tools are available.",
    )
    parser.add_argument(
        "--lists-add-to-top",
        help="Comma-separated list title patterns (* wildcard) whose new cards go to the top",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path (default: LOG_FILE, then logging.file in config.yml, "
        "then /tmp/superthread-mcp-server.log)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"superthread-mcp-server version {__version__}",
    )
    return parser


def run(argv: list[str] | None = None) -> None:
    """Entry point that handles errors gracefully and parses CLI arguments."""
    args = build_parser().parse_args(argv)

    config_overrides = {}
    if args.api_key:
        config_overrides["api_key"] = args.api_key
    if args.base_url:
        config_overrides["base_url"] = args.base_url
    if args.enabled_tools:
        config_overrides["enabled_tools"] = args.enabled_tools
    if args.lists_add_to_top:
        config_overrides["lists_add_to_top"] = args.lists_add_to_top
    if args.debug:
        config_overrides["debug"] = True
    if args.log_file:
        config_overrides["log_file"] = args.log_file

    # Report overrides on stderr before stdio transport starts
    override_keys = [
        k for k in config_overrides if k not in ("api_key", "log_file")
    ]
    if "api_key" in config_overrides:
        override_keys.insert(0, "api_key (hidden)")
    if override_keys:
        print(
            f"Config overrides from CLI: {', '.join(override_keys)}",
            file=sys.stderr,
        )

    try:
        asyncio.run(main(config_overrides=config_overrides))
    except RuntimeError:
        # Error already printed to stderr by lifespan manager
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(0)


if __name__ == "__main__":
    run()
