"""User tool handlers for MCP server.

The account tool is the entry point for agents: it returns the workspaces
(teams) the token can access, whose IDs every other tool requires.
"""

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, require
from .registry import ToolSpec

USER_TOOLS = [
    types.Tool(
        name="user_get_my_account",
        title="Get My Account",
        description="Get the authenticated user's account, including the workspaces (teams) they belong to. Use this first to discover workspace IDs.",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="user_get_members",
        title="Get Workspace Members",
        description="List active members of a workspace with their user IDs, display names and roles. Display names can be mentioned in content as {{@Display Name}}.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY},
            "required": ["workspace_id"],
        },
    ),
]


async def _handle_get_my_account(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    return build_json_response(await run_sync(client.users.get_my_account))


async def _handle_get_members(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    members = await run_sync(
        client.users.get_members, require(args, "workspace_id")
    )
    return build_json_response(members)


USER_SPECS: list[ToolSpec] = [
    ToolSpec(tool=USER_TOOLS[0], domain="users", handler=_handle_get_my_account),
    ToolSpec(tool=USER_TOOLS[1], domain="users", handler=_handle_get_members),
]
