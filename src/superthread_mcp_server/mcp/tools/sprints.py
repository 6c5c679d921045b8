"""Sprint tool handlers for MCP server."""

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, require
from .registry import ToolSpec

SPRINT_TOOLS = [
    types.Tool(
        name="sprint_get_all",
        title="Get Sprints",
        description="Get the sprints of a space. Sprints are returned as part of the space.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "space_id": {
                    "type": "string",
                    "description": "Space ID (project_id) to get sprints from",
                },
            },
            "required": ["workspace_id", "space_id"],
        },
    ),
    types.Tool(
        name="sprint_get",
        title="Get Sprint",
        description="Get a sprint with its lists and cards.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "sprint_id": {
                    "type": "string",
                    "description": "Sprint ID to retrieve",
                },
                "space_id": {
                    "type": "string",
                    "description": "Space ID (project_id), required for sprint lookup",
                },
            },
            "required": ["workspace_id", "sprint_id", "space_id"],
        },
    ),
]


async def _handle_get_all(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.sprints.list,
        require(args, "workspace_id"),
        require(args, "space_id"),
    )
    return build_json_response(result)


async def _handle_get(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.sprints.get,
        require(args, "workspace_id"),
        require(args, "sprint_id"),
        require(args, "space_id"),
    )
    return build_json_response(result)


SPRINT_SPECS: list[ToolSpec] = [
    ToolSpec(tool=SPRINT_TOOLS[0], domain="sprints", handler=_handle_get_all),
    ToolSpec(tool=SPRINT_TOOLS[1], domain="sprints", handler=_handle_get),
]
