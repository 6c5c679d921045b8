"""Space tool handlers for MCP server.

Spaces are called projects by the API; tool names use the UI term.
"""

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, pick, require
from .registry import ToolSpec

_SPACE_ID = {"type": "string", "description": "Space ID"}

_ICON = {
    "type": "object",
    "description": "Space icon",
    "properties": {
        "type": {"type": "string"},
        "src": {"type": "string"},
        "emoji": {"type": "string"},
        "color": {"type": "string"},
    },
}

SPACE_TOOLS = [
    types.Tool(
        name="space_get_all",
        title="Get Spaces",
        description="List all spaces in a workspace. Spaces contain boards, sprints and pages.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY},
            "required": ["workspace_id"],
        },
    ),
    types.Tool(
        name="space_get",
        title="Get Space",
        description="Get a space with its boards and members.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, "space_id": _SPACE_ID},
            "required": ["workspace_id", "space_id"],
        },
    ),
    types.Tool(
        name="space_create",
        title="Create Space",
        description="Create a new space.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "title": {"type": "string", "description": "Space title"},
                "description": {"type": "string", "description": "Space description"},
                "icon": _ICON,
            },
            "required": ["workspace_id", "title"],
        },
    ),
    types.Tool(
        name="space_update",
        title="Update Space",
        description="Update a space. Only specified fields change.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "space_id": _SPACE_ID,
                "title": {"type": "string", "description": "New title"},
                "description": {"type": "string", "description": "New description"},
                "icon": _ICON,
                "archived": {"type": "boolean", "description": "Archive or unarchive"},
            },
            "required": ["workspace_id", "space_id"],
        },
    ),
    types.Tool(
        name="space_delete",
        title="Delete Space",
        description="Permanently delete a space and everything in it. This cannot be undone.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, "space_id": _SPACE_ID},
            "required": ["workspace_id", "space_id"],
        },
    ),
    types.Tool(
        name="space_add_member",
        title="Add Space Member",
        description="Add a workspace member to a space.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "space_id": _SPACE_ID,
                "user_id": {"type": "string", "description": "User ID to add"},
                "role": {"type": "string", "description": "Member role"},
            },
            "required": ["workspace_id", "space_id", "user_id"],
        },
    ),
    types.Tool(
        name="space_remove_member",
        title="Remove Space Member",
        description="Remove a member from a space.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "space_id": _SPACE_ID,
                "member_id": {"type": "string", "description": "User ID to remove"},
            },
            "required": ["workspace_id", "space_id", "member_id"],
        },
    ),
]


async def _handle_get_all(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(client.spaces.list, require(args, "workspace_id"))
    return build_json_response(result)


async def _handle_get(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.spaces.get, require(args, "workspace_id"), require(args, "space_id")
    )
    return build_json_response(result)


async def _handle_create(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    require(args, "title")
    result = await run_sync(
        client.spaces.create,
        require(args, "workspace_id"),
        pick(args, ("title", "description", "icon")),
    )
    return build_json_response(result)


async def _handle_update(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.spaces.update,
        require(args, "workspace_id"),
        require(args, "space_id"),
        pick(args, ("title", "description", "icon", "archived")),
    )
    return build_json_response(result)


async def _handle_delete(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.spaces.delete, require(args, "workspace_id"), require(args, "space_id")
    )
    return build_json_response(result)


async def _handle_add_member(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    require(args, "user_id")
    result = await run_sync(
        client.spaces.add_member,
        require(args, "workspace_id"),
        require(args, "space_id"),
        pick(args, ("user_id", "role")),
    )
    return build_json_response(result)


async def _handle_remove_member(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.spaces.remove_member,
        require(args, "workspace_id"),
        require(args, "space_id"),
        require(args, "member_id"),
    )
    return build_json_response(result)


SPACE_SPECS: list[ToolSpec] = [
    ToolSpec(tool=tool, domain="spaces", handler=handler)
    for tool, handler in zip(
        SPACE_TOOLS,
        [
            _handle_get_all,
            _handle_get,
            _handle_create,
            _handle_update,
            _handle_delete,
            _handle_add_member,
            _handle_remove_member,
        ],
    )
]
