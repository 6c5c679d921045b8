"""Roadmap project tool handlers for MCP server.

Projects are called epics by the API; tool names use the UI term.
"""

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, pick, require
from .registry import ToolSpec

_PROJECT_ID = {"type": "string", "description": "Project (epic) ID"}
_CARD_ID = {"type": "string", "description": "Card ID"}

_PROJECT_FIELDS = {
    "title": {"type": "string", "description": "Project title"},
    "list_id": {"type": "string", "description": "Roadmap status list ID"},
    "content": {"type": "string", "description": "Project description (HTML supported)"},
    "owner_id": {"type": "string", "description": "Owner user ID"},
    "start_date": {"type": "number", "description": "Start date (Unix timestamp in seconds)"},
    "due_date": {"type": "number", "description": "Due date (Unix timestamp in seconds)"},
    "priority": {"type": "number", "description": "Priority level"},
}

_UPDATE_KEYS = (
    "title",
    "list_id",
    "owner_id",
    "start_date",
    "due_date",
    "position",
    "priority",
    "archived",
)

PROJECT_TOOLS = [
    types.Tool(
        name="project_get_all",
        title="Get Roadmap Projects",
        description="List all roadmap projects (epics) in a workspace.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY},
            "required": ["workspace_id"],
        },
    ),
    types.Tool(
        name="project_get",
        title="Get Roadmap Project",
        description="Get a roadmap project (epic) with its status, owner, dates and linked cards.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "project_id": _PROJECT_ID,
            },
            "required": ["workspace_id", "project_id"],
        },
    ),
    types.Tool(
        name="project_create",
        title="Create Roadmap Project",
        description="Create a roadmap project (epic) in a roadmap status list.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, **_PROJECT_FIELDS},
            "required": ["workspace_id", "title", "list_id"],
        },
    ),
    types.Tool(
        name="project_update",
        title="Update Roadmap Project",
        description="Update a roadmap project. Only specified fields change.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "project_id": _PROJECT_ID,
                **_PROJECT_FIELDS,
                "position": {"type": "number", "description": "Position in the status list"},
                "archived": {"type": "boolean", "description": "Archive or unarchive"},
            },
            "required": ["workspace_id", "project_id"],
        },
    ),
    types.Tool(
        name="project_delete",
        title="Delete Roadmap Project",
        description="Permanently delete a roadmap project. This cannot be undone.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "project_id": _PROJECT_ID,
            },
            "required": ["workspace_id", "project_id"],
        },
    ),
    types.Tool(
        name="project_add_related",
        title="Add Card to Roadmap Project",
        description="Link a card to a roadmap project.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "project_id": _PROJECT_ID,
                "card_id": _CARD_ID,
            },
            "required": ["workspace_id", "project_id", "card_id"],
        },
    ),
    types.Tool(
        name="project_remove_related",
        title="Remove Card from Roadmap Project",
        description="Unlink a card from a roadmap project. The card itself is kept.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "project_id": _PROJECT_ID,
                "card_id": _CARD_ID,
            },
            "required": ["workspace_id", "project_id", "card_id"],
        },
    ),
]


async def _handle_get_all(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(client.projects.list, require(args, "workspace_id"))
    return build_json_response(result)


async def _handle_get(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.projects.get,
        require(args, "workspace_id"),
        require(args, "project_id"),
    )
    return build_json_response(result)


async def _handle_create(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    require(args, "title")
    require(args, "list_id")
    params = pick(args, _PROJECT_FIELDS)
    result = await run_sync(
        client.projects.create, require(args, "workspace_id"), params
    )
    return build_json_response(result)


async def _handle_update(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.projects.update,
        require(args, "workspace_id"),
        require(args, "project_id"),
        pick(args, _UPDATE_KEYS),
    )
    return build_json_response(result)


async def _handle_delete(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.projects.delete,
        require(args, "workspace_id"),
        require(args, "project_id"),
    )
    return build_json_response(result)


async def _handle_add_related(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.projects.add_related_card,
        require(args, "workspace_id"),
        require(args, "project_id"),
        require(args, "card_id"),
    )
    return build_json_response(result)


async def _handle_remove_related(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.projects.remove_related_card,
        require(args, "workspace_id"),
        require(args, "project_id"),
        require(args, "card_id"),
    )
    return build_json_response(result)


PROJECT_SPECS: list[ToolSpec] = [
    ToolSpec(tool=tool, domain="projects", handler=handler)
    for tool, handler in zip(
        PROJECT_TOOLS,
        [
            _handle_get_all,
            _handle_get,
            _handle_create,
            _handle_update,
            _handle_delete,
            _handle_add_related,
            _handle_remove_related,
        ],
    )
]
