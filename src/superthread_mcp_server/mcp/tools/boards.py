"""Board and list tool handlers for MCP server.

Lists are the status columns of a board; their titles drive the
"add to top" card positioning configured with SUPERTHREAD_LISTS_ADD_TO_TOP.
"""

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, pick, require
from .registry import ToolSpec

_BOARD_ID = {"type": "string", "description": "Board ID"}
_LIST_ID = {"type": "string", "description": "List ID"}

_LIST_FIELDS = {
    "title": {"type": "string", "description": "List title (e.g., 'Backlog', 'To Do', 'Done')"},
    "content": {"type": "string", "description": "List description"},
    "icon": {"type": "string", "description": "Icon name"},
    "color": {"type": "string", "description": "Color"},
    "behavior": {"type": "string", "description": "Status behavior of cards in this list"},
}

BOARD_TOOLS = [
    types.Tool(
        name="board_create",
        title="Create Board",
        description="Create a new board in a workspace. The board must be associated with a space (project_id).",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "project_id": {
                    "type": "string",
                    "description": "Space ID to associate the board with",
                },
                "title": {"type": "string", "description": "Board title"},
                "content": {"type": "string", "description": "Board description"},
                "icon": {"type": "string", "description": "Icon name"},
                "color": {"type": "string", "description": "Color"},
                "layout": {
                    "type": "string",
                    "description": "Board layout (defaults to 'board')",
                },
            },
            "required": ["workspace_id", "project_id", "title"],
        },
    ),
    types.Tool(
        name="board_create_list",
        title="Create List",
        description="Create a new list (status column) on a board.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "board_id": _BOARD_ID,
                **_LIST_FIELDS,
            },
            "required": ["workspace_id", "board_id", "title"],
        },
    ),
    types.Tool(
        name="board_get_all",
        title="Get Boards",
        description="List the boards of a space.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "space_id": {
                    "type": "string",
                    "description": "Space ID to get boards from",
                },
                "bookmarked": {
                    "type": "boolean",
                    "description": "Only bookmarked boards",
                },
                "archived": {
                    "type": "boolean",
                    "description": "Include archived boards (default: false)",
                },
            },
            "required": ["workspace_id", "space_id"],
        },
    ),
    types.Tool(
        name="board_get",
        title="Get Board",
        description="Get a board with its lists and cards.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, "board_id": _BOARD_ID},
            "required": ["workspace_id", "board_id"],
        },
    ),
    types.Tool(
        name="board_update",
        title="Update Board",
        description="Update a board. Only specified fields change.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "board_id": _BOARD_ID,
                "title": {"type": "string", "description": "New board title"},
                "content": {"type": "string", "description": "New board description"},
                "icon": {"type": "string", "description": "New icon name"},
                "color": {"type": "string", "description": "New color"},
                "archived": {"type": "boolean", "description": "Archive or unarchive"},
            },
            "required": ["workspace_id", "board_id"],
        },
    ),
    types.Tool(
        name="board_update_list",
        title="Update List",
        description="Update a list. Only specified fields change.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "list_id": _LIST_ID,
                **_LIST_FIELDS,
            },
            "required": ["workspace_id", "list_id"],
        },
    ),
    types.Tool(
        name="board_duplicate",
        title="Duplicate Board",
        description="Copy a board with its lists, optionally into another space.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "board_id": _BOARD_ID,
                "title": {"type": "string", "description": "Title for the copy"},
                "project_id": {
                    "type": "string",
                    "description": "Space ID for the copy",
                },
            },
            "required": ["workspace_id", "board_id"],
        },
    ),
    types.Tool(
        name="board_delete",
        title="Delete Board",
        description="Permanently delete a board and its cards. This cannot be undone.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, "board_id": _BOARD_ID},
            "required": ["workspace_id", "board_id"],
        },
    ),
    types.Tool(
        name="board_delete_list",
        title="Delete List",
        description="Permanently delete a list from a board.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, "list_id": _LIST_ID},
            "required": ["workspace_id", "list_id"],
        },
    ),
]


async def _handle_create(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    require(args, "project_id")
    require(args, "title")
    params = pick(args, ("project_id", "title", "content", "icon", "color", "layout"))
    result = await run_sync(
        client.boards.create, require(args, "workspace_id"), params
    )
    return build_json_response(result)


async def _handle_create_list(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    require(args, "title")
    params = pick(args, ("board_id", *_LIST_FIELDS))
    params["board_id"] = require(args, "board_id")
    result = await run_sync(
        client.boards.create_list, require(args, "workspace_id"), params
    )
    return build_json_response(result)


async def _handle_get_all(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.boards.list,
        require(args, "workspace_id"),
        project_id=require(args, "space_id"),
        bookmarked=args.get("bookmarked"),
        archived=args.get("archived"),
    )
    return build_json_response(result)


async def _handle_get(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.boards.get, require(args, "workspace_id"), require(args, "board_id")
    )
    return build_json_response(result)


async def _handle_update(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.boards.update,
        require(args, "workspace_id"),
        require(args, "board_id"),
        pick(args, ("title", "content", "icon", "color", "archived")),
    )
    return build_json_response(result)


async def _handle_update_list(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.boards.update_list,
        require(args, "workspace_id"),
        require(args, "list_id"),
        pick(args, _LIST_FIELDS),
    )
    return build_json_response(result)


async def _handle_duplicate(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.boards.duplicate,
        require(args, "workspace_id"),
        require(args, "board_id"),
        pick(args, ("title", "project_id")),
    )
    return build_json_response(result)


async def _handle_delete(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.boards.delete, require(args, "workspace_id"), require(args, "board_id")
    )
    return build_json_response(result)


async def _handle_delete_list(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.boards.delete_list,
        require(args, "workspace_id"),
        require(args, "list_id"),
    )
    return build_json_response(result)


BOARD_SPECS: list[ToolSpec] = [
    ToolSpec(tool=tool, domain="boards", handler=handler)
    for tool, handler in zip(
        BOARD_TOOLS,
        [
            _handle_create,
            _handle_create_list,
            _handle_get_all,
            _handle_get,
            _handle_update,
            _handle_update_list,
            _handle_duplicate,
            _handle_delete,
            _handle_delete_list,
        ],
    )
]
