"""Meeting note tool handlers for MCP server."""

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, pick, require
from .registry import ToolSpec

_NOTE_ID = {"type": "string", "description": "Note ID"}

NOTE_TOOLS = [
    types.Tool(
        name="create_note",
        title="Create Note",
        description="Create a new meeting note.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "title": {"type": "string", "description": "Note title"},
                "content": {"type": "string", "description": "Note content"},
                "meeting_date": {
                    "type": "number",
                    "description": "Meeting date (Unix timestamp)",
                },
            },
            "required": ["workspace_id", "title", "content"],
        },
    ),
    types.Tool(
        name="get_note",
        title="Get Note",
        description="Get a meeting note by ID.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, "note_id": _NOTE_ID},
            "required": ["workspace_id", "note_id"],
        },
    ),
    types.Tool(
        name="get_notes",
        title="Get Notes",
        description="List all meeting notes in a workspace.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY},
            "required": ["workspace_id"],
        },
    ),
    types.Tool(
        name="delete_note",
        title="Delete Note",
        description="Permanently delete a meeting note.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, "note_id": _NOTE_ID},
            "required": ["workspace_id", "note_id"],
        },
    ),
]


async def _handle_create(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    params = {
        "title": require(args, "title"),
        "content": require(args, "content"),
        **pick(args, ("meeting_date",)),
    }
    result = await run_sync(
        client.notes.create, require(args, "workspace_id"), params
    )
    return build_json_response(result)


async def _handle_get(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.notes.get, require(args, "workspace_id"), require(args, "note_id")
    )
    return build_json_response(result)


async def _handle_list(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(client.notes.list, require(args, "workspace_id"))
    return build_json_response(result)


async def _handle_delete(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.notes.delete, require(args, "workspace_id"), require(args, "note_id")
    )
    return build_json_response(result)


NOTE_SPECS: list[ToolSpec] = [
    ToolSpec(tool=NOTE_TOOLS[0], domain="notes", handler=_handle_create),
    ToolSpec(tool=NOTE_TOOLS[1], domain="notes", handler=_handle_get),
    ToolSpec(tool=NOTE_TOOLS[2], domain="notes", handler=_handle_list),
    ToolSpec(tool=NOTE_TOOLS[3], domain="notes", handler=_handle_delete),
]
