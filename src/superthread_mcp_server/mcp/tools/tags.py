"""Workspace tag tool handlers for MCP server.

All three tools are sequential batches. The tag endpoints are undocumented
upstream.
"""

from typing import Any

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .batch import batch_input_schema, require_items, run_sequential
from .constants import UNDOCUMENTED_WARNING
from .errors import build_json_response, pick, require
from .registry import ToolSpec

TAG_TOOLS = [
    types.Tool(
        name="tag_creates",
        title="Create Tags",
        description=f"Create one or more tags, in order. Tags categorize and filter cards. {UNDOCUMENTED_WARNING}",
        inputSchema=batch_input_schema(
            "tags",
            {
                "name": {"type": "string", "description": "Tag name"},
                "color": {
                    "type": "string",
                    "description": "Tag color as hex string (e.g., '#ee46bc')",
                },
                "project_id": {
                    "type": "string",
                    "description": "Space ID to associate the tag with",
                },
            },
            ["name", "color"],
            "Tags to create (use a single-element array for one tag)",
        ),
    ),
    types.Tool(
        name="tag_updates",
        title="Update Tags",
        description=f"Rename or recolor one or more tags, in order. Only specified fields change. {UNDOCUMENTED_WARNING}",
        inputSchema=batch_input_schema(
            "tags",
            {
                "tag_id": {"type": "string", "description": "Tag ID to update"},
                "name": {"type": "string", "description": "New tag name"},
                "color": {"type": "string", "description": "New tag color as hex string"},
            },
            ["tag_id"],
            "Tag updates (use a single-element array for one tag)",
        ),
    ),
    types.Tool(
        name="tag_deletes",
        title="Delete Tags",
        description=f"Permanently delete one or more tags, in order. The tags are removed from every card. {UNDOCUMENTED_WARNING}",
        inputSchema=batch_input_schema(
            "tags",
            {"tag_id": {"type": "string", "description": "Tag ID to delete"}},
            ["tag_id"],
            "Tags to delete (use a single-element array for one tag)",
        ),
    ),
]


async def _handle_creates(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "tags", client.config.max_batch_size)

    async def _create_one(item: dict) -> Any:
        params = {
            "name": require(item, "name"),
            "color": require(item, "color"),
            **pick(item, ("project_id",)),
        }
        return await run_sync(
            client.tags.create, require(item, "workspace_id"), params
        )

    return build_json_response({"tags": await run_sequential(items, _create_one)})


async def _handle_updates(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "tags", client.config.max_batch_size)

    async def _update_one(item: dict) -> Any:
        return await run_sync(
            client.tags.update,
            require(item, "workspace_id"),
            require(item, "tag_id"),
            pick(item, ("name", "color")),
        )

    return build_json_response({"tags": await run_sequential(items, _update_one)})


async def _handle_deletes(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "tags", client.config.max_batch_size)

    async def _delete_one(item: dict) -> Any:
        return await run_sync(
            client.tags.delete,
            require(item, "workspace_id"),
            require(item, "tag_id"),
        )

    return build_json_response(
        {"deleted": await run_sequential(items, _delete_one)}
    )


TAG_SPECS: list[ToolSpec] = [
    ToolSpec(tool=TAG_TOOLS[0], domain="tags", handler=_handle_creates),
    ToolSpec(tool=TAG_TOOLS[1], domain="tags", handler=_handle_updates),
    ToolSpec(tool=TAG_TOOLS[2], domain="tags", handler=_handle_deletes),
]
