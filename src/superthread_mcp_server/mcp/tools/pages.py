"""Documentation page tool handlers for MCP server.

Create, update, archive and delete are sequential batch tools; see
``batch.run_sequential`` for ordering and partial-failure semantics.
"""

from typing import Any

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .batch import batch_input_schema, require_items, run_sequential
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, pick, require
from .registry import ToolSpec

_PAGE_ID = {"type": "string", "description": "Page ID"}

_IMAGE_PROPERTIES = {
    "type": {"type": "string", "description": "Image type"},
    "src": {"type": "string", "description": "Image source"},
    "blurhash": {"type": "string", "description": "Blurhash"},
    "color": {"type": "string", "description": "Color"},
    "emoji": {"type": "string", "description": "Emoji"},
}

_COVER_IMAGE = {
    "type": "object",
    "properties": {
        **_IMAGE_PROPERTIES,
        "positionY": {"type": "number", "description": "Y position"},
        "object_fit": {"type": "string", "description": "Object fit"},
    },
    "required": ["type"],
    "description": "Cover image configuration",
}

_ICON = {
    "type": "object",
    "properties": _IMAGE_PROPERTIES,
    "required": ["type"],
    "description": "Icon configuration",
}

_CREATE_KEYS = (
    "project_id",
    "title",
    "content",
    "schema",
    "font",
    "cover_image",
    "icon",
    "parent_page_id",
    "position",
    "is_public",
)

_UPDATE_KEYS = (
    "title",
    "font",
    "project_id",
    "cover_image",
    "icon",
    "is_public",
    "parent_page_id",
    "position",
    "public_settings",
    "archived",
    "hide_table_of_contents",
    "hide_subpages",
)

PAGE_TOOLS = [
    types.Tool(
        name="page_creates",
        title="Create Pages",
        description="Create one or more pages, in order. Pages can include title, content, icon, cover image and hierarchy settings. Stops at the first failure; earlier pages are kept.",
        inputSchema=batch_input_schema(
            "pages",
            {
                "project_id": {"type": "string", "description": "Space ID (required)"},
                "title": {"type": "string", "description": "Page title"},
                "content": {"type": "string", "description": "Page content (max 102400 chars)"},
                "schema": {"type": "number", "description": "Schema version"},
                "font": {"type": "string", "description": "Font setting"},
                "cover_image": _COVER_IMAGE,
                "icon": _ICON,
                "parent_page_id": {
                    "type": "string",
                    "description": "Parent page ID (empty string for root)",
                },
                "position": {"type": "number", "description": "Position relative to siblings"},
                "is_public": {"type": "boolean", "description": "Whether page is public"},
            },
            ["project_id"],
            "Pages to create (use a single-element array for one page)",
        ),
    ),
    types.Tool(
        name="page_updates",
        title="Update Pages",
        description="Update one or more pages, in order. Can modify title, font, position, archiving status and other settings. Only provided fields are updated.",
        inputSchema=batch_input_schema(
            "pages",
            {
                "page_id": {"type": "string", "description": "Page ID to update"},
                "title": {"type": "string", "description": "New page title"},
                "font": {"type": "string", "description": "New font setting"},
                "project_id": {"type": "string", "description": "Move page to a different space"},
                "cover_image": _COVER_IMAGE,
                "icon": _ICON,
                "is_public": {"type": "boolean", "description": "Whether page is public"},
                "parent_page_id": {
                    "type": "string",
                    "description": "New parent page ID (empty string for root)",
                },
                "position": {"type": "number", "description": "New position relative to siblings"},
                "public_settings": {
                    "type": "object",
                    "properties": {
                        "url": {"type": "string", "description": "Public URL"},
                        "robots": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Robot tags",
                        },
                    },
                    "required": ["url", "robots"],
                    "description": "Public settings configuration",
                },
                "archived": {"type": "boolean", "description": "Archive or unarchive the page"},
                "hide_table_of_contents": {
                    "type": "boolean",
                    "description": "Whether to hide the table of contents",
                },
                "hide_subpages": {
                    "type": "boolean",
                    "description": "Whether to hide the subpages section",
                },
            },
            ["page_id"],
            "Page updates (use a single-element array for one page)",
        ),
    ),
    types.Tool(
        name="page_get",
        title="Get Page",
        description="Get a page, including its content, by page_id.",
        inputSchema={
            "type": "object",
            "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, "page_id": _PAGE_ID},
            "required": ["workspace_id", "page_id"],
        },
    ),
    types.Tool(
        name="page_get_all",
        title="Get All Pages",
        description="List the pages of a workspace, optionally filtered by space, archived or recently updated.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "project_id": {"type": "string", "description": "Filter by space ID"},
                "archived": {
                    "type": "boolean",
                    "description": "Include archived pages (default: false)",
                },
                "updated_recently": {
                    "type": "boolean",
                    "description": "Only recently updated pages (default: false)",
                },
            },
            "required": ["workspace_id"],
        },
    ),
    types.Tool(
        name="page_duplicate",
        title="Duplicate Page",
        description="Clone a page with its content and structure, under a parent page or at the root of a space.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "page_id": {"type": "string", "description": "Page ID to duplicate"},
                "project_id": {
                    "type": "string",
                    "description": "Space ID for the duplicated page",
                },
                "title": {"type": "string", "description": "Title for the duplicated page"},
                "parent_page_id": {
                    "type": "string",
                    "description": "Parent page ID (empty string for root)",
                },
                "position": {"type": "number", "description": "Position relative to siblings"},
            },
            "required": ["workspace_id", "page_id", "project_id"],
        },
    ),
    types.Tool(
        name="page_archives",
        title="Archive Pages",
        description="Archive one or more pages, in order. Archived pages keep their content and can be restored with page_updates.",
        inputSchema=batch_input_schema(
            "pages",
            {"page_id": {"type": "string", "description": "Page ID to archive"}},
            ["page_id"],
            "Pages to archive (use a single-element array for one page)",
        ),
    ),
    types.Tool(
        name="page_deletes",
        title="Delete Pages",
        description="Permanently delete one or more pages, in order. This cannot be undone; consider page_archives instead.",
        inputSchema=batch_input_schema(
            "pages",
            {"page_id": {"type": "string", "description": "Page ID to delete"}},
            ["page_id"],
            "Pages to delete (use a single-element array for one page)",
        ),
    ),
]


async def _handle_creates(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "pages", client.config.max_batch_size)

    async def _create_one(item: dict) -> Any:
        workspace_id = require(item, "workspace_id")
        require(item, "project_id")
        return await run_sync(
            client.pages.create, workspace_id, pick(item, _CREATE_KEYS)
        )

    return build_json_response({"pages": await run_sequential(items, _create_one)})


async def _handle_updates(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "pages", client.config.max_batch_size)

    async def _update_one(item: dict) -> Any:
        return await run_sync(
            client.pages.update,
            require(item, "workspace_id"),
            require(item, "page_id"),
            pick(item, _UPDATE_KEYS),
        )

    return build_json_response({"pages": await run_sequential(items, _update_one)})


async def _handle_get(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.pages.get, require(args, "workspace_id"), require(args, "page_id")
    )
    return build_json_response(result)


async def _handle_get_all(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.pages.list,
        require(args, "workspace_id"),
        project_id=args.get("project_id"),
        archived=args.get("archived"),
        updated_recently=args.get("updated_recently"),
    )
    return build_json_response(result)


async def _handle_duplicate(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    params = {
        "project_id": require(args, "project_id"),
        **pick(args, ("title", "parent_page_id", "position")),
    }
    result = await run_sync(
        client.pages.duplicate,
        require(args, "workspace_id"),
        require(args, "page_id"),
        params,
    )
    return build_json_response(result)


async def _handle_archives(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "pages", client.config.max_batch_size)

    async def _archive_one(item: dict) -> Any:
        return await run_sync(
            client.pages.archive,
            require(item, "workspace_id"),
            require(item, "page_id"),
        )

    return build_json_response(
        {"archived": await run_sequential(items, _archive_one)}
    )


async def _handle_deletes(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "pages", client.config.max_batch_size)

    async def _delete_one(item: dict) -> Any:
        return await run_sync(
            client.pages.delete,
            require(item, "workspace_id"),
            require(item, "page_id"),
        )

    return build_json_response(
        {"deleted": await run_sequential(items, _delete_one)}
    )


PAGE_SPECS: list[ToolSpec] = [
    ToolSpec(tool=tool, domain="pages", handler=handler)
    for tool, handler in zip(
        PAGE_TOOLS,
        [
            _handle_creates,
            _handle_updates,
            _handle_get,
            _handle_get_all,
            _handle_duplicate,
            _handle_archives,
            _handle_deletes,
        ],
    )
]
