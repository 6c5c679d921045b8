"""Search tool handler for MCP server."""

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, pick, require
from .registry import ToolSpec

SEARCH_TOOLS = [
    types.Tool(
        name="search_get",
        title="Search Workspace",
        description="Search boards, cards, pages, projects and notes in a workspace by title or content. Results are paginated; pass the returned cursor to get more.",
        inputSchema={
            "type": "object",
            "properties": {
                "workspace_id": WORKSPACE_ID_PROPERTY,
                "q": {"type": "string", "description": "Search query string"},
                "field": {
                    "type": "string",
                    "enum": ["title", "content"],
                    "description": "Target field to search in",
                },
                "types": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Filter by entity types (e.g., board, card, page, project, epic, note)",
                },
                "statuses": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Filter by card statuses",
                },
                "project_id": {
                    "type": "string",
                    "description": "Filter by specific space ID",
                },
                "archived": {
                    "type": "boolean",
                    "description": "Include archived items (default: false)",
                },
                "grouped": {
                    "type": "boolean",
                    "description": "Group results by entity type (default: false)",
                },
                "cursor": {
                    "type": "string",
                    "description": "Pagination cursor for retrieving more results",
                },
            },
            "required": ["workspace_id", "q"],
        },
    ),
]


async def _handle_search(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    filters = pick(
        args,
        ("field", "types", "statuses", "project_id", "archived", "grouped", "cursor"),
    )
    result = await run_sync(
        client.search.search,
        require(args, "workspace_id"),
        require(args, "q"),
        **filters,
    )
    return build_json_response(result)


SEARCH_SPECS: list[ToolSpec] = [
    ToolSpec(tool=SEARCH_TOOLS[0], domain="search", handler=_handle_search),
]
