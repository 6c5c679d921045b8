"""Card tool handlers for MCP server.

This module implements card operations, including the two sequential batch
tools ``card_creates`` and ``card_updates``. Batch items run one at a time
in input order (see ``batch.run_sequential``), so an item can reference a
card created by an earlier item of the same batch: ``"$1"`` as
``parent_card_id`` means "the card created by item 1".

Card position:
    The create endpoint ignores ``position``. When a position is requested
    (explicitly or inferred from SUPERTHREAD_LISTS_ADD_TO_TOP) the card is
    created first and then moved with a follow-up update, so for a moment
    it sits at the bottom of its list.
"""

import logging
import re
from typing import Any

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from ...mentions import format_mentions
from ...patterns import should_position_at_top
from .batch import batch_input_schema, require_items, run_sequential
from .constants import UNDOCUMENTED_WARNING, WORKSPACE_ID_PROPERTY
from .errors import build_json_response, pick, require
from .registry import ToolSpec

logger = logging.getLogger(__name__)

# "$3" refers to the card created by item 3 of the current batch.
_BATCH_REFERENCE = re.compile(r"^\$(\d+)$")

_CARD_ID = {"type": "string", "description": "Card ID"}
_CHECKLIST_ID = {"type": "string", "description": "Checklist ID"}
_ITEM_ID = {"type": "string", "description": "Checklist item ID"}

_CREATE_KEYS = (
    "title",
    "list_id",
    "board_id",
    "sprint_id",
    "content",
    "project_id",
    "start_date",
    "due_date",
    "priority",
    "estimate",
    "parent_card_id",
    "epic_id",
    "owner_id",
)

_UPDATE_KEYS = (
    "title",
    "board_id",
    "list_id",
    "project_id",
    "epic_id",
    "sprint_id",
    "owner_id",
    "start_date",
    "due_date",
    "position",
    "priority",
    "estimate",
    "archived",
)

_ASSIGNED_FILTER_KEYS = (
    "project_id",
    "board_id",
    "list_id",
    "sprint_id",
    "parent_card_id",
    "archived",
    "bookmarked",
    "start_date_min",
    "start_date_max",
    "due_date_min",
    "due_date_max",
    "completed_date_min",
    "completed_date_max",
    "priority",
    "statuses",
    "tags",
)

_CREATE_ITEM_PROPERTIES = {
    "title": {"type": "string", "description": "Card title"},
    "list_id": {"type": "string", "description": "List ID where the card will be placed"},
    "board_id": {"type": "string", "description": "Board ID (required if sprint_id not provided)"},
    "sprint_id": {"type": "string", "description": "Sprint ID (required if board_id not provided)"},
    "content": {
        "type": "string",
        "description": "Card content (HTML supported). Mention members with {{@Display Name}}.",
    },
    "project_id": {"type": "string", "description": "Space ID (required with sprint_id)"},
    "start_date": {"type": "number", "description": "Start date as Unix timestamp in seconds"},
    "due_date": {"type": "number", "description": "Due date as Unix timestamp in seconds"},
    "priority": {"type": "number", "description": "Priority level"},
    "estimate": {"type": "number", "description": "Time estimate"},
    "parent_card_id": {
        "type": "string",
        "description": "Parent card ID for subtasks, or \"$N\" for the card created by item N of this batch",
    },
    "epic_id": {"type": "string", "description": "Roadmap project (epic) ID"},
    "owner_id": {"type": "string", "description": "Card owner user ID"},
    "position": {
        "type": "number",
        "description": "Position in the list (0 = top). Applied with a follow-up update.",
    },
}

_UPDATE_ITEM_PROPERTIES = {
    "card_id": {"type": "string", "description": "Card ID to update"},
    "title": {"type": "string", "description": "New card title"},
    "board_id": {"type": "string", "description": "Move card to different board"},
    "list_id": {"type": "string", "description": "Move card to different list"},
    "project_id": {"type": "string", "description": "Change space association"},
    "epic_id": {"type": "string", "description": "Change roadmap project association"},
    "sprint_id": {"type": "string", "description": "Change sprint association"},
    "owner_id": {"type": "string", "description": "Change card owner"},
    "start_date": {"type": "number", "description": "Start date (Unix timestamp in seconds)"},
    "due_date": {"type": "number", "description": "Due date (Unix timestamp in seconds)"},
    "position": {"type": "number", "description": "Position in list"},
    "priority": {"type": "number", "description": "Priority level"},
    "estimate": {"type": "number", "description": "Time estimate"},
    "archived": {"type": "boolean", "description": "Archive (true) or unarchive (false)"},
}


def _card_schema(properties: dict, required: list[str]) -> dict:
    return {
        "type": "object",
        "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, **properties},
        "required": ["workspace_id", *required],
    }


CARD_TOOLS = [
    types.Tool(
        name="card_creates",
        title="Create Cards",
        description="Create one or more cards, in order. Later items may use \"$N\" as parent_card_id to nest under the card created by item N. Lists matching the configured add-to-top patterns get new cards at the top. Stops at the first failure; earlier cards are kept.",
        inputSchema=batch_input_schema(
            "cards",
            _CREATE_ITEM_PROPERTIES,
            ["title", "list_id"],
            "Cards to create, in order (use a single-element array for one card)",
        ),
    ),
    types.Tool(
        name="card_updates",
        title="Update Cards",
        description="Update one or more cards, in order. Only specified fields change. When a card moves to a list matching the add-to-top patterns it is placed at the top. If archived is set, only archiving is processed. Content cannot be updated here.",
        inputSchema=batch_input_schema(
            "cards",
            _UPDATE_ITEM_PROPERTIES,
            ["card_id"],
            "Card updates, in order (use a single-element array for one card)",
        ),
    ),
    types.Tool(
        name="card_get",
        title="Get Card",
        description="Get a card including its content, status, checklists, tags, linked cards, and all metadata.",
        inputSchema=_card_schema({"card_id": _CARD_ID}, ["card_id"]),
    ),
    types.Tool(
        name="card_get_assigned",
        title="Get Cards Assigned to User",
        description="Get cards assigned to a user, filtered by space, board, list, sprint, dates, priority, statuses, and tags.",
        inputSchema=_card_schema(
            {
                "user_id": {"type": "string", "description": "User ID to get assigned cards for"},
                "project_id": {"type": "string", "description": "Filter by space ID"},
                "board_id": {"type": "string", "description": "Filter by board ID"},
                "list_id": {"type": "string", "description": "Filter by list ID"},
                "sprint_id": {"type": "string", "description": "Filter by sprint ID"},
                "parent_card_id": {"type": "string", "description": "Filter by parent card ID"},
                "archived": {"type": "boolean", "description": "Filter by archived status"},
                "bookmarked": {"type": "boolean", "description": "Filter by bookmarked status"},
                "start_date_min": {"type": "number", "description": "Minimum start date (Unix timestamp)"},
                "start_date_max": {"type": "number", "description": "Maximum start date (Unix timestamp)"},
                "due_date_min": {"type": "number", "description": "Minimum due date (Unix timestamp)"},
                "due_date_max": {"type": "number", "description": "Maximum due date (Unix timestamp)"},
                "completed_date_min": {"type": "number", "description": "Minimum completed date (Unix timestamp)"},
                "completed_date_max": {"type": "number", "description": "Maximum completed date (Unix timestamp)"},
                "priority": {"type": "number", "description": "Filter by priority level"},
                "statuses": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": 'Filter by statuses (e.g., ["started", "completed"])',
                },
                "tags": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Filter by tag names",
                },
            },
            ["user_id"],
        ),
    ),
    types.Tool(
        name="card_add_related",
        title="Add Related Card",
        description='Link two cards with a relationship. Types: "blocks", "blocked_by", "related", "duplicates".',
        inputSchema=_card_schema(
            {
                "card_id": {"type": "string", "description": "Source card ID"},
                "related_card_id": {"type": "string", "description": "Related card ID to link"},
                "relation_type": {
                    "type": "string",
                    "enum": ["blocks", "blocked_by", "related", "duplicates"],
                    "description": "Type of relationship between cards",
                },
            },
            ["card_id", "related_card_id", "relation_type"],
        ),
    ),
    types.Tool(
        name="card_remove_related",
        title="Remove Related Card",
        description="Remove the link between two cards. Neither card is deleted.",
        inputSchema=_card_schema(
            {
                "card_id": {"type": "string", "description": "Source card ID"},
                "linked_card_id": {"type": "string", "description": "Linked card ID to remove"},
            },
            ["card_id", "linked_card_id"],
        ),
    ),
    types.Tool(
        name="card_duplicate",
        title="Duplicate Card",
        description="Clone a card with its properties, checklists, and metadata into the same list.",
        inputSchema=_card_schema({"card_id": _CARD_ID}, ["card_id"]),
    ),
    types.Tool(
        name="card_delete",
        title="Delete Card",
        description="Permanently delete a card. This cannot be undone; consider archiving with card_updates instead.",
        inputSchema=_card_schema({"card_id": _CARD_ID}, ["card_id"]),
    ),
    types.Tool(
        name="card_get_tags",
        title="Get Tags",
        description="Get the tags of a workspace, or of one space, with name, color and card counts.",
        inputSchema=_card_schema(
            {
                "project_id": {"type": "string", "description": "Space ID to filter tags by"},
                "all": {"type": "boolean", "description": "Return all tags in workspace"},
            },
            [],
        ),
    ),
    types.Tool(
        name="card_add_tags",
        title="Add Tags to Cards",
        description="Add tags to one or more cards, in order. Each item gives a card_id and either a single tag id or several ids.",
        inputSchema=batch_input_schema(
            "cards",
            {
                "card_id": _CARD_ID,
                "id": {"type": "string", "description": "Single tag ID to add"},
                "ids": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Tag IDs to add",
                },
            },
            ["card_id"],
            "Cards and the tags to add to each",
        ),
    ),
    types.Tool(
        name="card_remove_tag",
        title="Remove Tag from Card",
        description="Remove a tag from a card.",
        inputSchema=_card_schema(
            {"card_id": _CARD_ID, "tag_id": {"type": "string", "description": "Tag ID to remove"}},
            ["card_id", "tag_id"],
        ),
    ),
    types.Tool(
        name="card_add_member",
        title="Add Member to Card",
        description=f"Add a member to a card. {UNDOCUMENTED_WARNING}",
        inputSchema=_card_schema(
            {
                "card_id": _CARD_ID,
                "user_id": {"type": "string", "description": "User ID to add as member"},
                "role": {"type": "string", "description": "Member role (defaults to 'member')"},
            },
            ["card_id", "user_id"],
        ),
    ),
    types.Tool(
        name="card_remove_member",
        title="Remove Member from Card",
        description=f"Remove a member from a card. {UNDOCUMENTED_WARNING}",
        inputSchema=_card_schema(
            {
                "card_id": _CARD_ID,
                "user_id": {"type": "string", "description": "User ID to remove"},
            },
            ["card_id", "user_id"],
        ),
    ),
    types.Tool(
        name="card_create_checklist",
        title="Create Checklist on Card",
        description=f"Create a checklist on a card. {UNDOCUMENTED_WARNING}",
        inputSchema=_card_schema(
            {"card_id": _CARD_ID, "title": {"type": "string", "description": "Checklist title"}},
            ["card_id", "title"],
        ),
    ),
    types.Tool(
        name="card_add_checklist_item",
        title="Add Item to Checklist",
        description=f"Add an item to a card's checklist. The title may contain HTML. {UNDOCUMENTED_WARNING}",
        inputSchema=_card_schema(
            {
                "card_id": _CARD_ID,
                "checklist_id": _CHECKLIST_ID,
                "title": {"type": "string", "description": "Item title (can include HTML like '<p>text</p>')"},
            },
            ["card_id", "checklist_id", "title"],
        ),
    ),
    types.Tool(
        name="card_update_checklist_item",
        title="Update Checklist Item",
        description=f"Check, uncheck or rename a checklist item. {UNDOCUMENTED_WARNING}",
        inputSchema=_card_schema(
            {
                "card_id": _CARD_ID,
                "checklist_id": _CHECKLIST_ID,
                "item_id": _ITEM_ID,
                "checked": {"type": "boolean", "description": "Check/uncheck the item"},
                "title": {"type": "string", "description": "New item title (can include HTML)"},
            },
            ["card_id", "checklist_id", "item_id"],
        ),
    ),
    types.Tool(
        name="card_delete_checklist_item",
        title="Delete Checklist Item",
        description=f"Permanently delete a checklist item. {UNDOCUMENTED_WARNING}",
        inputSchema=_card_schema(
            {"card_id": _CARD_ID, "checklist_id": _CHECKLIST_ID, "item_id": _ITEM_ID},
            ["card_id", "checklist_id", "item_id"],
        ),
    ),
    types.Tool(
        name="card_update_checklist",
        title="Update Checklist",
        description=f"Rename a checklist. {UNDOCUMENTED_WARNING}",
        inputSchema=_card_schema(
            {
                "card_id": _CARD_ID,
                "checklist_id": _CHECKLIST_ID,
                "title": {"type": "string", "description": "New checklist title"},
            },
            ["card_id", "checklist_id", "title"],
        ),
    ),
    types.Tool(
        name="card_delete_checklist",
        title="Delete Checklist",
        description=f"Permanently delete a checklist and its items. {UNDOCUMENTED_WARNING}",
        inputSchema=_card_schema(
            {"card_id": _CARD_ID, "checklist_id": _CHECKLIST_ID},
            ["card_id", "checklist_id"],
        ),
    ),
]


# ---------------------------------------------------------------------------
# Position inference
# ---------------------------------------------------------------------------


def _list_title(container: Any, list_id: str) -> str | None:
    """Find the title of ``list_id`` in a board or sprint response."""
    if not isinstance(container, dict):
        return None
    for key in ("board", "sprint"):
        if isinstance(container.get(key), dict):
            container = container[key]
            break
    for entry in container.get("lists") or []:
        if isinstance(entry, dict) and entry.get("id") == list_id:
            return entry.get("title")
    return None


async def _resolve_list_title(
    client: SuperthreadClient, workspace_id: str, item: dict
) -> str | None:
    """Fetch the destination list's title from its board or sprint.

    Returns None when the item identifies neither a board nor a
    sprint-with-space.
    """
    list_id = item.get("list_id")
    if not list_id:
        return None
    if item.get("board_id"):
        container = await run_sync(
            client.boards.get, workspace_id, item["board_id"]
        )
    elif item.get("sprint_id") and item.get("project_id"):
        container = await run_sync(
            client.sprints.get,
            workspace_id,
            item["sprint_id"],
            item["project_id"],
        )
    else:
        return None
    return _list_title(container, list_id)


async def _decide_position(
    client: SuperthreadClient, workspace_id: str, item: dict
) -> int | None:
    explicit = item.get("position")
    if explicit is not None:
        return explicit
    patterns = client.config.lists_add_to_top
    if not patterns:
        return None
    title = await _resolve_list_title(client, workspace_id, item)
    position = should_position_at_top(title, None, patterns)
    if position is not None:
        logger.debug("List %r matches add-to-top patterns", title)
    return position


def _created_card_id(response: Any) -> str:
    """Extract the new card's id from a create response."""
    if isinstance(response, dict):
        card = response.get("card")
        if isinstance(card, dict) and card.get("id"):
            return card["id"]
        if response.get("id"):
            return response["id"]
    raise ValueError("Card was created but the response did not include its id")


def _resolve_reference(value: Any, created_ids: list[str]) -> Any:
    if not isinstance(value, str):
        return value
    match = _BATCH_REFERENCE.match(value)
    if match is None:
        return value
    item_number = int(match.group(1))
    if not 1 <= item_number <= len(created_ids):
        raise ValueError(
            f"{value} does not refer to a card created earlier in this batch"
        )
    return created_ids[item_number - 1]


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _handle_creates(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "cards", client.config.max_batch_size)
    created_ids: list[str] = []

    async def _create_one(item: dict) -> Any:
        workspace_id = require(item, "workspace_id")
        require(item, "title")
        require(item, "list_id")

        params = pick(item, _CREATE_KEYS)
        if "parent_card_id" in params:
            params["parent_card_id"] = _resolve_reference(
                params["parent_card_id"], created_ids
            )

        position = await _decide_position(client, workspace_id, item)

        if params.get("content"):
            params["content"] = await format_mentions(
                params["content"], workspace_id, client.users
            )

        created = await run_sync(client.cards.create, workspace_id, params)
        card_id = _created_card_id(created)
        created_ids.append(card_id)
        if position is None:
            return created

        return await run_sync(
            client.cards.update, workspace_id, card_id, {"position": position}
        )

    results = await run_sequential(items, _create_one)
    return build_json_response({"cards": results})


async def _handle_updates(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "cards", client.config.max_batch_size)

    async def _update_one(item: dict) -> Any:
        workspace_id = require(item, "workspace_id")
        card_id = require(item, "card_id")
        params = pick(item, _UPDATE_KEYS)
        if "list_id" in params and "position" not in params:
            position = await _decide_position(client, workspace_id, item)
            if position is not None:
                params["position"] = position
        return await run_sync(client.cards.update, workspace_id, card_id, params)

    results = await run_sequential(items, _update_one)
    return build_json_response({"cards": results})


async def _handle_get(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.get, require(args, "workspace_id"), require(args, "card_id")
    )
    return build_json_response(result)


async def _handle_get_assigned(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    params = {
        "user_id": require(args, "user_id"),
        **pick(args, _ASSIGNED_FILTER_KEYS),
    }
    result = await run_sync(
        client.cards.get_assigned, require(args, "workspace_id"), params
    )
    return build_json_response(result)


async def _handle_add_related(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    params = {
        "card_id": require(args, "related_card_id"),
        "linked_card_type": require(args, "relation_type"),
    }
    result = await run_sync(
        client.cards.add_related,
        require(args, "workspace_id"),
        require(args, "card_id"),
        params,
    )
    return build_json_response(result)


async def _handle_remove_related(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.remove_related,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "linked_card_id"),
    )
    return build_json_response(result)


async def _handle_duplicate(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.duplicate,
        require(args, "workspace_id"),
        require(args, "card_id"),
    )
    return build_json_response(result)


async def _handle_delete(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.delete, require(args, "workspace_id"), require(args, "card_id")
    )
    return build_json_response(result)


async def _handle_get_tags(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.get_tags,
        require(args, "workspace_id"),
        project_id=args.get("project_id"),
        all=args.get("all"),
    )
    return build_json_response(result)


async def _handle_add_tags(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    items = require_items(args, "cards", client.config.max_batch_size)

    async def _add_one(item: dict) -> Any:
        workspace_id = require(item, "workspace_id")
        card_id = require(item, "card_id")
        params = pick(item, ("id", "ids"))
        if not params:
            raise ValueError(f"card {card_id}: provide a tag id or ids")
        return await run_sync(client.cards.add_tags, workspace_id, card_id, params)

    results = await run_sequential(items, _add_one)
    return build_json_response({"cards": results})


async def _handle_remove_tag(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.remove_tag,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "tag_id"),
    )
    return build_json_response(result)


async def _handle_add_member(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.add_member,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "user_id"),
        args.get("role") or "member",
    )
    return build_json_response(result)


async def _handle_remove_member(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.remove_member,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "user_id"),
    )
    return build_json_response(result)


async def _handle_create_checklist(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.create_checklist,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "title"),
    )
    return build_json_response(result)


async def _handle_add_checklist_item(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.add_checklist_item,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "checklist_id"),
        require(args, "title"),
    )
    return build_json_response(result)


async def _handle_update_checklist_item(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.update_checklist_item,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "checklist_id"),
        require(args, "item_id"),
        pick(args, ("checked", "title")),
    )
    return build_json_response(result)


async def _handle_delete_checklist_item(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.delete_checklist_item,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "checklist_id"),
        require(args, "item_id"),
    )
    return build_json_response(result)


async def _handle_update_checklist(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.update_checklist,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "checklist_id"),
        require(args, "title"),
    )
    return build_json_response(result)


async def _handle_delete_checklist(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.cards.delete_checklist,
        require(args, "workspace_id"),
        require(args, "card_id"),
        require(args, "checklist_id"),
    )
    return build_json_response(result)


CARD_SPECS: list[ToolSpec] = [
    ToolSpec(tool=tool, domain="cards", handler=handler)
    for tool, handler in zip(
        CARD_TOOLS,
        [
            _handle_creates,
            _handle_updates,
            _handle_get,
            _handle_get_assigned,
            _handle_add_related,
            _handle_remove_related,
            _handle_duplicate,
            _handle_delete,
            _handle_get_tags,
            _handle_add_tags,
            _handle_remove_tag,
            _handle_add_member,
            _handle_remove_member,
            _handle_create_checklist,
            _handle_add_checklist_item,
            _handle_update_checklist_item,
            _handle_delete_checklist_item,
            _handle_update_checklist,
            _handle_delete_checklist,
        ],
    )
]
