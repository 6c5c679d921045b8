"""Comment and reply tool handlers for MCP server.

Comment and reply content accepts ``{{@Display Name}}`` mention tokens.
"""

import mcp.types as types

from ...core.async_utils import run_sync
from ...core.client import SuperthreadClient
from ...mentions import format_mentions
from .constants import WORKSPACE_ID_PROPERTY
from .errors import build_json_response, require
from .registry import ToolSpec

_COMMENT_ID = {"type": "string", "description": "Comment ID"}
_REPLY_ID = {"type": "string", "description": "Reply ID"}
_CONTENT = {
    "type": "string",
    "description": "Comment text (HTML supported). Mention members with {{@Display Name}}.",
}

_TARGET_KEYS = {"card": "card_id", "page": "page_id"}


def _schema(properties: dict, required: list[str]) -> dict:
    return {
        "type": "object",
        "properties": {"workspace_id": WORKSPACE_ID_PROPERTY, **properties},
        "required": ["workspace_id", *required],
    }


COMMENT_TOOLS = [
    types.Tool(
        name="create_comment",
        title="Create Comment",
        description="Add a comment to a card or page.",
        inputSchema=_schema(
            {
                "content": _CONTENT,
                "target_type": {
                    "type": "string",
                    "enum": ["card", "page"],
                    "description": "What to comment on",
                },
                "target_id": {"type": "string", "description": "Card ID or Page ID"},
            },
            ["content", "target_type", "target_id"],
        ),
    ),
    types.Tool(
        name="edit_comment",
        title="Edit Comment",
        description="Replace the text of an existing comment.",
        inputSchema=_schema(
            {"comment_id": _COMMENT_ID, "content": _CONTENT},
            ["comment_id", "content"],
        ),
    ),
    types.Tool(
        name="get_comment",
        title="Get Comment",
        description="Get a comment by ID.",
        inputSchema=_schema({"comment_id": _COMMENT_ID}, ["comment_id"]),
    ),
    types.Tool(
        name="get_all_replies_to_comment",
        title="Get All Replies to Comment",
        description="List the replies in a comment thread.",
        inputSchema=_schema({"comment_id": _COMMENT_ID}, ["comment_id"]),
    ),
    types.Tool(
        name="reply_to_comment",
        title="Reply to Comment",
        description="Reply to an existing comment.",
        inputSchema=_schema(
            {"comment_id": _COMMENT_ID, "content": _CONTENT},
            ["comment_id", "content"],
        ),
    ),
    types.Tool(
        name="edit_reply",
        title="Edit Reply",
        description="Replace the text of a reply.",
        inputSchema=_schema(
            {"comment_id": _COMMENT_ID, "reply_id": _REPLY_ID, "content": _CONTENT},
            ["comment_id", "reply_id", "content"],
        ),
    ),
    types.Tool(
        name="delete_reply",
        title="Delete Reply",
        description="Permanently delete a reply.",
        inputSchema=_schema(
            {"comment_id": _COMMENT_ID, "reply_id": _REPLY_ID},
            ["comment_id", "reply_id"],
        ),
    ),
    types.Tool(
        name="delete_comment",
        title="Delete Comment",
        description="Permanently delete a comment and its replies.",
        inputSchema=_schema({"comment_id": _COMMENT_ID}, ["comment_id"]),
    ),
]


async def _content(client: SuperthreadClient, args: dict, workspace_id: str) -> str:
    return await format_mentions(require(args, "content"), workspace_id, client.users)


async def _handle_create(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    workspace_id = require(args, "workspace_id")
    target_type = require(args, "target_type")
    target_key = _TARGET_KEYS.get(target_type)
    if target_key is None:
        raise ValueError(
            f"target_type must be 'card' or 'page', got {target_type!r}"
        )
    params = {
        "content": await _content(client, args, workspace_id),
        target_key: require(args, "target_id"),
    }
    result = await run_sync(client.comments.create, workspace_id, params)
    return build_json_response(result)


async def _handle_edit(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    workspace_id = require(args, "workspace_id")
    comment_id = require(args, "comment_id")
    params = {"content": await _content(client, args, workspace_id)}
    result = await run_sync(
        client.comments.update, workspace_id, comment_id, params
    )
    return build_json_response(result)


async def _handle_get(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.comments.get,
        require(args, "workspace_id"),
        require(args, "comment_id"),
    )
    return build_json_response(result)


async def _handle_get_replies(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.comments.get_replies,
        require(args, "workspace_id"),
        require(args, "comment_id"),
    )
    return build_json_response(result)


async def _handle_reply(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    workspace_id = require(args, "workspace_id")
    comment_id = require(args, "comment_id")
    params = {"content": await _content(client, args, workspace_id)}
    result = await run_sync(
        client.comments.create_reply, workspace_id, comment_id, params
    )
    return build_json_response(result)


async def _handle_edit_reply(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    workspace_id = require(args, "workspace_id")
    comment_id = require(args, "comment_id")
    reply_id = require(args, "reply_id")
    params = {"content": await _content(client, args, workspace_id)}
    result = await run_sync(
        client.comments.update_reply, workspace_id, comment_id, reply_id, params
    )
    return build_json_response(result)


async def _handle_delete_reply(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.comments.delete_reply,
        require(args, "workspace_id"),
        require(args, "comment_id"),
        require(args, "reply_id"),
    )
    return build_json_response(result)


async def _handle_delete(
    client: SuperthreadClient, args: dict
) -> types.CallToolResult:
    result = await run_sync(
        client.comments.delete,
        require(args, "workspace_id"),
        require(args, "comment_id"),
    )
    return build_json_response(result)


COMMENT_SPECS: list[ToolSpec] = [
    ToolSpec(tool=tool, domain="comments", handler=handler)
    for tool, handler in zip(
        COMMENT_TOOLS,
        [
            _handle_create,
            _handle_edit,
            _handle_get,
            _handle_get_replies,
            _handle_reply,
            _handle_edit_reply,
            _handle_delete_reply,
            _handle_delete,
        ],
    )
]
