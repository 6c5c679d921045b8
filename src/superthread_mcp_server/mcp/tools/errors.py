"""Error and success response builders for MCP tool handlers.

This module provides structured error responses with corrective actions
to help AI agents recover from errors without human intervention.
"""

import json
from collections.abc import Iterable
from typing import Any

import mcp.types as types

from ...core.client import SuperthreadAPIError


def build_error_response(
    error_type: str, message: str, corrective_action: str
) -> types.CallToolResult:
    """Build a structured error response with corrective action.

    Args:
        error_type: Error category (not_found, authentication_failed,
            permission_denied, rate_limited, validation_error,
            connection_error, server_error, unknown_tool)
        message: Human-readable error description
        corrective_action: Specific action the agent can take to resolve the error

    Returns:
        CallToolResult with isError=True

    Examples:
        >>> build_error_response("not_found", "Card abc not found", "Use search_get to find the card.")
        CallToolResult(content=[TextContent(...)], isError=True)
    """
    error_text = f"Error ({error_type}): {message}\n\nAction: {corrective_action}"

    return types.CallToolResult(
        content=[types.TextContent(type="text", text=error_text)],
        isError=True,
    )


def build_json_response(result: Any) -> types.CallToolResult:
    """Return the upstream payload verbatim as pretty-printed JSON text."""
    return types.CallToolResult(
        content=[
            types.TextContent(
                type="text", text=json.dumps(result, indent=2, default=str)
            )
        ],
    )


# ---------------------------------------------------------------------------
# Shared argument utilities
# ---------------------------------------------------------------------------


def pick(args: dict, keys: Iterable[str]) -> dict[str, Any]:
    """Copy the listed keys that are present and not None.

    The API treats an absent field as "leave unchanged", so optional
    arguments the caller did not supply must not be sent as null.
    """
    return {key: args[key] for key in keys if args.get(key) is not None}


def require(args: dict, key: str) -> Any:
    """Return a required argument or raise ValueError if it is missing."""
    value = args.get(key)
    if value is None or value == "":
        raise ValueError(f"{key} is required")
    return value


# ---------------------------------------------------------------------------
# Domain-specific corrective action messages
# ---------------------------------------------------------------------------

_GENERIC_ACTIONS = {
    "authentication_failed": "Check SUPERTHREAD_API_KEY; the token may be expired or revoked.",
    "rate_limited": "Wait a moment, then retry with fewer requests.",
    "server_error": "Retry later; if it persists, check Superthread status.",
}

_DOMAIN_MESSAGES: dict[str, dict[str, str]] = {
    "users": {
        "not_found": "Use user_get_my_account to list the workspaces you belong to.",
        "permission": "Ask a workspace admin for access to this workspace.",
    },
    "projects": {
        "not_found": "Use project_get_all to verify the project exists.",
        "permission": "Ask a workspace admin for access to the roadmap.",
    },
    "spaces": {
        "not_found": "Use space_get_all to verify the space exists.",
        "permission": "Ask a space admin to add you as a member.",
    },
    "boards": {
        "not_found": "Use board_get_all with a space_id to verify the board exists.",
        "permission": "Ask a space admin for access to this board.",
    },
    "cards": {
        "not_found": "Use search_get or card_get_assigned to find the card.",
        "permission": "Ask a space admin for access to this card's board.",
    },
    "sprints": {
        "not_found": "Use sprint_get_all with the space_id to verify the sprint exists.",
        "permission": "Ask a space admin for access to this space's sprints.",
    },
    "search": {
        "not_found": "Use user_get_my_account to verify the workspace_id.",
        "permission": "Ask a workspace admin for access to this workspace.",
    },
    "pages": {
        "not_found": "Use page_get_all to verify the page exists.",
        "permission": "Ask the page owner or a space admin for access.",
    },
    "comments": {
        "not_found": "Use card_get or page_get to list existing comments.",
        "permission": "Only the comment author can edit or delete it.",
    },
    "notes": {
        "not_found": "Use get_notes to verify the note exists.",
        "permission": "Ask the note owner for access.",
    },
    "tags": {
        "not_found": "Use card_get_tags to list existing tags.",
        "permission": "Ask a workspace admin to manage tags.",
    },
}


def error_type_for_status(status_code: int) -> str:
    """Map an HTTP status to the error category shown to the agent."""
    match status_code:
        case 404:
            return "not_found"
        case 401:
            return "authentication_failed"
        case 403:
            return "permission_denied"
        case 429:
            return "rate_limited"
        case _:
            return "server_error"


def action_for(error_type: str, domain: str) -> str:
    """Corrective action for an error category within a tool domain."""
    msgs = _DOMAIN_MESSAGES.get(domain, _DOMAIN_MESSAGES["cards"])
    match error_type:
        case "not_found":
            return msgs["not_found"]
        case "permission_denied":
            return msgs["permission"]
        case "validation_error":
            return "Check parameter values and retry."
        case "connection_error":
            return "Check network access to the Superthread API and SUPERTHREAD_API_BASE_URL, then retry."
        case _:
            return _GENERIC_ACTIONS.get(error_type, _GENERIC_ACTIONS["server_error"])


def translate_api_error(
    error: SuperthreadAPIError, domain: str
) -> types.CallToolResult:
    """Translate a Superthread API error to a structured error response.

    Args:
        error: Non-2xx response raised by the client
        domain: Tool domain ("cards", "pages", ...)

    Returns:
        CallToolResult with isError=True and corrective action
    """
    error_type = error_type_for_status(error.status_code)
    return build_error_response(
        error_type, str(error), action_for(error_type, domain)
    )
