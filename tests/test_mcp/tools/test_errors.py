"""Tests for mcp/tools/errors.py -- error response builders and utilities.

Covers:
- build_error_response() structure and format
- build_json_response() pass-through of upstream payloads
- translate_api_error() domain-specific error mapping
- pick() / require() argument helpers
"""

import json

import mcp.types as types
import pytest

from superthread_mcp_server.core.client import SuperthreadAPIError
from superthread_mcp_server.mcp.tools.errors import (
    action_for,
    build_error_response,
    build_json_response,
    error_type_for_status,
    pick,
    require,
    translate_api_error,
)


def _get_text(result: types.CallToolResult) -> str:
    """Extract text from first content item with type narrowing for Pyright."""
    content = result.content[0]
    assert isinstance(content, types.TextContent)
    return content.text


# ---------------------------------------------------------------------------
# build_error_response / build_json_response
# ---------------------------------------------------------------------------


class TestBuildErrorResponse:
    def test_returns_call_tool_result(self):
        result = build_error_response("not_found", "Not found", "Try again")
        assert isinstance(result, types.CallToolResult)
        assert result.isError is True

    def test_text_format(self):
        result = build_error_response(
            "validation_error", "title is required", "Check parameter values and retry."
        )
        assert _get_text(result) == (
            "Error (validation_error): title is required\n\n"
            "Action: Check parameter values and retry."
        )


class TestBuildJsonResponse:
    def test_payload_verbatim(self):
        payload = {"card": {"id": "c1", "title": "Fix", "custom": [1, None]}}
        result = build_json_response(payload)
        assert not result.isError
        assert json.loads(_get_text(result)) == payload

    def test_null_payload(self):
        assert json.loads(_get_text(build_json_response(None))) is None


# ---------------------------------------------------------------------------
# translate_api_error
# ---------------------------------------------------------------------------


class TestTranslateApiError:
    @pytest.mark.parametrize(
        "status,expected",
        [
            (404, "not_found"),
            (401, "authentication_failed"),
            (403, "permission_denied"),
            (429, "rate_limited"),
            (400, "server_error"),
            (503, "server_error"),
        ],
    )
    def test_status_mapping(self, status, expected):
        assert error_type_for_status(status) == expected

    def test_includes_status_and_body(self):
        result = translate_api_error(SuperthreadAPIError(404, '{"error":"nope"}'), "boards")
        text = _get_text(result)
        assert text.startswith("Error (not_found): Superthread API error (404)")
        assert '{"error":"nope"}' in text
        assert "board_get_all" in text

    def test_auth_action_mentions_key(self):
        result = translate_api_error(SuperthreadAPIError(401, "bad token"), "cards")
        assert "SUPERTHREAD_API_KEY" in _get_text(result)

    def test_permission_action_is_domain_specific(self):
        assert "comment author" in action_for("permission_denied", "comments")

    def test_unknown_domain_falls_back(self):
        assert action_for("not_found", "wiki") == action_for("not_found", "cards")


# ---------------------------------------------------------------------------
# pick / require
# ---------------------------------------------------------------------------


class TestArgumentHelpers:
    def test_pick_skips_missing_and_none(self):
        args = {"title": "T", "due_date": None, "priority": 0, "extra": "x"}
        assert pick(args, ("title", "due_date", "priority", "estimate")) == {
            "title": "T",
            "priority": 0,
        }

    def test_pick_keeps_false(self):
        assert pick({"archived": False}, ("archived",)) == {"archived": False}

    def test_require_present(self):
        assert require({"card_id": "c1"}, "card_id") == "c1"

    @pytest.mark.parametrize("args", [{}, {"card_id": None}, {"card_id": ""}])
    def test_require_missing(self, args):
        with pytest.raises(ValueError, match="card_id is required"):
            require(args, "card_id")
