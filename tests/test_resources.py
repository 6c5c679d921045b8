"""Tests for the resource clients: HTTP method, path, query and body per operation.

The client's transport is replaced with a MagicMock so each test checks the
exact request a resource method issues.
"""

from unittest.mock import MagicMock

import pytest

from superthread_mcp_server.config import Config
from superthread_mcp_server.core.client import SuperthreadClient
from superthread_mcp_server.validators import PathValidationError


@pytest.fixture
def client():
    c = SuperthreadClient(Config(api_key="stp_key"))
    c.request = MagicMock(return_value={"ok": True})
    return c


def _last_call(client):
    args, kwargs = client.request.call_args
    return args[0], args[1], kwargs.get("params"), kwargs.get("body")


# (operation, expected method, expected path, expected params, expected body)
ROUTES = [
    # users
    (lambda c: c.users.get_my_account(), "GET", "/users/me", None, None),
    # projects (roadmap epics)
    (lambda c: c.projects.list("ws"), "GET", "/ws/epics", None, None),
    (lambda c: c.projects.get("ws", "e1"), "GET", "/ws/epics/e1", None, None),
    (lambda c: c.projects.create("ws", {"title": "E"}), "POST", "/ws/epics", None, {"title": "E"}),
    (lambda c: c.projects.update("ws", "e1", {"title": "F"}), "PATCH", "/ws/epics/e1", None, {"title": "F"}),
    (lambda c: c.projects.delete("ws", "e1"), "DELETE", "/ws/epics/e1", None, None),
    (lambda c: c.projects.add_related_card("ws", "e1", "c1"), "POST", "/ws/epics/e1/cards/c1", None, None),
    (lambda c: c.projects.remove_related_card("ws", "e1", "c1"), "DELETE", "/ws/epics/e1/cards/c1", None, None),
    # spaces
    (lambda c: c.spaces.list("ws"), "GET", "/ws/projects", None, None),
    (lambda c: c.spaces.get("ws", "s1"), "GET", "/ws/projects/s1", None, None),
    (lambda c: c.spaces.create("ws", {"title": "S"}), "POST", "/ws/projects", None, {"title": "S"}),
    (lambda c: c.spaces.update("ws", "s1", {"title": "T"}), "PATCH", "/ws/projects/s1", None, {"title": "T"}),
    (lambda c: c.spaces.delete("ws", "s1"), "DELETE", "/ws/projects/s1", None, None),
    (lambda c: c.spaces.add_member("ws", "s1", {"user_id": "u1"}), "POST", "/ws/projects/s1/members", None, {"user_id": "u1"}),
    (lambda c: c.spaces.remove_member("ws", "s1", "u1"), "DELETE", "/ws/projects/s1/members/u1", None, None),
    # boards and lists
    (lambda c: c.boards.create("ws", {"title": "B"}), "POST", "/ws/boards", None, {"title": "B"}),
    (
        lambda c: c.boards.list("ws", project_id="s1", archived=False),
        "GET",
        "/ws/boards",
        {"project_id": "s1", "bookmarked": None, "archived": False},
        None,
    ),
    (lambda c: c.boards.get("ws", "b1"), "GET", "/ws/boards/b1", None, None),
    (lambda c: c.boards.update("ws", "b1", {"title": "C"}), "PATCH", "/ws/boards/b1", None, {"title": "C"}),
    (lambda c: c.boards.duplicate("ws", "b1"), "POST", "/ws/boards/b1/copy", None, None),
    (lambda c: c.boards.delete("ws", "b1"), "DELETE", "/ws/boards/b1", None, None),
    (lambda c: c.boards.create_list("ws", {"board_id": "b1"}), "POST", "/ws/lists", None, {"board_id": "b1"}),
    (lambda c: c.boards.update_list("ws", "l1", {"title": "L"}), "PATCH", "/ws/lists/l1", None, {"title": "L"}),
    (lambda c: c.boards.delete_list("ws", "l1"), "DELETE", "/ws/lists/l1", None, None),
    # cards
    (lambda c: c.cards.create("ws", {"title": "T"}), "POST", "/ws/cards", None, {"title": "T"}),
    (lambda c: c.cards.get("ws", "c1"), "GET", "/ws/cards/c1", None, None),
    (lambda c: c.cards.update("ws", "c1", {"position": 0}), "PATCH", "/ws/cards/c1", None, {"position": 0}),
    (lambda c: c.cards.delete("ws", "c1"), "DELETE", "/ws/cards/c1", None, None),
    (lambda c: c.cards.duplicate("ws", "c1"), "POST", "/ws/cards/c1/copy", None, None),
    (lambda c: c.cards.get_assigned("ws", {"user_id": "u1"}), "POST", "/ws/cards/assigned", None, {"user_id": "u1"}),
    (
        lambda c: c.cards.add_related("ws", "c1", {"card_id": "c2", "linked_card_type": "blocks"}),
        "POST",
        "/ws/cards/c1/linked_cards",
        None,
        {"card_id": "c2", "linked_card_type": "blocks"},
    ),
    (lambda c: c.cards.remove_related("ws", "c1", "c2"), "DELETE", "/ws/cards/c1/linked_cards/c2", None, None),
    (lambda c: c.cards.get_tags("ws", project_id="s1"), "GET", "/ws/tags", {"project_id": "s1", "all": None}, None),
    (lambda c: c.cards.add_tags("ws", "c1", {"ids": ["t1"]}), "POST", "/ws/cards/c1/tags", None, {"ids": ["t1"]}),
    (lambda c: c.cards.remove_tag("ws", "c1", "t1"), "DELETE", "/ws/cards/c1/tags/t1", None, None),
    (
        lambda c: c.cards.add_member("ws", "c1", "u1"),
        "POST",
        "/ws/cards/c1/members",
        None,
        {"user_id": "u1", "role": "member"},
    ),
    (lambda c: c.cards.remove_member("ws", "c1", "u1"), "DELETE", "/ws/cards/c1/members/u1", None, None),
    (lambda c: c.cards.create_checklist("ws", "c1", "QA"), "POST", "/ws/cards/c1/checklists", None, {"title": "QA"}),
    (lambda c: c.cards.update_checklist("ws", "c1", "k1", "QA2"), "PATCH", "/ws/cards/c1/checklists/k1", None, {"title": "QA2"}),
    (lambda c: c.cards.delete_checklist("ws", "c1", "k1"), "DELETE", "/ws/cards/c1/checklists/k1", None, None),
    (
        lambda c: c.cards.add_checklist_item("ws", "c1", "k1", "step"),
        "POST",
        "/ws/cards/c1/checklists/k1/items",
        None,
        {"title": "step"},
    ),
    (
        lambda c: c.cards.update_checklist_item("ws", "c1", "k1", "i1", {"checked": True}),
        "PATCH",
        "/ws/cards/c1/checklists/k1/items/i1",
        None,
        {"checked": True},
    ),
    (lambda c: c.cards.delete_checklist_item("ws", "c1", "k1", "i1"), "DELETE", "/ws/cards/c1/checklists/k1/items/i1", None, None),
    # sprints
    (lambda c: c.sprints.list("ws", "s1"), "GET", "/ws/projects/s1", None, None),
    (lambda c: c.sprints.get("ws", "sp1", "s1"), "GET", "/ws/sprints/sp1", {"project_id": "s1"}, None),
    # comments
    (lambda c: c.comments.create("ws", {"content": "x"}), "POST", "/ws/comments", None, {"content": "x"}),
    (lambda c: c.comments.get("ws", "m1"), "GET", "/ws/comments/m1", None, None),
    (lambda c: c.comments.update("ws", "m1", {"content": "y"}), "PATCH", "/ws/comments/m1", None, {"content": "y"}),
    (lambda c: c.comments.delete("ws", "m1"), "DELETE", "/ws/comments/m1", None, None),
    (lambda c: c.comments.get_replies("ws", "m1"), "GET", "/ws/comments/m1/children", None, None),
    (lambda c: c.comments.create_reply("ws", "m1", {"content": "r"}), "POST", "/ws/comments/m1/children", None, {"content": "r"}),
    (lambda c: c.comments.update_reply("ws", "m1", "r1", {"content": "s"}), "PATCH", "/ws/comments/m1/children/r1", None, {"content": "s"}),
    (lambda c: c.comments.delete_reply("ws", "m1", "r1"), "DELETE", "/ws/comments/m1/children/r1", None, None),
    # notes
    (lambda c: c.notes.create("ws", {"title": "N"}), "POST", "/ws/notes", None, {"title": "N"}),
    (lambda c: c.notes.get("ws", "n1"), "GET", "/ws/notes/n1", None, None),
    (lambda c: c.notes.list("ws"), "GET", "/ws/notes", None, None),
    (lambda c: c.notes.delete("ws", "n1"), "DELETE", "/ws/notes/n1", None, None),
    # tags
    (lambda c: c.tags.create("ws", {"name": "bug"}), "POST", "/ws/tags", None, {"name": "bug"}),
    (lambda c: c.tags.update("ws", "t1", {"color": "#fff"}), "PATCH", "/ws/tags/t1", None, {"color": "#fff"}),
    (lambda c: c.tags.delete("ws", "t1"), "DELETE", "/ws/tags/t1", None, None),
]


@pytest.mark.parametrize("operation,method,path,params,body", ROUTES)
def test_route(client, operation, method, path, params, body):
    operation(client)
    assert _last_call(client) == (method, path, params, body)


class TestUserMembers:
    def test_members_path_and_unwrap(self, client):
        client.request.return_value = {
            "members": [{"id": "u1"}],
            "inactive": [{"id": "u9"}],
        }
        assert client.users.get_members("ws") == [{"id": "u1"}]
        assert _last_call(client)[:2] == ("GET", "/teams/ws/members")

    def test_members_missing_key(self, client):
        client.request.return_value = {"inactive": []}
        assert client.users.get_members("ws") == []

    def test_members_non_dict_response(self, client):
        client.request.return_value = [{"id": "u1"}]
        assert client.users.get_members("ws") == []


class TestSearch:
    def test_search_params(self, client):
        client.search.search(
            "ws", "login bug", field="title", types=["card"], archived=True
        )
        method, path, params, _ = _last_call(client)
        assert (method, path) == ("GET", "/ws/search")
        assert params["query"] == "login bug"
        assert params["fields"] == "title"
        assert params["types"] == ["card"]
        assert params["archived"] is True
        assert params["cursor"] is None


class TestPages:
    def test_create_unwraps_page(self, client):
        client.request.return_value = {"page": {"id": "p1"}}
        assert client.pages.create("ws", {"project_id": "s1"}) == {"id": "p1"}

    def test_list_unwraps_pages(self, client):
        client.request.return_value = {"pages": [{"id": "p1"}]}
        assert client.pages.list("ws", archived=True) == [{"id": "p1"}]
        method, path, params, _ = _last_call(client)
        assert (method, path) == ("GET", "/ws/pages")
        assert params == {"project_id": None, "archived": True, "updated_recently": None}

    def test_unwrapped_response_passed_through(self, client):
        client.request.return_value = {"id": "p1"}
        assert client.pages.get("ws", "p1") == {"id": "p1"}

    def test_get_update_delete_paths(self, client):
        client.pages.get("ws", "p1")
        assert _last_call(client)[:2] == ("GET", "/ws/pages/p1")
        client.pages.update("ws", "p1", {"title": "T"})
        assert _last_call(client) == ("PATCH", "/ws/pages/p1", None, {"title": "T"})
        client.pages.delete("ws", "p1")
        assert _last_call(client)[:2] == ("DELETE", "/ws/pages/p1")

    def test_duplicate_and_archive(self, client):
        client.pages.duplicate("ws", "p1", {"project_id": "s1"})
        assert _last_call(client) == ("POST", "/ws/pages/p1/copy", None, {"project_id": "s1"})
        client.pages.archive("ws", "p1")
        assert _last_call(client)[:2] == ("PUT", "/ws/pages/p1/archive")


class TestPathSanitization:
    """Caller IDs are stripped to [A-Za-z0-9_-] before reaching the path."""

    def test_traversal_in_workspace(self, client):
        client.cards.get("../admin", "c1")
        assert _last_call(client)[1] == "/admin/cards/c1"

    def test_traversal_in_nested_ids(self, client):
        client.cards.delete_checklist_item("ws", "c1/../x", "k1?y", "i1#z")
        assert _last_call(client)[1] == "/ws/cards/c1x/checklists/k1y/items/i1z"

    def test_sprint_space_query_sanitized(self, client):
        client.sprints.get("ws", "sp1", "s1&admin=1")
        assert _last_call(client)[2] == {"project_id": "s1admin1"}

    def test_members_workspace_sanitized(self, client):
        client.request.return_value = {"members": []}
        client.users.get_members("w s/1")
        assert _last_call(client)[1] == "/teams/ws1/members"

    @pytest.mark.parametrize(
        "operation",
        [
            lambda c: c.cards.get("", "c1"),
            lambda c: c.cards.get("ws", "../.."),
            lambda c: c.boards.update_list("ws", "%%%", {}),
            lambda c: c.comments.delete_reply("ws", "m1", None),
            lambda c: c.pages.archive("ws", "///"),
        ],
    )
    def test_rejected_ids_never_reach_transport(self, client, operation):
        with pytest.raises(PathValidationError):
            operation(client)
        client.request.assert_not_called()
