"""Cards, their links, tags, members and checklists.

Member and checklist endpoints are undocumented upstream and may change.
"""

from typing import Any

from ...validators import safe_id
from .base import Resource


class CardResource(Resource):
    def _path(self, workspace_id: str, card_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/cards"
        if card_id is not None:
            path += f"/{safe_id('cardId', card_id)}"
        return path

    def _checklist_path(
        self, workspace_id: str, card_id: str, checklist_id: str
    ) -> str:
        checklist = safe_id("checklistId", checklist_id)
        return f"{self._path(workspace_id, card_id)}/checklists/{checklist}"

    # Cards

    def create(self, workspace_id: str, params: dict[str, Any]) -> Any:
        return self._request("POST", self._path(workspace_id), body=params)

    def get(self, workspace_id: str, card_id: str) -> Any:
        return self._request("GET", self._path(workspace_id, card_id))

    def update(
        self, workspace_id: str, card_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "PATCH", self._path(workspace_id, card_id), body=params
        )

    def delete(self, workspace_id: str, card_id: str) -> Any:
        return self._request("DELETE", self._path(workspace_id, card_id))

    def duplicate(
        self,
        workspace_id: str,
        card_id: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self._request(
            "POST", f"{self._path(workspace_id, card_id)}/copy", body=params or None
        )

    def get_assigned(self, workspace_id: str, params: dict[str, Any]) -> Any:
        """Cards assigned to ``params["user_id"]``; filters travel in the body."""
        return self._request(
            "POST", f"{self._path(workspace_id)}/assigned", body=params
        )

    # Linked cards

    def add_related(
        self, workspace_id: str, card_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "POST", f"{self._path(workspace_id, card_id)}/linked_cards", body=params
        )

    def remove_related(
        self, workspace_id: str, card_id: str, linked_card_id: str
    ) -> Any:
        linked = safe_id("linkedCardId", linked_card_id)
        return self._request(
            "DELETE", f"{self._path(workspace_id, card_id)}/linked_cards/{linked}"
        )

    # Tags

    def get_tags(
        self,
        workspace_id: str,
        project_id: str | None = None,
        all: bool | None = None,
    ) -> Any:
        return self._request(
            "GET",
            f"/{self._workspace(workspace_id)}/tags",
            params={"project_id": project_id, "all": all},
        )

    def add_tags(
        self, workspace_id: str, card_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "POST", f"{self._path(workspace_id, card_id)}/tags", body=params
        )

    def remove_tag(self, workspace_id: str, card_id: str, tag_id: str) -> Any:
        tag = safe_id("tagId", tag_id)
        return self._request(
            "DELETE", f"{self._path(workspace_id, card_id)}/tags/{tag}"
        )

    # Members

    def add_member(
        self,
        workspace_id: str,
        card_id: str,
        user_id: str,
        role: str = "member",
    ) -> Any:
        return self._request(
            "POST",
            f"{self._path(workspace_id, card_id)}/members",
            body={"user_id": user_id, "role": role},
        )

    def remove_member(self, workspace_id: str, card_id: str, user_id: str) -> Any:
        user = safe_id("userId", user_id)
        return self._request(
            "DELETE", f"{self._path(workspace_id, card_id)}/members/{user}"
        )

    # Checklists

    def create_checklist(self, workspace_id: str, card_id: str, title: str) -> Any:
        return self._request(
            "POST",
            f"{self._path(workspace_id, card_id)}/checklists",
            body={"title": title},
        )

    def update_checklist(
        self, workspace_id: str, card_id: str, checklist_id: str, title: str
    ) -> Any:
        return self._request(
            "PATCH",
            self._checklist_path(workspace_id, card_id, checklist_id),
            body={"title": title},
        )

    def delete_checklist(
        self, workspace_id: str, card_id: str, checklist_id: str
    ) -> Any:
        return self._request(
            "DELETE", self._checklist_path(workspace_id, card_id, checklist_id)
        )

    def add_checklist_item(
        self, workspace_id: str, card_id: str, checklist_id: str, title: str
    ) -> Any:
        return self._request(
            "POST",
            f"{self._checklist_path(workspace_id, card_id, checklist_id)}/items",
            body={"title": title},
        )

    def update_checklist_item(
        self,
        workspace_id: str,
        card_id: str,
        checklist_id: str,
        item_id: str,
        updates: dict[str, Any],
    ) -> Any:
        item = safe_id("itemId", item_id)
        return self._request(
            "PATCH",
            f"{self._checklist_path(workspace_id, card_id, checklist_id)}/items/{item}",
            body=updates,
        )

    def delete_checklist_item(
        self, workspace_id: str, card_id: str, checklist_id: str, item_id: str
    ) -> Any:
        item = safe_id("itemId", item_id)
        return self._request(
            "DELETE",
            f"{self._checklist_path(workspace_id, card_id, checklist_id)}/items/{item}",
        )
