"""Boards and their lists (status columns)."""

from typing import Any

from ...validators import safe_id
from .base import Resource


class BoardResource(Resource):
    def _board_path(self, workspace_id: str, board_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/boards"
        if board_id is not None:
            path += f"/{safe_id('boardId', board_id)}"
        return path

    def _list_path(self, workspace_id: str, list_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/lists"
        if list_id is not None:
            path += f"/{safe_id('listId', list_id)}"
        return path

    def create(self, workspace_id: str, params: dict[str, Any]) -> Any:
        return self._request("POST", self._board_path(workspace_id), body=params)

    def list(
        self,
        workspace_id: str,
        project_id: str | None = None,
        bookmarked: bool | None = None,
        archived: bool | None = None,
    ) -> Any:
        """List boards. The API requires at least one filter."""
        return self._request(
            "GET",
            self._board_path(workspace_id),
            params={
                "project_id": project_id,
                "bookmarked": bookmarked,
                "archived": archived,
            },
        )

    def get(self, workspace_id: str, board_id: str) -> Any:
        """Board with its lists; used to resolve a list title from its id."""
        return self._request("GET", self._board_path(workspace_id, board_id))

    def update(
        self, workspace_id: str, board_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "PATCH", self._board_path(workspace_id, board_id), body=params
        )

    def duplicate(
        self,
        workspace_id: str,
        board_id: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self._request(
            "POST",
            f"{self._board_path(workspace_id, board_id)}/copy",
            body=params or None,
        )

    def delete(self, workspace_id: str, board_id: str) -> Any:
        return self._request("DELETE", self._board_path(workspace_id, board_id))

    def create_list(self, workspace_id: str, params: dict[str, Any]) -> Any:
        return self._request("POST", self._list_path(workspace_id), body=params)

    def update_list(
        self, workspace_id: str, list_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "PATCH", self._list_path(workspace_id, list_id), body=params
        )

    def delete_list(self, workspace_id: str, list_id: str) -> Any:
        return self._request("DELETE", self._list_path(workspace_id, list_id))
