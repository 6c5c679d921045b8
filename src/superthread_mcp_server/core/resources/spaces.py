"""Spaces: top-level containers for boards. The API path is ``/projects``."""

from typing import Any

from ...validators import safe_id
from .base import Resource


class SpaceResource(Resource):
    def _path(self, workspace_id: str, space_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/projects"
        if space_id is not None:
            path += f"/{safe_id('spaceId', space_id)}"
        return path

    def list(self, workspace_id: str) -> Any:
        return self._request("GET", self._path(workspace_id))

    def get(self, workspace_id: str, space_id: str) -> Any:
        return self._request("GET", self._path(workspace_id, space_id))

    def create(self, workspace_id: str, params: dict[str, Any]) -> Any:
        return self._request("POST", self._path(workspace_id), body=params)

    def update(
        self, workspace_id: str, space_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "PATCH", self._path(workspace_id, space_id), body=params
        )

    def delete(self, workspace_id: str, space_id: str) -> Any:
        return self._request("DELETE", self._path(workspace_id, space_id))

    def add_member(
        self, workspace_id: str, space_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "POST", f"{self._path(workspace_id, space_id)}/members", body=params
        )

    def remove_member(
        self, workspace_id: str, space_id: str, member_id: str
    ) -> Any:
        member = safe_id("memberId", member_id)
        return self._request(
            "DELETE", f"{self._path(workspace_id, space_id)}/members/{member}"
        )
