"""Roadmap projects. The API still calls them epics."""

from typing import Any

from ...validators import safe_id
from .base import Resource


class ProjectResource(Resource):
    def _path(self, workspace_id: str, project_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/epics"
        if project_id is not None:
            path += f"/{safe_id('projectId', project_id)}"
        return path

    def list(self, workspace_id: str) -> Any:
        return self._request("GET", self._path(workspace_id))

    def get(self, workspace_id: str, project_id: str) -> Any:
        return self._request("GET", self._path(workspace_id, project_id))

    def create(self, workspace_id: str, params: dict[str, Any]) -> Any:
        return self._request("POST", self._path(workspace_id), body=params)

    def update(
        self, workspace_id: str, project_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "PATCH", self._path(workspace_id, project_id), body=params
        )

    def delete(self, workspace_id: str, project_id: str) -> Any:
        return self._request("DELETE", self._path(workspace_id, project_id))

    def add_related_card(
        self, workspace_id: str, project_id: str, card_id: str
    ) -> Any:
        path = f"{self._path(workspace_id, project_id)}/cards/{safe_id('cardId', card_id)}"
        return self._request("POST", path)

    def remove_related_card(
        self, workspace_id: str, project_id: str, card_id: str
    ) -> Any:
        path = f"{self._path(workspace_id, project_id)}/cards/{safe_id('cardId', card_id)}"
        return self._request("DELETE", path)
