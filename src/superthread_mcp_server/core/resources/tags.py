from typing import Any

from ...validators import safe_id
from .base import Resource


class TagResource(Resource):
    def _path(self, workspace_id: str, tag_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/tags"
        if tag_id is not None:
            path += f"/{safe_id('tagId', tag_id)}"
        return path

    def create(self, workspace_id: str, params: dict[str, Any]) -> Any:
        return self._request("POST", self._path(workspace_id), body=params)

    def update(
        self, workspace_id: str, tag_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "PATCH", self._path(workspace_id, tag_id), body=params
        )

    def delete(self, workspace_id: str, tag_id: str) -> Any:
        return self._request("DELETE", self._path(workspace_id, tag_id))
