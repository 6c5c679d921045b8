from typing import Any

from ...validators import safe_id
from .base import Resource


class NoteResource(Resource):
    def _path(self, workspace_id: str, note_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/notes"
        if note_id is not None:
            path += f"/{safe_id('noteId', note_id)}"
        return path

    def create(self, workspace_id: str, params: dict[str, Any]) -> Any:
        return self._request("POST", self._path(workspace_id), body=params)

    def get(self, workspace_id: str, note_id: str) -> Any:
        return self._request("GET", self._path(workspace_id, note_id))

    def list(self, workspace_id: str) -> Any:
        return self._request("GET", self._path(workspace_id))

    def delete(self, workspace_id: str, note_id: str) -> Any:
        return self._request("DELETE", self._path(workspace_id, note_id))
