"""Comments on cards and pages, and their threaded replies (``children``)."""

from typing import Any

from ...validators import safe_id
from .base import Resource


class CommentResource(Resource):
    def _path(self, workspace_id: str, comment_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/comments"
        if comment_id is not None:
            path += f"/{safe_id('commentId', comment_id)}"
        return path

    def _reply_path(
        self, workspace_id: str, comment_id: str, reply_id: str
    ) -> str:
        reply = safe_id("replyId", reply_id)
        return f"{self._path(workspace_id, comment_id)}/children/{reply}"

    def create(self, workspace_id: str, params: dict[str, Any]) -> Any:
        return self._request("POST", self._path(workspace_id), body=params)

    def get(self, workspace_id: str, comment_id: str) -> Any:
        return self._request("GET", self._path(workspace_id, comment_id))

    def update(
        self, workspace_id: str, comment_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "PATCH", self._path(workspace_id, comment_id), body=params
        )

    def delete(self, workspace_id: str, comment_id: str) -> Any:
        return self._request("DELETE", self._path(workspace_id, comment_id))

    def get_replies(self, workspace_id: str, comment_id: str) -> Any:
        return self._request(
            "GET", f"{self._path(workspace_id, comment_id)}/children"
        )

    def create_reply(
        self, workspace_id: str, comment_id: str, params: dict[str, Any]
    ) -> Any:
        return self._request(
            "POST", f"{self._path(workspace_id, comment_id)}/children", body=params
        )

    def update_reply(
        self,
        workspace_id: str,
        comment_id: str,
        reply_id: str,
        params: dict[str, Any],
    ) -> Any:
        return self._request(
            "PATCH",
            self._reply_path(workspace_id, comment_id, reply_id),
            body=params,
        )

    def delete_reply(
        self, workspace_id: str, comment_id: str, reply_id: str
    ) -> Any:
        return self._request(
            "DELETE", self._reply_path(workspace_id, comment_id, reply_id)
        )
