"""Documentation pages.

Page endpoints wrap their payload in a ``page`` (or ``pages``) envelope
which is stripped before returning.
"""

from typing import Any

from ...validators import safe_id
from .base import Resource


def _unwrap(response: Any, key: str) -> Any:
    if isinstance(response, dict) and key in response:
        return response[key]
    return response


class PageResource(Resource):
    def _path(self, workspace_id: str, page_id: str | None = None) -> str:
        path = f"/{self._workspace(workspace_id)}/pages"
        if page_id is not None:
            path += f"/{safe_id('pageId', page_id)}"
        return path

    def create(self, workspace_id: str, params: dict[str, Any]) -> Any:
        response = self._request("POST", self._path(workspace_id), body=params)
        return _unwrap(response, "page")

    def get(self, workspace_id: str, page_id: str) -> Any:
        response = self._request("GET", self._path(workspace_id, page_id))
        return _unwrap(response, "page")

    def update(
        self, workspace_id: str, page_id: str, params: dict[str, Any]
    ) -> Any:
        response = self._request(
            "PATCH", self._path(workspace_id, page_id), body=params
        )
        return _unwrap(response, "page")

    def list(
        self,
        workspace_id: str,
        project_id: str | None = None,
        archived: bool | None = None,
        updated_recently: bool | None = None,
    ) -> Any:
        response = self._request(
            "GET",
            self._path(workspace_id),
            params={
                "project_id": project_id or None,
                "archived": archived,
                "updated_recently": updated_recently,
            },
        )
        return _unwrap(response, "pages")

    def duplicate(
        self,
        workspace_id: str,
        page_id: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        response = self._request(
            "POST", f"{self._path(workspace_id, page_id)}/copy", body=params or {}
        )
        return _unwrap(response, "page")

    def archive(self, workspace_id: str, page_id: str) -> Any:
        response = self._request(
            "PUT", f"{self._path(workspace_id, page_id)}/archive"
        )
        return _unwrap(response, "page")

    def delete(self, workspace_id: str, page_id: str) -> Any:
        return self._request("DELETE", self._path(workspace_id, page_id))
