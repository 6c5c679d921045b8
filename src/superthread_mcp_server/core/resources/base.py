"""Shared plumbing for the Superthread resource clients."""

from typing import TYPE_CHECKING, Any

from ...validators import safe_id

if TYPE_CHECKING:
    from ..client import JSONValue, SuperthreadClient


class Resource:
    """Groups the operations on one entity family.

    Resources are namespaces, not caches: every method issues a fresh
    request through the owning client.
    """

    def __init__(self, client: "SuperthreadClient"):
        self._client = client

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> "JSONValue":
        return self._client.request(method, path, params=params, body=body)

    @staticmethod
    def _workspace(workspace_id: str) -> str:
        # The API calls a workspace a "team"; it is always the first segment.
        return safe_id("workspaceId", workspace_id)
