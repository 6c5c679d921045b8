from typing import Any

from ...validators import safe_id
from .base import Resource


class UserResource(Resource):
    def get_my_account(self) -> Any:
        """Authenticated user, including the workspaces (teams) they belong to."""
        return self._request("GET", "/users/me")

    def get_members(self, workspace_id: str) -> list[dict[str, Any]]:
        """
        List active members of a workspace.

        The response splits people into ``members``, ``inactive``,
        ``invited`` and ``robots``; only ``members`` is returned.
        """
        ws = safe_id("workspaceId", workspace_id)
        response = self._request("GET", f"/teams/{ws}/members")
        if not isinstance(response, dict):
            return []
        return response.get("members") or []
