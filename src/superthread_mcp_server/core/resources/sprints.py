from typing import Any

from ...validators import safe_id
from .base import Resource


class SprintResource(Resource):
    def list(self, workspace_id: str, space_id: str) -> Any:
        """Sprints are listed as part of the owning space."""
        space = safe_id("spaceId", space_id)
        return self._request("GET", f"/{self._workspace(workspace_id)}/projects/{space}")

    def get(self, workspace_id: str, sprint_id: str, space_id: str) -> Any:
        """Sprint with its lists. ``space_id`` goes in the query, sanitized."""
        sprint = safe_id("sprintId", sprint_id)
        return self._request(
            "GET",
            f"/{self._workspace(workspace_id)}/sprints/{sprint}",
            params={"project_id": safe_id("spaceId", space_id)},
        )
