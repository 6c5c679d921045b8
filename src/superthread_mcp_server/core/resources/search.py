from typing import Any

from .base import Resource


class SearchResource(Resource):
    def search(
        self,
        workspace_id: str,
        query: str,
        field: str | None = None,
        types: list[str] | None = None,
        statuses: list[str] | None = None,
        project_id: str | None = None,
        archived: bool | None = None,
        grouped: bool | None = None,
        cursor: str | None = None,
    ) -> Any:
        """
        Full-text search across boards, cards, pages, projects and notes.

        Args:
            workspace_id: Workspace to search
            query: Search text
            field: Restrict matching to "title" or "content"
            types: Entity types to include
            statuses: Card statuses to include
            project_id: Restrict to one space
            archived: Include archived entities
            grouped: Group results by entity type
            cursor: Pagination cursor from a previous response
        """
        return self._request(
            "GET",
            f"/{self._workspace(workspace_id)}/search",
            params={
                "query": query,
                "fields": field,
                "types": types,
                "statuses": statuses,
                "project_id": project_id,
                "archived": archived,
                "grouped": grouped,
                "cursor": cursor or None,
            },
        )
