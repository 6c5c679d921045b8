import logging
import threading
from typing import Any, Union

import requests

from ..config import Config
from .resources import (
    BoardResource,
    CardResource,
    CommentResource,
    NoteResource,
    PageResource,
    ProjectResource,
    SearchResource,
    SpaceResource,
    SprintResource,
    TagResource,
    UserResource,
)

logger = logging.getLogger(__name__)

# Payloads are passed through to the MCP client untouched.
JSONValue = Union[
    None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]
]

REQUEST_TIMEOUT = (10, 60)


class SuperthreadAPIError(Exception):
    """Non-2xx response from the Superthread API."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Superthread API error ({status_code}): {body}")


def _encode_params(params: dict[str, Any] | None) -> dict[str, str]:
    """Render query parameters the way the API expects them.

    ``None`` values are dropped, booleans become ``"true"``/``"false"`` and
    sequences are joined with commas.
    """
    if not params:
        return {}
    encoded: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            encoded[key] = ",".join(str(v) for v in value)
        else:
            encoded[key] = str(value)
    return encoded


class SuperthreadClient:
    def __init__(self, config: Config):
        self.config = config
        self._thread_local = threading.local()

        self.users = UserResource(self)
        self.projects = ProjectResource(self)
        self.spaces = SpaceResource(self)
        self.boards = BoardResource(self)
        self.cards = CardResource(self)
        self.sprints = SprintResource(self)
        self.search = SearchResource(self)
        self.pages = PageResource(self)
        self.comments = CommentResource(self)
        self.notes = NoteResource(self)
        self.tags = TagResource(self)

    @property
    def session(self) -> requests.Session:
        """Current thread's session."""
        return self._get_session()

    def _get_session(self) -> requests.Session:
        """Get or create a thread-local requests.Session."""
        if not hasattr(self._thread_local, "session"):
            self._thread_local.session = self._create_session()
        return self._thread_local.session

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
            }
        )
        return session

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: JSONValue = None,
    ) -> JSONValue:
        """
        Make a single request to the Superthread API.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE)
            path: Path below the configured base URL, already sanitized
            params: Optional query parameters
            body: Optional JSON body

        Returns:
            Decoded JSON response, or ``{"success": True}`` for empty bodies

        Raises:
            SuperthreadAPIError: If the API answers with a non-2xx status
            requests.RequestException: On network failures
        """
        url = f"{self.config.base_url}{path}"
        logger.debug("Superthread %s %s", method, path)

        response = self._get_session().request(
            method,
            url,
            params=_encode_params(params),
            json=body,
            timeout=REQUEST_TIMEOUT,
        )

        if not response.ok:
            logger.debug(
                "Superthread %s %s failed with %s",
                method,
                path,
                response.status_code,
            )
            raise SuperthreadAPIError(response.status_code, response.text)

        if (
            response.status_code == 204
            or response.headers.get("Content-Length") == "0"
        ):
            return {"success": True}

        if not response.text or not response.text.strip():
            return {"success": True}

        return response.json()

    def validate_connection(self) -> JSONValue:
        """Fetch the authenticated account to confirm the API key works."""
        return self.users.get_my_account()
