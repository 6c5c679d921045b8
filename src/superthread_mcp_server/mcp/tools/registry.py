"""ToolSpec and ToolRegistry for domain-based tool filtering.

This module provides a centralized registry for MCP tools that supports
filtering by tool domain, enabling operators to restrict which tools are
exposed to AI agents (``SUPERTHREAD_ENABLED_TOOLS``).

Key concepts:
- ToolSpec: Immutable dataclass linking a Tool definition, its domain,
  and an async handler with standardized signature (client, args) -> CallToolResult.
- ToolRegistry: Filters specs by enabled domains at construction time,
  then provides list_tools() and call_tool() dispatch with error translation.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

import mcp.types as types
import requests

from ...core.client import SuperthreadAPIError, SuperthreadClient
from ...validators import PathValidationError
from .batch import BatchItemError
from .constants import DOMAINS
from .errors import (
    action_for,
    build_error_response,
    error_type_for_status,
    translate_api_error,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Immutable specification for a single MCP tool.

    Attributes:
        tool: The MCP Tool definition (name, title, description, inputSchema).
        domain: Tool domain used for enable/disable filtering and for
            picking corrective actions in error responses.
        handler: Async handler with signature (client, args) -> CallToolResult.
    """

    tool: types.Tool
    domain: str
    handler: Callable[[SuperthreadClient, dict], Awaitable[types.CallToolResult]]


def _classify(exc: BaseException) -> str:
    """Map an exception raised by a handler to an error category."""
    match exc:
        case PathValidationError():
            return "validation_error"
        case SuperthreadAPIError(status_code=status):
            return error_type_for_status(status)
        case ValueError():
            return "validation_error"
        case requests.RequestException():
            return "connection_error"
        case _:
            return "server_error"


class ToolRegistry:
    """Registry of ToolSpecs with optional domain filtering.

    If enabled_domains is empty or None, all specs are included. Otherwise,
    a spec is included only if its domain is in enabled_domains.
    """

    def __init__(
        self,
        specs: Iterable[ToolSpec],
        enabled_domains: Iterable[str] | None = None,
    ):
        enabled = frozenset(enabled_domains or ())
        unknown = sorted(enabled - set(DOMAINS))
        if unknown:
            logger.warning(
                "Ignoring unknown tool domains: %s (known: %s)",
                ", ".join(unknown),
                ", ".join(DOMAINS),
            )

        self._specs: dict[str, ToolSpec] = {}
        for spec in specs:
            if not enabled or spec.domain in enabled:
                self._specs[spec.tool.name] = spec

    def list_tools(self) -> list[types.Tool]:
        """Return list of types.Tool for all registered (enabled) specs."""
        return [spec.tool for spec in self._specs.values()]

    def tool_count(self) -> int:
        """Return number of registered tools."""
        return len(self._specs)

    async def call_tool(
        self,
        name: str,
        arguments: dict | None,
        client: SuperthreadClient,
    ) -> types.CallToolResult:
        """Dispatch tool call to registered handler.

        Provides centralized error handling for sanitizer rejections, API
        errors, batch failures, network errors, and unexpected exceptions,
        translating them into structured CallToolResult responses with
        corrective actions.

        Args:
            name: Tool name to invoke.
            arguments: Tool arguments (may be None).
            client: SuperthreadClient instance.

        Returns:
            CallToolResult from the handler.

        Raises:
            ValueError: If tool name is not registered (unknown or disabled).
        """
        spec = self._specs.get(name)
        if spec is None:
            raise ValueError(f"Unknown tool: {name}")
        args = arguments or {}
        try:
            return await spec.handler(client, args)
        except BatchItemError as e:
            error_type = _classify(e.cause)
            logger.warning("Batch %s stopped: %s", name, e)
            return build_error_response(
                error_type, str(e), action_for(error_type, spec.domain)
            )
        except SuperthreadAPIError as e:
            logger.warning(
                "Superthread API error in %s: %s", name, e.status_code
            )
            return translate_api_error(e, spec.domain)
        except (ValueError, requests.RequestException) as e:
            error_type = _classify(e)
            return build_error_response(
                error_type, str(e), action_for(error_type, spec.domain)
            )
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            return build_error_response(
                "server_error", str(e), action_for("server_error", spec.domain)
            )
