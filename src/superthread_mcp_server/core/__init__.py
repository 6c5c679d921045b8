"""Core Superthread API client shared by the MCP tool handlers."""

from .async_utils import run_sync
from .client import JSONValue, SuperthreadAPIError, SuperthreadClient

__all__ = ["JSONValue", "SuperthreadAPIError", "SuperthreadClient", "run_sync"]
