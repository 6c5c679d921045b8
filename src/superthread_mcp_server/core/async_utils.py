"""Async utilities for bridging blocking HTTP calls to async MCP handlers."""

import asyncio
from typing import Any, Callable, TypeVar

T = TypeVar("T")


async def run_sync(
    func: Callable[..., T], *args: Any, **kwargs: Any
) -> T:
    """Run a synchronous function in a thread pool without blocking the event loop.

    This is used to wrap the blocking ``requests`` calls made by the resource
    clients inside async MCP tool handlers.

    Args:
        func: Synchronous function to call
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Result of func(*args, **kwargs)

    Example:
        # In MCP tool handler:
        card = await run_sync(client.cards.get, workspace_id, card_id)
    """
    return await asyncio.to_thread(func, *args, **kwargs)
