"""
Tests for async_utils module.

Covers run_sync.
"""

import threading

import pytest

from superthread_mcp_server.core.async_utils import run_sync


def _sync_add(a: int, b: int) -> int:
    """Simple sync function for testing."""
    return a + b


async def test_run_sync_calls_function():
    """run_sync delegates to asyncio.to_thread with correct args."""
    result = await run_sync(_sync_add, 3, 4)
    assert result == 7


async def test_run_sync_passes_kwargs():
    """run_sync forwards keyword arguments."""

    def _kw_func(*, name: str) -> str:
        return f"hello {name}"

    result = await run_sync(_kw_func, name="world")
    assert result == "hello world"


async def test_run_sync_uses_worker_thread():
    """The blocking call does not run on the event loop thread."""
    loop_thread = threading.get_ident()
    worker_thread = await run_sync(threading.get_ident)
    assert worker_thread != loop_thread


async def test_run_sync_propagates_exceptions():
    def _boom():
        raise ValueError("bad input")

    with pytest.raises(ValueError, match="bad input"):
        await run_sync(_boom)
