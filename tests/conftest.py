"""Shared pytest fixtures for superthread-mcp-server tests."""

from unittest.mock import MagicMock

import pytest

from superthread_mcp_server.config import Config


def pytest_addoption(parser):
    """Add custom CLI options for test filtering."""
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run tests that require a live Superthread workspace",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "live: mark test as requiring a live Superthread workspace"
    )


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --run-live is passed."""
    if config.getoption("--run-live"):
        return
    skip_live = pytest.mark.skip(reason="need --run-live option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def mock_config():
    """Create a Config instance for testing."""
    return Config(api_key="stp_test_key")


@pytest.fixture
def mock_client(mock_config):
    """Create a SuperthreadClient mock with every resource attribute mocked."""
    from superthread_mcp_server.core.client import SuperthreadClient

    client = MagicMock(spec=SuperthreadClient)
    client.config = mock_config
    for name in (
        "users",
        "projects",
        "spaces",
        "boards",
        "cards",
        "sprints",
        "search",
        "pages",
        "comments",
        "notes",
        "tags",
    ):
        setattr(client, name, MagicMock())
    return client


@pytest.fixture
def mock_response():
    """Factory fixture for creating requests.Response mocks."""

    def _create_response(status_code=200, json_data=None, text=None, headers=None):
        from unittest.mock import Mock

        response = Mock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        response.headers = headers or {}
        if text is None:
            import json

            text = "" if json_data is None else json.dumps(json_data)
        response.text = text
        response.json.return_value = json_data
        return response

    return _create_response
