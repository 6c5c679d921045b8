"""Tests for superthread_mcp_server.mcp.lifespan -- server startup/shutdown lifecycle.

Tests the server_lifespan() async context manager which:
- Loads config from env vars (with optional CLI overrides and YAML fallbacks)
- Creates SuperthreadClient and validates the API key
- Fails fast on config errors or connection failures
- Prints status messages to stderr
"""

from unittest.mock import MagicMock, patch

import pytest

from superthread_mcp_server.config import Config
from superthread_mcp_server.core.client import SuperthreadAPIError
from superthread_mcp_server.config_schema import LoggingConfig
from superthread_mcp_server.mcp.lifespan import (
    _account_label,
    load_logging_config,
    server_lifespan,
)

_MOD = "superthread_mcp_server.mcp.lifespan"


def _patches(config=None, run_sync_result=None, run_sync_error=None, client=None):
    """Common patches: no .env, no YAML files, stubbed config and client."""

    async def fake_run_sync(func, *args, **kwargs):
        if run_sync_error is not None:
            raise run_sync_error
        return run_sync_result if run_sync_result is not None else {"user": {"display_name": "Jane"}}

    return (
        patch(f"{_MOD}.load_dotenv"),
        patch(f"{_MOD}.discover_config_files", return_value=[]),
        patch(f"{_MOD}.load_config", return_value=config or Config(api_key="k")),
        patch(f"{_MOD}.SuperthreadClient", return_value=client or MagicMock()),
        patch(f"{_MOD}.run_sync", side_effect=fake_run_sync),
        patch(f"{_MOD}._stderr_print"),
    )


class TestServerLifespanSuccess:
    async def test_successful_startup(self):
        mock_client = MagicMock()
        config = Config(api_key="k")
        p_env, p_disc, p_load, p_client, p_run, p_print = _patches(config, client=mock_client)

        with p_env, p_disc, p_load, p_client, p_run as mock_run_sync, p_print:
            async with server_lifespan() as ctx:
                assert ctx["client"] is mock_client
                assert ctx["config"] is config
                mock_run_sync.assert_called_once_with(mock_client.validate_connection)

    async def test_overrides_forwarded(self):
        p_env, p_disc, p_load, p_client, p_run, p_print = _patches()
        overrides = {
            "api_key": "cli",
            "base_url": "https://x.example.com/v1",
            "enabled_tools": "cards",
            "lists_add_to_top": "Backlog",
            "debug": True,
        }

        with p_env, p_disc, p_load as mock_load, p_client, p_run, p_print:
            async with server_lifespan(config_overrides=overrides):
                pass

        mock_load.assert_called_once_with(
            api_key="cli",
            base_url="https://x.example.com/v1",
            enabled_tools="cards",
            lists_add_to_top="Backlog",
            debug=True,
            yaml_fallbacks=None,
        )

    async def test_yaml_fallbacks_passed(self, tmp_path):
        p_env, _, p_load, p_client, p_run, p_print = _patches()
        with (
            p_env,
            patch(f"{_MOD}.discover_config_files", return_value=[tmp_path / "config.yml"]),
            patch(
                f"{_MOD}.load_hierarchical_config",
                return_value={"superthread": {"api_key": "yaml_key"}},
            ),
            p_load as mock_load,
            p_client,
            p_run,
            p_print,
        ):
            async with server_lifespan():
                pass

        assert mock_load.call_args[1]["yaml_fallbacks"] == {"api_key": "yaml_key"}

    async def test_load_dotenv_called_first(self):
        p_env, p_disc, p_load, p_client, p_run, p_print = _patches()
        with p_env as mock_env, p_disc, p_load, p_client, p_run, p_print:
            async with server_lifespan():
                mock_env.assert_called_once()


class TestServerLifespanFailure:
    async def test_config_error_becomes_runtime_error(self):
        p_env, p_disc, _, p_client, p_run, p_print = _patches()
        with (
            p_env,
            p_disc,
            patch(f"{_MOD}.load_config", side_effect=ValueError("API key not found")),
            p_client as mock_client_cls,
            p_run,
            p_print,
        ):
            with pytest.raises(RuntimeError, match="Configuration error: API key not found"):
                async with server_lifespan():
                    pass
            mock_client_cls.assert_not_called()

    async def test_auth_failure_becomes_runtime_error(self):
        error = SuperthreadAPIError(401, "invalid token")
        p_env, p_disc, p_load, p_client, p_run, p_print = _patches(run_sync_error=error)
        with p_env, p_disc, p_load, p_client, p_run, p_print as mock_print:
            with pytest.raises(RuntimeError, match="Superthread connection failed") as exc_info:
                async with server_lifespan():
                    pass

        assert exc_info.value.__cause__ is error
        printed = " ".join(c.args[0] for c in mock_print.call_args_list)
        assert "SUPERTHREAD_API_KEY" in printed


class TestLoadLoggingConfig:
    def test_no_files_gives_defaults(self):
        with patch(f"{_MOD}.load_dotenv"), patch(f"{_MOD}.discover_config_files", return_value=[]):
            assert load_logging_config() == LoggingConfig()

    def test_section_read_from_yaml(self, tmp_path):
        with (
            patch(f"{_MOD}.load_dotenv"),
            patch(f"{_MOD}.discover_config_files", return_value=[tmp_path / "config.yml"]),
            patch(
                f"{_MOD}.load_hierarchical_config",
                return_value={"logging": {"level": "DEBUG", "file": "/tmp/st.log"}},
            ),
        ):
            section = load_logging_config()
        assert section.level == "DEBUG"
        assert section.file == "/tmp/st.log"

    def test_invalid_file_gives_defaults(self, tmp_path):
        with (
            patch(f"{_MOD}.load_dotenv"),
            patch(f"{_MOD}.discover_config_files", return_value=[tmp_path / "config.yml"]),
            patch(
                f"{_MOD}.load_hierarchical_config",
                return_value={"superthread": {"max_batch_size": 0}},
            ),
        ):
            assert load_logging_config() == LoggingConfig()


class TestAccountLabel:
    def test_nested_user(self):
        assert _account_label({"user": {"display_name": "Jane", "id": "u1"}}) == "Jane"

    def test_flat_fallback_to_email(self):
        assert _account_label({"email": "j@example.com"}) == "j@example.com"

    def test_unknown(self):
        assert _account_label(None) == "unknown user"
