"""Lifespan management for MCP server startup and shutdown."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from dotenv import load_dotenv

from ..config import load_config
from ..config_loader import (
    discover_config_files,
    load_hierarchical_config,
)
from ..config_schema import (
    LoggingConfig,
    build_config,
    yaml_fallbacks as extract_fallbacks,
)
from ..core.async_utils import run_sync
from ..core.client import SuperthreadClient

logger = logging.getLogger(__name__)

_CREDENTIAL_HINT = "Check SUPERTHREAD_API_KEY and SUPERTHREAD_API_BASE_URL."


def _stderr_print(msg: str) -> None:
    """Print message to stderr for user feedback (safe in MCP mode)."""
    print(msg, file=sys.stderr, flush=True)


def load_logging_config() -> LoggingConfig:
    """Read the ``logging`` section of config.yml before logging is set up.

    An invalid file yields defaults here; ``server_lifespan`` reports it
    when it loads the same files.
    """
    load_dotenv()
    if not discover_config_files():
        return LoggingConfig()
    try:
        return build_config(load_hierarchical_config()).logging
    except ValueError:
        return LoggingConfig()


def _account_label(account: Any) -> str:
    """Best-effort display name for the authenticated account."""
    if isinstance(account, dict):
        user = account.get("user", account)
        if isinstance(user, dict):
            for key in ("display_name", "email", "id"):
                if user.get(key):
                    return str(user[key])
    return "unknown user"


@asynccontextmanager
async def server_lifespan(
    config_overrides: dict[str, Any] | None = None,
) -> AsyncIterator[dict[str, Any]]:
    """
    Manage server startup and shutdown lifecycle.

    On startup:
    - Load .env file (so values are available for env var lookups and YAML interpolation)
    - Load YAML config file if present (as fallback values)
    - Merge all sources via load_config(): CLI > env vars > .env > YAML > defaults
    - Create SuperthreadClient and validate the API key
    - Fail fast if Superthread is unreachable or rejects the key

    Args:
        config_overrides: Optional dict with config values from CLI
            (api_key, base_url, enabled_tools, lists_add_to_top, debug)

    Yields:
        Dict with 'client' and 'config' keys

    Raises:
        RuntimeError: If configuration is invalid or the connection check fails.
    """
    logger.info("MCP server starting...")
    _stderr_print("Superthread MCP Server starting...")

    try:
        # .env first so ${VAR} interpolation in YAML can use its values
        load_dotenv()

        fallbacks: dict[str, Any] | None = None
        config_files = discover_config_files()
        sources = []

        if config_files:
            raw = load_hierarchical_config()
            fallbacks = extract_fallbacks(build_config(raw))
            sources.append(f"config file: {config_files[0]}")

        overrides = config_overrides or {}
        config = load_config(
            api_key=overrides.get("api_key"),
            base_url=overrides.get("base_url"),
            enabled_tools=overrides.get("enabled_tools"),
            lists_add_to_top=overrides.get("lists_add_to_top"),
            debug=overrides.get("debug", False),
            yaml_fallbacks=fallbacks,
        )

        if overrides:
            sources.append("CLI arguments")
        sources.append("environment variables")
        source_desc = ", ".join(sources)
        logger.info("Configuration loaded from: %s", source_desc)
        _stderr_print(f"  Configuration loaded from: {source_desc}")
        logger.info("Superthread API: %s", config.base_url)
        _stderr_print(f"  Superthread API: {config.base_url}")
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        _stderr_print(f"ERROR: Configuration error: {e}")
        raise RuntimeError(f"Configuration error: {e}") from e

    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info("Validating Superthread API key...")
    _stderr_print("  Validating Superthread API key...")
    try:
        client = SuperthreadClient(config)
        account = await run_sync(client.validate_connection)
    except Exception as e:
        logger.error("Failed to connect to Superthread: %s", e)
        _stderr_print("ERROR: Superthread connection failed.")
        _stderr_print(f"  {e}")
        _stderr_print(f"  {_CREDENTIAL_HINT}")
        raise RuntimeError(
            f"Superthread connection failed: {e}. {_CREDENTIAL_HINT}"
        ) from e

    label = _account_label(account)
    logger.info("Authenticated as %s", label)
    _stderr_print(f"  Authenticated as {label}")
    if config.enabled_tools:
        _stderr_print(
            f"  Enabled tool domains: {', '.join(sorted(config.enabled_tools))}"
        )
    if config.lists_add_to_top:
        _stderr_print(
            f"  Lists with new cards at top: {', '.join(config.lists_add_to_top)}"
        )
    _stderr_print("Server ready. Waiting for MCP client connection...")

    yield {"client": client, "config": config}

    logger.info("MCP server shutting down")
    _stderr_print("Superthread MCP Server shutting down.")
