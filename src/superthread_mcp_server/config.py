"""Configuration for the standalone Superthread MCP server.

Reads Superthread connection settings from CLI args, environment variables,
.env files, and YAML config file fallbacks.

Precedence (highest to lowest):
    CLI args > Environment variables > .env file > YAML config > Built-in defaults

Environment variables:
    SUPERTHREAD_API_KEY: Personal access token (required)
    SUPERTHREAD_API_BASE_URL: API base URL (optional, default: https://api.superthread.com/v1)
    SUPERTHREAD_ENABLED_TOOLS: Comma-separated tool domains to register (optional, default: all)
    SUPERTHREAD_LISTS_ADD_TO_TOP: Comma-separated list-name glob patterns; new cards
        in matching lists are placed at the top (optional, default: disabled)
    SUPERTHREAD_DEBUG: Enable debug logging (optional, default: false)
    SUPERTHREAD_MAX_BATCH_SIZE: Max items per batch tool call (optional, default: 100)

Workspace IDs are not configuration: every tool takes a ``workspace_id``
argument. Use the ``user_get_my_account`` tool to discover them.
"""

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from urllib.parse import urlparse

from .patterns import parse_delimited_string

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.superthread.com/v1"
DEFAULT_MAX_BATCH_SIZE = 100


@dataclass(frozen=True)
class Config:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    enabled_tools: frozenset[str] = field(default_factory=frozenset)
    lists_add_to_top: tuple[str, ...] = ()
    debug: bool = False
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE


def validate_config(config: Config) -> None:
    """Validate configuration values and raise ValueError if invalid.

    Args:
        config: Config instance to validate.

    Raises:
        ValueError: If the API key is empty, the base URL is malformed,
            or the batch size is out of range.
    """
    if not config.api_key.strip():
        raise ValueError(
            "Superthread API key cannot be empty. Set SUPERTHREAD_API_KEY environment variable."
        )

    if not config.base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"Invalid Superthread API URL '{config.base_url}': must start with http:// or https://"
        )

    parsed = urlparse(config.base_url)
    if not parsed.hostname:
        raise ValueError(
            f"Invalid Superthread API URL '{config.base_url}': URL must include a hostname"
        )

    if not (1 <= config.max_batch_size <= 1000):
        raise ValueError(
            f"Invalid max batch size {config.max_batch_size}: must be a number between 1 and 1000"
        )


def _as_list(value: str | Iterable[str] | None, transform=None) -> list[str]:
    """Normalize a delimited string or an already-split sequence."""
    if value is None:
        return []
    if isinstance(value, str):
        return parse_delimited_string(value, ",", transform)
    items = [str(v).strip() for v in value if str(v).strip()]
    return [transform(v) for v in items] if transform else items


def load_config(
    api_key: str | None = None,
    base_url: str | None = None,
    enabled_tools: str | None = None,
    lists_add_to_top: str | None = None,
    debug: bool = False,
    yaml_fallbacks: dict | None = None,
) -> Config:
    """Load configuration with unified precedence.

    Resolution order for each field (highest to lowest):
        CLI arg > env var / .env > yaml_fallbacks > built-in default

    The caller is responsible for calling ``load_dotenv()`` before this
    function so that .env values are available via ``os.getenv()``.

    Args:
        api_key: Override API key (takes precedence over env var and YAML).
        base_url: Override API base URL.
        enabled_tools: Override comma-separated enabled domains.
        lists_add_to_top: Override comma-separated list-name patterns.
        debug: Enable debug logging (CLI flag).
        yaml_fallbacks: Dict of values from the YAML ``superthread`` section.
            Used as fallback when CLI arg and env var are both unset.

    Returns:
        Validated, immutable Config instance.

    Raises:
        ValueError: If the API key is missing after checking all sources,
            or any value fails validation.
    """
    fb = yaml_fallbacks or {}

    final_key = api_key or os.getenv("SUPERTHREAD_API_KEY") or fb.get("api_key")
    if not final_key:
        raise ValueError(
            "Superthread API key not found. Set SUPERTHREAD_API_KEY environment variable, "
            "pass --api-key CLI argument, or add 'api_key' to config.yml."
        )

    final_url = (
        base_url
        or os.getenv("SUPERTHREAD_API_BASE_URL")
        or fb.get("base_url")
        or DEFAULT_BASE_URL
    )
    final_url = final_url.strip().removesuffix("/")

    # --- Delimited fields: CLI > env > YAML > empty ---
    # An env var set to "" still counts as set (explicitly disabled).

    domains_raw = enabled_tools
    if domains_raw is None:
        domains_raw = os.getenv("SUPERTHREAD_ENABLED_TOOLS")
    if domains_raw is None:
        domains_raw = fb.get("enabled_tools")
    final_domains = frozenset(_as_list(domains_raw, str.lower))

    patterns_raw = lists_add_to_top
    if patterns_raw is None:
        patterns_raw = os.getenv("SUPERTHREAD_LISTS_ADD_TO_TOP")
    if patterns_raw is None:
        patterns_raw = fb.get("lists_add_to_top")
    final_patterns = tuple(_as_list(patterns_raw))

    # --- Boolean fields: CLI > env > YAML > default ---

    if debug:
        final_debug = True
    else:
        env_debug = os.getenv("SUPERTHREAD_DEBUG")
        if env_debug is not None:
            final_debug = env_debug.lower() in ("true", "1", "yes", "on")
        else:
            final_debug = bool(fb.get("debug", False))

    # --- Numeric fields: env > YAML > default ---

    max_batch_raw = os.getenv("SUPERTHREAD_MAX_BATCH_SIZE")
    if max_batch_raw is not None:
        try:
            final_max_batch = int(max_batch_raw)
        except ValueError:
            raise ValueError(
                f"Invalid SUPERTHREAD_MAX_BATCH_SIZE '{max_batch_raw}': must be a number between 1 and 1000"
            ) from None
    elif "max_batch_size" in fb:
        final_max_batch = int(fb["max_batch_size"])
    else:
        final_max_batch = DEFAULT_MAX_BATCH_SIZE

    config = Config(
        api_key=final_key.strip(),
        base_url=final_url,
        enabled_tools=final_domains,
        lists_add_to_top=final_patterns,
        debug=final_debug,
        max_batch_size=final_max_batch,
    )

    validate_config(config)
    logger.debug(
        "Loaded config: base_url=%s enabled_tools=%s lists_add_to_top=%s",
        config.base_url,
        sorted(config.enabled_tools) or "all",
        list(config.lists_add_to_top),
    )

    return config
