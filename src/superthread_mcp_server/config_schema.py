"""Unified configuration schema for superthread_mcp_server.

Defines Pydantic models for the YAML config structure with dedicated
sections for the Superthread connection and logging, plus the
``yaml_fallbacks`` adapter consumed by ``config.load_config()``.

Usage:
    from superthread_mcp_server.config_schema import build_config, yaml_fallbacks

    raw = load_hierarchical_config()
    unified = build_config(raw)
    config = load_config(yaml_fallbacks=yaml_fallbacks(unified))
"""

import logging

from pydantic import BaseModel, Field, field_validator

from .patterns import parse_delimited_string

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class SuperthreadConfig(BaseModel):
    """Superthread connection settings.

    All fields are optional to support zero-config: env vars and CLI args
    can supply them at runtime instead.
    """

    api_key: str | None = Field(
        default=None, description="Superthread personal access token"
    )
    base_url: str | None = Field(
        default=None, description="Superthread API base URL"
    )
    enabled_tools: list[str] | None = Field(
        default=None,
        description="Tool domains to register (default: all)",
    )
    lists_add_to_top: list[str] | None = Field(
        default=None,
        description="List-name glob patterns where new cards go to the top",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    max_batch_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum items per batch tool call (1-1000)",
    )

    model_config = {"frozen": True}

    @field_validator("enabled_tools", "lists_add_to_top", mode="before")
    @classmethod
    def _split_string(cls, value):
        # YAML may carry either a list or a single comma-separated string;
        # "\," keeps a literal comma, as in the env vars.
        if isinstance(value, str):
            return parse_delimited_string(value)
        return value


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unset means the mode default. LOG_LEVEL takes precedence.
        file: Optional log file path. --log-file and LOG_FILE take
            precedence.
    """

    level: str | None = Field(default=None, description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level unified configuration.

    Every section has sensible defaults, so ``UnifiedConfig()``
    (zero-config) is always valid.
    """

    superthread: SuperthreadConfig = Field(default_factory=SuperthreadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the raw dict returned by
    ``load_hierarchical_config()``.

    Handles missing sections gracefully: anything absent gets defaults.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig(**raw_data)


def yaml_fallbacks(unified: UnifiedConfig) -> dict:
    """Flatten the ``superthread`` section into ``load_config`` fallbacks.

    Unset (``None``) fields are omitted so they never shadow built-in
    defaults. ``max_batch_size`` is only passed when it was explicitly set
    in the YAML file.
    """
    section = unified.superthread
    return section.model_dump(exclude_none=True, exclude_unset=True)
