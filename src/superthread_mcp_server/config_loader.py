"""
Hierarchical configuration loader for superthread_mcp_server.

Provides convention-based config file discovery, env var interpolation,
and hierarchical merge with "project wins" semantics.

Usage:
    from superthread_mcp_server.config_loader import load_hierarchical_config

    config = load_hierarchical_config()
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 1. Env var interpolation
# ---------------------------------------------------------------------------

# Matches ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+?)(?::-(.*?))?\}")


def interpolate_env_vars(value: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-default}`` patterns with env values.

    * ``${VAR}`` is replaced with ``os.environ.get(VAR, "")``.
    * ``${VAR:-default}`` uses *default* when VAR is unset or empty.
    * Literal ``${`` with no closing ``}`` is left untouched.
    """

    def _replace(match: re.Match) -> str:
        env_val = os.environ.get(match.group(1))
        if env_val:
            return env_val
        return match.group(2) or ""

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _interpolate_recursive(obj: Any) -> Any:
    """Walk a nested dict/list and interpolate env vars in all strings."""
    if isinstance(obj, str):
        return interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _interpolate_recursive(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_interpolate_recursive(item) for item in obj]
    return obj


# ---------------------------------------------------------------------------
# 2. Convention-based file discovery
# ---------------------------------------------------------------------------


def discover_config_files() -> list[Path]:
    """Return existing config file paths in precedence order (highest first).

    Search order:
        1. ``SUPERTHREAD_MCP_CONFIG`` env var (explicit single path)
        2. ``.superthread_mcp/config.yml`` in CWD (project-level)
        3. ``~/.config/superthread_mcp/config.yml`` (XDG global)

    Only paths that exist on disk are returned.
    """
    candidates: list[Path] = []

    env_path = os.environ.get("SUPERTHREAD_MCP_CONFIG")
    if env_path:
        candidates.append(Path(env_path).expanduser().resolve())

    candidates.append(Path.cwd() / ".superthread_mcp" / "config.yml")
    candidates.append(
        Path.home() / ".config" / "superthread_mcp" / "config.yml"
    )

    return [p for p in candidates if p.exists()]


# ---------------------------------------------------------------------------
# 3. Hierarchical merge
# ---------------------------------------------------------------------------


def load_hierarchical_config() -> dict[str, Any]:
    """Load and merge all discovered config files.

    Files are loaded from lowest precedence to highest. Each file's
    top-level keys **replace** (not deep-merge) those from earlier files.
    Env var interpolation is applied to all string values after merging.

    Returns an empty dict when no config files exist (zero-config).
    """
    paths = discover_config_files()

    if not paths:
        logger.debug("No config files found, using zero-config defaults")
        return {}

    merged: dict[str, Any] = {}
    for path in reversed(paths):
        logger.debug("Loading config: %s", path)
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except Exception:
            logger.exception("Failed to load config file %s", path)
            raise

        if isinstance(data, dict):
            merged.update(data)
        elif data is not None:
            logger.warning(
                "Config file %s has non-dict root (%s), skipping",
                path,
                type(data).__name__,
            )

    return _interpolate_recursive(merged)
