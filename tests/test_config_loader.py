"""Tests for superthread_mcp_server.config_loader -- hierarchical config loading."""

import textwrap

import pytest

from superthread_mcp_server.config_loader import (
    _interpolate_recursive,
    discover_config_files,
    interpolate_env_vars,
    load_hierarchical_config,
)

# -------------------------------------------------------------------------
# Env var interpolation
# -------------------------------------------------------------------------


class TestInterpolateEnvVars:
    """Tests for ${VAR} and ${VAR:-default} substitution."""

    def test_replaces_set_var(self, monkeypatch):
        monkeypatch.setenv("ST_TOKEN", "stp_123")
        assert interpolate_env_vars("${ST_TOKEN}") == "stp_123"

    def test_unset_var_replaced_with_empty(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        assert interpolate_env_vars("${UNSET_VAR_XYZ}") == ""

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        assert interpolate_env_vars("${UNSET_VAR_XYZ:-fallback}") == "fallback"

    def test_default_ignored_when_set(self, monkeypatch):
        monkeypatch.setenv("ST_URL", "https://a")
        assert interpolate_env_vars("${ST_URL:-https://b}") == "https://a"

    def test_unclosed_left_alone(self):
        assert interpolate_env_vars("${NOT_CLOSED") == "${NOT_CLOSED"

    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("ST_TOKEN", "stp_123")
        data = {"superthread": {"api_key": "${ST_TOKEN}", "lists": ["${ST_TOKEN}"], "n": 5}}
        assert _interpolate_recursive(data) == {
            "superthread": {"api_key": "stp_123", "lists": ["stp_123"], "n": 5}
        }


# -------------------------------------------------------------------------
# Discovery and merge
# -------------------------------------------------------------------------


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty CWD and HOME so no real config files are found."""
    home = tmp_path / "home"
    cwd = tmp_path / "project"
    home.mkdir()
    cwd.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(cwd)
    monkeypatch.delenv("SUPERTHREAD_MCP_CONFIG", raising=False)
    return home, cwd


def _write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


class TestDiscoverConfigFiles:
    def test_none_found(self, isolated):
        assert discover_config_files() == []

    def test_order_env_project_global(self, isolated, tmp_path, monkeypatch):
        home, cwd = isolated
        explicit = _write(tmp_path / "explicit.yml", "superthread: {}\n")
        project = _write(cwd / ".superthread_mcp" / "config.yml", "superthread: {}\n")
        global_ = _write(home / ".config" / "superthread_mcp" / "config.yml", "superthread: {}\n")
        monkeypatch.setenv("SUPERTHREAD_MCP_CONFIG", str(explicit))

        found = discover_config_files()
        assert found[0] == explicit.resolve()
        assert found[1:] == [project, global_]


class TestLoadHierarchicalConfig:
    def test_zero_config(self, isolated):
        assert load_hierarchical_config() == {}

    def test_project_wins_over_global(self, isolated):
        home, cwd = isolated
        _write(
            home / ".config" / "superthread_mcp" / "config.yml",
            """
            superthread:
              api_key: global_key
            logging:
              level: DEBUG
            """,
        )
        _write(
            cwd / ".superthread_mcp" / "config.yml",
            """
            superthread:
              api_key: project_key
            """,
        )
        merged = load_hierarchical_config()
        assert merged["superthread"] == {"api_key": "project_key"}
        assert merged["logging"] == {"level": "DEBUG"}

    def test_interpolation_applied(self, isolated, monkeypatch):
        _, cwd = isolated
        monkeypatch.setenv("MY_ST_KEY", "stp_env")
        _write(
            cwd / ".superthread_mcp" / "config.yml",
            """
            superthread:
              api_key: ${MY_ST_KEY}
              base_url: ${MISSING_ST_URL:-https://api.superthread.com/v1}
            """,
        )
        merged = load_hierarchical_config()
        assert merged["superthread"]["api_key"] == "stp_env"
        assert merged["superthread"]["base_url"] == "https://api.superthread.com/v1"

    def test_non_dict_root_skipped(self, isolated, caplog):
        _, cwd = isolated
        _write(cwd / ".superthread_mcp" / "config.yml", "- just\n- a list\n")
        assert load_hierarchical_config() == {}
        assert "non-dict root" in caplog.text
