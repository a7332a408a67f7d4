# Tests for Codex CLI live file adapter
from pathlib import Path

import pytest
import tomli

from ccswitch.errors import ParseError
from ccswitch.models import AppType
from ccswitch.platforms.base import load_servers, save_servers
from ccswitch.platforms.codex import CodexAdapter


def test_codex_adapter_properties(home: Path) -> None:
    """Test adapter name, key and default path."""
    adapter = CodexAdapter()

    assert adapter.app is AppType.CODEX
    assert adapter.name == "Codex CLI"
    assert adapter.mcp_key == "mcp_servers"
    assert adapter.config_path == home / ".codex" / "config.toml"


def test_codex_load_empty(tmp_path: Path) -> None:
    """Test loading when config doesn't exist."""
    assert load_servers(CodexAdapter(config_path=tmp_path / "config.toml")) == {}


def test_codex_load_servers(tmp_path: Path) -> None:
    """Test loading existing servers from config."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """model = "o3"

[mcp_servers.filesystem]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-filesystem", "/projects"]

[mcp_servers.github]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-github"]
env = { GITHUB_TOKEN = "ghp_xxxx" }

[mcp_servers.remote]
url = "https://mcp.example.com"
http_headers = { Authorization = "Bearer x" }
"""
    )

    servers = load_servers(CodexAdapter(config_path=config_file))

    assert servers["filesystem"] == {
        "type": "stdio",
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-filesystem", "/projects"],
    }
    assert servers["github"]["env"] == {"GITHUB_TOKEN": "ghp_xxxx"}
    assert servers["remote"] == {
        "type": "http",
        "url": "https://mcp.example.com",
        "headers": {"Authorization": "Bearer x"},
    }


def test_codex_invalid_toml(tmp_path: Path) -> None:
    """Test invalid TOML raises ParseError."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("[mcp_servers\ncommand = ")

    with pytest.raises(ParseError, match="Invalid TOML"):
        CodexAdapter(config_path=config_file).read()


def test_codex_save_preserves_other_tables(tmp_path: Path) -> None:
    """Test unrelated keys and tables survive a save."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """model = "o3"
approval_policy = "on-request"

[profiles.fast]
model = "o4-mini"

[mcp_servers.stale]
command = "old"
"""
    )

    save_servers(
        CodexAdapter(config_path=config_file),
        {"github": {"type": "stdio", "command": "npx", "args": ["-y", "gh"], "env": {"T": "1"}}},
    )

    data = tomli.loads(config_file.read_text())
    assert data["model"] == "o3"
    assert data["approval_policy"] == "on-request"
    assert data["profiles"] == {"fast": {"model": "o4-mini"}}
    assert data["mcp_servers"] == {
        "github": {"command": "npx", "args": ["-y", "gh"], "env": {"T": "1"}}
    }


def test_codex_to_live_drops_none_and_type() -> None:
    """Test TOML output omits type and null values."""
    live = CodexAdapter().to_live({"type": "stdio", "command": "uvx", "cwd": None})
    assert live == {"command": "uvx"}


def test_codex_to_live_http() -> None:
    """Test remote servers become url + http_headers."""
    live = CodexAdapter().to_live(
        {"type": "http", "url": "https://mcp.example.com", "headers": {"A": "b"}}
    )
    assert live == {"url": "https://mcp.example.com", "http_headers": {"A": "b"}}


def test_codex_extra_fields_survive_round_trip(tmp_path: Path) -> None:
    """Test Codex-only entry settings are kept through load then save."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """[mcp_servers.docs]
command = "npx"
startup_timeout_sec = 30
enabled = false

[mcp_servers.remote]
url = "https://mcp.example.com"
bearer_token_env_var = "TOK"
tool_timeout_sec = 60
http_headers = { A = "b" }
"""
    )
    adapter = CodexAdapter(config_path=config_file)

    servers = load_servers(adapter)
    assert servers["docs"]["startup_timeout_sec"] == 30
    assert servers["remote"]["headers"] == {"A": "b"}
    assert "http_headers" not in servers["remote"]

    save_servers(adapter, servers)

    data = tomli.loads(config_file.read_text())
    assert data["mcp_servers"] == {
        "docs": {"command": "npx", "startup_timeout_sec": 30, "enabled": False},
        "remote": {
            "url": "https://mcp.example.com",
            "bearer_token_env_var": "TOK",
            "tool_timeout_sec": 60,
            "http_headers": {"A": "b"},
        },
    }
