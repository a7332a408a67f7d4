# Tests for Gemini CLI live file adapter
import json
from pathlib import Path

from ccswitch.models import AppType
from ccswitch.platforms.base import load_servers, save_servers
from ccswitch.platforms.gemini import GeminiAdapter


def test_gemini_adapter_properties(home: Path) -> None:
    """Test adapter name, app and default path."""
    adapter = GeminiAdapter()

    assert adapter.app is AppType.GEMINI
    assert adapter.name == "Gemini CLI"
    assert adapter.config_path == home / ".gemini" / "settings.json"


def test_gemini_to_live_drops_type() -> None:
    """Test stdio servers are written without a type field."""
    live = GeminiAdapter().to_live({"type": "stdio", "command": "npx", "args": ["-y", "x"]})
    assert live == {"command": "npx", "args": ["-y", "x"]}


def test_gemini_to_live_http_uses_http_url() -> None:
    """Test http servers are written with httpUrl."""
    live = GeminiAdapter().to_live(
        {"type": "http", "url": "https://mcp.example.com", "headers": {"X-Key": "1"}}
    )
    assert live == {"httpUrl": "https://mcp.example.com", "headers": {"X-Key": "1"}}


def test_gemini_load_servers(tmp_path: Path) -> None:
    """Test loading stdio, http and sse entries."""
    config_file = tmp_path / "settings.json"
    config_file.write_text(json.dumps({
        "theme": "GitHub",
        "mcpServers": {
            "local": {"command": "node", "args": ["server.js"]},
            "remote": {"httpUrl": "https://mcp.example.com"},
            "stream": {"url": "https://sse.example.com/sse"},
            "empty": {},
        },
    }))

    servers = load_servers(GeminiAdapter(config_path=config_file))

    assert servers["local"] == {"type": "stdio", "command": "node", "args": ["server.js"]}
    assert servers["remote"] == {"type": "http", "url": "https://mcp.example.com"}
    assert servers["stream"] == {"type": "sse", "url": "https://sse.example.com/sse"}
    assert "empty" not in servers


def test_gemini_save_preserves_other_settings(tmp_path: Path) -> None:
    """Test saving keeps selectedAuthType and theme."""
    config_file = tmp_path / "settings.json"
    config_file.write_text(json.dumps({"selectedAuthType": "oauth-personal", "theme": "GitHub"}))

    save_servers(
        GeminiAdapter(config_path=config_file),
        {"local": {"type": "stdio", "command": "node"}},
    )

    data = json.loads(config_file.read_text())
    assert data == {
        "selectedAuthType": "oauth-personal",
        "theme": "GitHub",
        "mcpServers": {"local": {"command": "node"}},
    }
