# ABOUTME: Shared fixtures - every test runs with HOME and the config dir inside tmp_path
import json
from pathlib import Path

import pytest

from ccswitch.config import ConfigStore
from ccswitch.models import AppType, McpApps, McpServerEntry, Provider, UnifiedConfig
from ccswitch.state import AppState


@pytest.fixture(autouse=True)
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect HOME and CC_SWITCH_CONFIG_DIR so no test touches the real home."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("CC_SWITCH_CONFIG_DIR", str(home_dir / ".cc-switch"))
    return home_dir


def make_server(server_id: str, *apps: AppType, command: str = "npx") -> McpServerEntry:
    flags = McpApps()
    for app in apps:
        flags.set_enabled(app, True)
    return McpServerEntry(
        id=server_id,
        name=server_id.title(),
        server={"type": "stdio", "command": command, "args": ["-y", f"@mcp/{server_id}"]},
        apps=flags,
    )


@pytest.fixture
def sample_config() -> UnifiedConfig:
    config = UnifiedConfig()
    config.mcp.servers["fetch"] = make_server("fetch", AppType.CLAUDE, AppType.GEMINI)
    config.mcp.servers["github"] = make_server("github", AppType.CODEX)
    claude = config.app(AppType.CLAUDE)
    claude.providers["official"] = Provider(
        id="official", name="Claude Official", category="official"
    )
    claude.providers["proxy"] = Provider(
        id="proxy",
        name="Proxy",
        settings={"env": {"ANTHROPIC_BASE_URL": "https://proxy.example.com"}},
        category="third_party",
    )
    claude.current_provider_id = "official"
    return config


@pytest.fixture
def state(sample_config: UnifiedConfig) -> AppState:
    """State whose store already holds sample_config."""
    store = ConfigStore()
    store.save(sample_config)
    return AppState.load(store)


def read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))
