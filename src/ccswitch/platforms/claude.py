# Claude Code live file adapter
from pathlib import Path
from typing import Any

from ccswitch.models import AppType
from ccswitch.platforms.base import (
    Document,
    LiveAdapter,
    read_json_file,
    stdio_or_http_from_live,
    write_json_file,
)


def get_claude_mcp_path() -> Path:
    """Return ~/.claude.json, the file holding Claude's mcpServers section."""
    return Path.home() / ".claude.json"


def get_claude_plugin_config_path() -> Path:
    """Return ~/.claude/config.json, the file holding primaryApiKey."""
    return Path.home() / ".claude" / "config.json"


class ClaudeAdapter(LiveAdapter):
    """Adapter for Claude Code (~/.claude.json).

    ABOUTME: Launch specs are written verbatim under 'mcpServers'
    ABOUTME: Preserves every other key (projects, oauth state, ...)
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path if config_path else get_claude_mcp_path()

    @property
    def app(self) -> AppType:
        return AppType.CLAUDE

    @property
    def name(self) -> str:
        return "Claude Code"

    @property
    def mcp_key(self) -> str:
        return "mcpServers"

    @property
    def config_path(self) -> Path:
        return self._config_path

    def read(self) -> Document:
        return read_json_file(self._config_path)

    def write(self, doc: Document) -> None:
        write_json_file(self._config_path, doc)

    def to_live(self, server: dict[str, Any]) -> dict[str, Any]:
        return dict(server)

    def from_live(self, server_id: str, data: Any) -> dict[str, Any] | None:
        return stdio_or_http_from_live(server_id, data)
