# Gemini CLI live file adapter
from pathlib import Path
from typing import Any

from ccswitch.models import AppType
from ccswitch.platforms.base import Document, LiveAdapter, read_json_file, write_json_file


class GeminiAdapter(LiveAdapter):
    """Adapter for Gemini CLI (~/.gemini/settings.json).

    ABOUTME: Preserves other settings like selectedAuthType, theme
    ABOUTME: Gemini has no 'type' field - http servers use httpUrl, sse servers use url
    """

    def __init__(self, config_path: Path | None = None) -> None:
        if config_path:
            self._config_path = config_path
        else:
            self._config_path = Path.home() / ".gemini" / "settings.json"

    @property
    def app(self) -> AppType:
        return AppType.GEMINI

    @property
    def name(self) -> str:
        return "Gemini CLI"

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
        result = {k: v for k, v in server.items() if k != "type"}
        if server.get("type") == "http" and "url" in result:
            result["httpUrl"] = result.pop("url")
        return result

    def from_live(self, server_id: str, data: Any) -> dict[str, Any] | None:
        if not isinstance(data, dict):
            return None

        spec = {k: v for k, v in data.items() if k not in ("type", "httpUrl")}
        if isinstance(data.get("httpUrl"), str):
            spec["type"] = "http"
            spec["url"] = data["httpUrl"]
        elif isinstance(data.get("url"), str):
            spec["type"] = "sse"
        elif isinstance(data.get("command"), str):
            spec["type"] = "stdio"
        else:
            return None
        return spec
