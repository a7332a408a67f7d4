# Codex CLI live file adapter
import logging
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from ccswitch.errors import ConfigIOError, ParseError
from ccswitch.models import AppType
from ccswitch.platforms.base import Document, LiveAdapter
from ccswitch.utils.atomic import atomic_write_text

logger = logging.getLogger(__name__)

# ABOUTME: Unified key -> Codex key for remote server headers
HEADER_KEYS = {"headers": "http_headers"}


class CodexAdapter(LiveAdapter):
    """Adapter for Codex CLI (~/.codex/config.toml).

    ABOUTME: Uses snake_case mcp_servers key (not mcpServers)
    ABOUTME: Whole document round-trips through tomli/tomli_w so unrelated tables survive
    ABOUTME: Entries round-trip with every key; only headers <-> http_headers is renamed
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path if config_path else Path.home() / ".codex" / "config.toml"

    @property
    def app(self) -> AppType:
        return AppType.CODEX

    @property
    def name(self) -> str:
        return "Codex CLI"

    @property
    def mcp_key(self) -> str:
        return "mcp_servers"

    @property
    def config_path(self) -> Path:
        return self._config_path

    def read(self) -> Document:
        """Read config.toml, or {} if it doesn't exist.

        Raises:
            ParseError: If the TOML is invalid
            ConfigIOError: If the file can't be read
        """
        if not self._config_path.exists():
            return {}

        try:
            with open(self._config_path, "rb") as f:
                return tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ParseError(f"Invalid TOML: {e}", self._config_path) from e
        except OSError as e:
            raise ConfigIOError(self._config_path, f"read failed: {e}") from e

    def write(self, doc: Document) -> None:
        atomic_write_text(self._config_path, tomli_w.dumps(doc))
        logger.debug(f"Wrote {self._config_path}")

    def to_live(self, server: dict[str, Any]) -> dict[str, Any]:
        # TOML has no null; every other key is written through
        result: dict[str, Any] = {}
        for key, value in server.items():
            if key == "type" or value is None:
                continue
            result[HEADER_KEYS.get(key, key)] = value
        return result

    def from_live(self, server_id: str, data: Any) -> dict[str, Any] | None:
        if not isinstance(data, dict):
            return None

        if isinstance(data.get("command"), str):
            server_type = "stdio"
        elif isinstance(data.get("url"), str):
            server_type = "http"
        else:
            return None

        spec: dict[str, Any] = {"type": server_type}
        for key, value in data.items():
            spec["headers" if key == "http_headers" else key] = value
        return spec
