# Live file adapter primitives
# ABOUTME: The only code that reads or writes application live files
# ABOUTME: merge_keys is the single place where "preserve unknown keys" is enforced
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ccswitch.errors import ConfigIOError, ParseError
from ccswitch.models import AppType
from ccswitch.utils.atomic import atomic_write_text

logger = logging.getLogger(__name__)

# ABOUTME: Live documents are plain JSON/TOML objects
Document = dict[str, Any]


def read_json_file(path: Path) -> Document:
    """Read a JSON object from path, or {} if the file doesn't exist.

    Raises:
        ParseError: If the file isn't valid JSON or isn't an object
        ConfigIOError: If the file exists but can't be read
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigIOError(path, f"read failed: {e}") from e

    # An empty file is treated like a missing one
    if not text.strip():
        return {}

    try:
        result = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}", path) from e

    if not isinstance(result, dict):
        raise ParseError(f"Expected a JSON object, got {type(result).__name__}", path)
    return result


def dump_json(data: Mapping[str, Any]) -> str:
    """Serialize with stable, human-readable formatting.

    ABOUTME: 2-space indent, insertion order kept, trailing newline
    """
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json_file(path: Path, data: Mapping[str, Any]) -> None:
    """Write JSON object to path atomically, creating parent directories."""
    atomic_write_text(path, dump_json(data))
    logger.debug(f"Wrote {path}")


def merge_keys(doc: Document, updates: Mapping[str, Any | None]) -> Document:
    """Apply selective key updates to a document.

    ABOUTME: A value sets/replaces the key wholesale; None removes it
    ABOUTME: Every other key is left untouched and keeps its position
    ABOUTME: Returns the updated document; nothing is written

    Args:
        doc: Parsed live document (mutated in place and returned)
        updates: Mapping of key -> new value, or None to delete

    Examples:
        >>> merge_keys({"foo": "bar", "old": 1}, {"old": None, "new": 2})
        {'foo': 'bar', 'new': 2}
    """
    for key, value in updates.items():
        if value is None:
            doc.pop(key, None)
        else:
            doc[key] = value
    return doc


@runtime_checkable
class LiveAdapter(Protocol):
    """Protocol for per-application live config adapters.

    ABOUTME: Each adapter knows its file location, file format and MCP section shape
    ABOUTME: Launch specs are translated to/from the app's own MCP entry format
    """

    @property
    def app(self) -> AppType:
        """Application this adapter writes for."""
        ...

    @property
    def name(self) -> str:
        """Human-readable application name."""
        ...

    @property
    def mcp_key(self) -> str:
        """Reserved key holding the MCP servers section."""
        ...

    @property
    def config_path(self) -> Path:
        """Path of the live file holding the MCP section."""
        ...

    def read(self) -> Document:
        """Read the whole live document ({} if missing)."""
        ...

    def write(self, doc: Document) -> None:
        """Write the whole live document."""
        ...

    def to_live(self, server: dict[str, Any]) -> dict[str, Any]:
        """Translate a unified launch spec into this app's entry format."""
        ...

    def from_live(self, server_id: str, data: Any) -> dict[str, Any] | None:
        """Translate a live entry into a unified launch spec (None if unusable)."""
        ...


def load_servers(adapter: LiveAdapter) -> dict[str, dict[str, Any]]:
    """Read the MCP section of an adapter's live file as unified launch specs.

    ABOUTME: Entries the adapter can't translate are skipped with a warning

    Raises:
        ParseError: If the live file or its MCP section is malformed
    """
    doc = adapter.read()
    section = doc.get(adapter.mcp_key)
    # null is written by some apps for "no servers"
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ParseError(
            f"'{adapter.mcp_key}' must be an object, got {type(section).__name__}",
            adapter.config_path,
        )

    servers: dict[str, dict[str, Any]] = {}
    for server_id, data in section.items():
        spec = adapter.from_live(server_id, data)
        if spec is None:
            logger.warning(
                f"Skipping unusable MCP entry '{server_id}' in {adapter.config_path}"
            )
            continue
        servers[server_id] = spec
    return servers


def save_servers(adapter: LiveAdapter, servers: Mapping[str, dict[str, Any]]) -> None:
    """Replace the MCP section of an adapter's live file.

    ABOUTME: Whole-section replace through merge_keys; other keys survive untouched
    ABOUTME: An empty mapping writes an explicit empty section
    """
    doc = adapter.read()
    section = {server_id: adapter.to_live(spec) for server_id, spec in servers.items()}
    merge_keys(doc, {adapter.mcp_key: section})
    adapter.write(doc)


def stdio_or_http_from_live(server_id: str, data: Any) -> dict[str, Any] | None:
    """Translate a JSON-style MCP entry (Claude/Gemini shape) to a launch spec.

    ABOUTME: Missing type means stdio; requires command for stdio, url for http/sse
    """
    if not isinstance(data, dict):
        return None

    server_type = data.get("type", "stdio")
    if server_type == "stdio":
        if not isinstance(data.get("command"), str):
            return None
    elif server_type in ("http", "sse"):
        if not isinstance(data.get("url"), str):
            return None
    else:
        return None

    spec = dict(data)
    spec["type"] = server_type
    return spec
