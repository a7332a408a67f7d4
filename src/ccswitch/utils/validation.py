# ABOUTME: Validation utilities for MCP server entries and the unified store
# ABOUTME: Issue records are advisory; validate_config raises on broken references
import shutil
from dataclasses import dataclass
from urllib.parse import urlparse

from ccswitch.errors import ValidationError
from ccswitch.models import AppType, McpServerEntry, UnifiedConfig


@dataclass(frozen=True)
class ServerIssue:
    """Represents a validation error or warning for one MCP server.

    ABOUTME: Uses frozen dataclass for immutability
    ABOUTME: Severity level distinguishes between blocking errors and warnings
    """
    server_id: str
    message: str
    severity: str  # 'error' or 'warning'


def validate_command_exists(command: str) -> bool:
    """Check that a command is on PATH.

    ABOUTME: Uses shutil.which() for cross-platform command lookup

    Examples:
        >>> validate_command_exists("sh")
        True
        >>> validate_command_exists("nonexistent_cmd")
        False
    """
    return shutil.which(command) is not None


def validate_server_entry(entry: McpServerEntry) -> list[ServerIssue]:
    """Validate the launch spec of an MCP server entry.

    ABOUTME: stdio needs a command (missing from PATH is only a warning)
    ABOUTME: http/sse need an http(s) URL with a host
    ABOUTME: A server enabled for no app gets a warning

    Returns:
        List of ServerIssue instances (empty if valid)
    """
    issues: list[ServerIssue] = []
    server_type = entry.server.get("type", "stdio")

    if server_type == "stdio":
        command = entry.server.get("command")
        if not isinstance(command, str) or not command:
            issues.append(ServerIssue(entry.id, "Missing 'command' for stdio server", "error"))
        elif not validate_command_exists(command):
            issues.append(ServerIssue(entry.id, f"Command not found: {command}", "warning"))
    elif server_type in ("http", "sse"):
        url = entry.server.get("url")
        parsed = urlparse(url) if isinstance(url, str) else None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
            issues.append(ServerIssue(entry.id, f"Invalid URL: {url!r}", "error"))
    else:
        issues.append(ServerIssue(entry.id, f"Unknown server type '{server_type}'", "error"))

    if not entry.apps.enabled_apps():
        issues.append(ServerIssue(entry.id, "Not enabled for any app", "warning"))

    return issues


def validate_config(config: UnifiedConfig) -> None:
    """Check referential integrity of the unified store.

    Raises:
        ValidationError: If a current provider id dangles or an entry id
            doesn't match its key
    """
    for app in AppType:
        app_config = config.app(app)
        for key, provider in app_config.providers.items():
            if provider.id != key:
                raise ValidationError(
                    f"{app.value}: provider key '{key}' doesn't match id '{provider.id}'"
                )
        current = app_config.current_provider_id
        if current is not None and current not in app_config.providers:
            raise ValidationError(
                f"{app.value}: current provider '{current}' does not exist"
            )

    for key, entry in config.mcp.servers.items():
        if entry.id != key:
            raise ValidationError(f"MCP server key '{key}' doesn't match id '{entry.id}'")
