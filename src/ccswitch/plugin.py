# Claude plugin integration sync
# ABOUTME: Mirrors the integration toggle into primaryApiKey of ~/.claude/config.json
# ABOUTME: Touches that single key only, through merge_keys
import logging
from pathlib import Path

from ccswitch.models import AppType, Provider
from ccswitch.platforms.base import merge_keys, read_json_file, write_json_file
from ccswitch.platforms.claude import get_claude_plugin_config_path
from ccswitch.settings import is_integration_enabled

logger = logging.getLogger(__name__)

PRIMARY_API_KEY = "primaryApiKey"

# ABOUTME: Marker value third-party providers need for the plugin to work
PRIMARY_API_KEY_SENTINEL = "any"


def _apply_marker(present: bool, path: Path | None = None) -> None:
    path = path if path else get_claude_plugin_config_path()
    doc = read_json_file(path)
    merge_keys(doc, {PRIMARY_API_KEY: PRIMARY_API_KEY_SENTINEL if present else None})
    write_json_file(path, doc)
    logger.debug(f"{'Set' if present else 'Cleared'} {PRIMARY_API_KEY} in {path}")


def sync_on_settings_toggle(enabled: bool, path: Path | None = None) -> None:
    """Set or clear the marker after the integration setting changed."""
    _apply_marker(enabled, path)


def sync_on_provider_switch(
    app: AppType,
    provider: Provider,
    path: Path | None = None,
    settings_path: Path | None = None,
) -> None:
    """Update the marker after switching provider.

    ABOUTME: No-op unless app is claude and the integration toggle is on
    ABOUTME: Official providers clear the marker, any other provider sets it
    ABOUTME: When it is a no-op the live file isn't created
    """
    if app is not AppType.CLAUDE:
        return
    if not is_integration_enabled(settings_path):
        return
    _apply_marker(not provider.is_official, path)
