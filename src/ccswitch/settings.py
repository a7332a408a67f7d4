# Process-wide settings for ccswitch
# ABOUTME: Stored in ~/.cc-switch/settings.json, independent of the unified store
# ABOUTME: Unknown keys (language, ...) survive every write
import logging
from dataclasses import dataclass
from pathlib import Path

from ccswitch.config import get_settings_path
from ccswitch.errors import ParseError
from ccswitch.platforms.base import merge_keys, read_json_file, write_json_file

logger = logging.getLogger(__name__)

INTEGRATION_KEY = "enableClaudePluginIntegration"


@dataclass
class AppSettings:
    enable_claude_plugin_integration: bool = False


def load_settings(path: Path | None = None) -> AppSettings:
    """Read settings, falling back to defaults for missing keys.

    Raises:
        ParseError: If settings.json is malformed
    """
    path = path if path else get_settings_path()
    data = read_json_file(path)

    enabled = data.get(INTEGRATION_KEY, False)
    if not isinstance(enabled, bool):
        raise ParseError(f"'{INTEGRATION_KEY}' must be a boolean", path)
    return AppSettings(enable_claude_plugin_integration=enabled)


def save_settings(settings: AppSettings, path: Path | None = None) -> None:
    path = path if path else get_settings_path()
    data = read_json_file(path)
    merge_keys(data, {INTEGRATION_KEY: settings.enable_claude_plugin_integration})
    write_json_file(path, data)


def set_enable_integration(enabled: bool, path: Path | None = None) -> None:
    """Persist the Claude plugin integration toggle."""
    settings = load_settings(path)
    settings.enable_claude_plugin_integration = enabled
    save_settings(settings, path)
    logger.info(f"Claude plugin integration {'enabled' if enabled else 'disabled'}")


def is_integration_enabled(path: Path | None = None) -> bool:
    return load_settings(path).enable_claude_plugin_integration
