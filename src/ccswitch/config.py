# Configuration paths and unified store persistence for ccswitch
import json
import logging
import os
from pathlib import Path

from ccswitch.errors import ConfigIOError, ParseError
from ccswitch.models import AppType, UnifiedConfig
from ccswitch.platforms.base import dump_json
from ccswitch.utils.atomic import atomic_write_text
from ccswitch.utils.validation import validate_config

logger = logging.getLogger(__name__)

# ABOUTME: Environment variable that relocates the whole config directory
CONFIG_DIR_ENV = "CC_SWITCH_CONFIG_DIR"

CONFIG_FILENAME = "config.json"
SETTINGS_FILENAME = "settings.json"
BACKUP_DIRNAME = "backups"


def get_config_dir() -> Path:
    """Return the ccswitch config directory.

    ABOUTME: $CC_SWITCH_CONFIG_DIR if set, else ~/.cc-switch
    ABOUTME: Resolved on every call so HOME changes are honoured
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".cc-switch"


def get_config_path() -> Path:
    """Return the path to the unified store (may not exist yet)."""
    return get_config_dir() / CONFIG_FILENAME


def get_settings_path() -> Path:
    """Return the path to the process-wide settings file."""
    return get_config_dir() / SETTINGS_FILENAME


def parse_config_text(text: str, path: Path | None = None) -> UnifiedConfig:
    """Parse unified store JSON text.

    Raises:
        ParseError: If the text isn't JSON or doesn't match the schema
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}", path) from e

    try:
        return UnifiedConfig.from_dict(data)
    except ParseError as e:
        if path is not None and e.path is None:
            raise ParseError(str(e), path) from e
        raise


def read_config_file(path: Path) -> UnifiedConfig:
    """Read and parse a unified store document from any path.

    Raises:
        ConfigIOError: If the file is missing or unreadable
        ParseError: If the content is invalid
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigIOError(path, f"read failed: {e}") from e
    return parse_config_text(text, path)


class ConfigStore:
    """Load/save of the unified store document.

    ABOUTME: load() returns a default config when the file is absent
    ABOUTME: save() replaces the file atomically (temp file + rename)
    ABOUTME: Two processes saving concurrently race; last writer wins
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path else get_config_path()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> UnifiedConfig:
        """Load the unified store.

        Returns:
            Parsed config, or an empty default if the file doesn't exist

        Raises:
            ParseError: If the file exists but is invalid
            ConfigIOError: If the file exists but can't be read
        """
        if not self.path.exists():
            logger.debug(f"No config at {self.path}, using defaults")
            return UnifiedConfig()
        return read_config_file(self.path)

    def save(self, config: UnifiedConfig) -> None:
        """Serialize config and atomically replace the stored document.

        Raises:
            ValidationError: If config has dangling references (nothing is written)
            ConfigIOError: If the file can't be written
        """
        validate_config(config)
        atomic_write_text(self.path, dump_json(config.to_dict()))
        logger.info(f"Saved config to {self.path}")

    def export_to(self, target: Path) -> None:
        """Copy the persisted store to target.

        ABOUTME: Copies the file verbatim; writes the default config if none exists yet
        """
        if self.path.exists():
            try:
                content = self.path.read_text(encoding="utf-8")
            except OSError as e:
                raise ConfigIOError(self.path, f"read failed: {e}") from e
        else:
            content = dump_json(UnifiedConfig().to_dict())
        atomic_write_text(target, content)
        logger.info(f"Exported config to {target}")


def get_config_summary(config: UnifiedConfig) -> dict[str, int]:
    """Count providers per app and MCP servers.

    Examples:
        >>> get_config_summary(UnifiedConfig())
        {'claude': 0, 'codex': 0, 'gemini': 0, 'mcp': 0}
    """
    summary = {app.value: len(config.app(app).providers) for app in AppType}
    summary["mcp"] = len(config.mcp.servers)
    return summary
