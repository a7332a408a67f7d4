# ABOUTME: Backup utilities for the unified store
# ABOUTME: Snapshots precede import, restore and reset; backups are never pruned
import logging
import re
import shutil
from datetime import datetime
from pathlib import Path

from ccswitch.config import get_config_dir, get_config_path, parse_config_text
from ccswitch.errors import ConfigIOError, NotFoundError
from ccswitch.models import UnifiedConfig
from ccswitch.platforms.base import dump_json
from ccswitch.state import AppState
from ccswitch.utils.atomic import atomic_write_text
from ccswitch.utils.validation import validate_config

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "backup"

# Pattern matches: backup_{YYYYMMDD}_{HHMMSS}[_{N}].json
BACKUP_PATTERN = re.compile(r"^backup_(\d{8}_\d{6})(?:_(\d+))?\.json$")


def get_backup_dir() -> Path:
    """Get the default backup directory path.

    ABOUTME: Returns ~/.cc-switch/backups (or under $CC_SWITCH_CONFIG_DIR)
    ABOUTME: Does not create the directory
    """
    return get_config_dir() / "backups"


def _next_backup_id(backup_dir: Path) -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_id = f"{BACKUP_PREFIX}_{timestamp}"
    counter = 1
    while (backup_dir / f"{backup_id}.json").exists():
        counter += 1
        backup_id = f"{BACKUP_PREFIX}_{timestamp}_{counter}"
    return backup_id


def create_backup(source_path: Path | None = None, backup_dir: Path | None = None) -> str:
    """Create a timestamped backup of a file.

    ABOUTME: Backup format: backup_{YYYYMMDD}_{HHMMSS}[_{N}].json
    ABOUTME: Uses shutil.copy2() to preserve file metadata
    ABOUTME: A missing source is backed up as the default (empty) config,
    ABOUTME: so restoring it gives the same state as "file did not exist"

    Args:
        source_path: File to back up (defaults to the unified store)
        backup_dir: Where to put the backup (defaults to get_backup_dir())

    Returns:
        Backup id (file stem inside backup_dir)

    Raises:
        ConfigIOError: If the source can't be read or the backup can't be written

    Examples:
        >>> create_backup()
        'backup_20261016_143022'
    """
    source_path = source_path if source_path else get_config_path()
    backup_dir = backup_dir if backup_dir else get_backup_dir()

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigIOError(backup_dir, f"cannot create backup directory: {e}") from e

    backup_id = _next_backup_id(backup_dir)
    backup_path = backup_dir / f"{backup_id}.json"

    if source_path.exists():
        try:
            shutil.copy2(source_path, backup_path)
        except OSError as e:
            raise ConfigIOError(source_path, f"backup failed: {e}") from e
    else:
        atomic_write_text(backup_path, dump_json(UnifiedConfig().to_dict()))

    logger.debug(f"Created backup {backup_path}")
    return backup_id


def get_backup_path(backup_id: str, backup_dir: Path | None = None) -> Path:
    """Resolve a backup id to its file.

    Raises:
        NotFoundError: If no such backup exists
    """
    backup_dir = backup_dir if backup_dir else get_backup_dir()
    backup_path = backup_dir / f"{backup_id}.json"
    if not BACKUP_PATTERN.match(backup_path.name) or not backup_path.is_file():
        raise NotFoundError(f"Backup '{backup_id}' not found")
    return backup_path


def list_backups(backup_dir: Path | None = None) -> list[str]:
    """Return backup ids, newest first."""
    backup_dir = backup_dir if backup_dir else get_backup_dir()
    if not backup_dir.exists():
        return []

    found: list[tuple[str, int, str]] = []
    for file_path in backup_dir.iterdir():
        if not file_path.is_file():
            continue
        match = BACKUP_PATTERN.match(file_path.name)
        if not match:
            continue
        found.append((match.group(1), int(match.group(2) or 1), file_path.stem))

    found.sort(reverse=True)
    return [backup_id for _, _, backup_id in found]


def import_config_from_path(
    path: Path,
    state: AppState,
    backup_dir: Path | None = None,
) -> str:
    """Replace the unified store with the document at path.

    ABOUTME: Validate -> back up current store -> replace file -> swap in-memory state
    ABOUTME: Shared by "import" and "restore"; nothing changes if any step fails
    ABOUTME: The file content is copied verbatim so restoring a backup is byte-exact

    Returns:
        Id of the backup taken of the previous store

    Raises:
        ConfigIOError: If path is missing/unreadable or the store can't be written
        ParseError: If path isn't a valid unified config document
        ValidationError: If the document has dangling references
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigIOError(path, f"read failed: {e}") from e

    config = parse_config_text(text, path)
    validate_config(config)

    with state.write():
        backup_id = create_backup(state.store.path, backup_dir)
        atomic_write_text(state.store.path, text)
        state.replace(config)

    logger.info(f"Imported config from {path} (previous config backed up as {backup_id})")
    return backup_id


def restore_backup(
    backup_id: str,
    state: AppState,
    backup_dir: Path | None = None,
) -> str:
    """Restore a backup by id; returns the id of the backup taken beforehand."""
    backup_path = get_backup_path(backup_id, backup_dir)
    return import_config_from_path(backup_path, state, backup_dir)


def reset_config(state: AppState, backup_dir: Path | None = None) -> str:
    """Back up the store, then replace it with an empty default config.

    Returns:
        Id of the backup taken of the previous store
    """
    with state.write():
        backup_id = create_backup(state.store.path, backup_dir)
        config = UnifiedConfig()
        state.store.save(config)
        state.replace(config)

    logger.info(f"Reset config (previous config backed up as {backup_id})")
    return backup_id
