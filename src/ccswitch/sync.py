# MCP sync orchestration for ccswitch
# ABOUTME: Projects the unified MCP registry into each app's live file, and imports back
# ABOUTME: The live MCP section is always a full recomputation from the apps flags
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ccswitch.errors import NotFoundError
from ccswitch.models import AppType, McpApps, McpServerEntry, UnifiedConfig
from ccswitch.platforms import get_adapter
from ccswitch.platforms.base import LiveAdapter, load_servers, save_servers
from ccswitch.state import AppState

logger = logging.getLogger(__name__)

# ABOUTME: Factory hook so callers/tests can point adapters at other paths
AdapterFactory = Callable[[AppType], LiveAdapter]


@dataclass
class SyncReport:
    """Report from a sync operation.

    ABOUTME: Per-app count of servers written to the live file
    """
    servers_synced: dict[str, int] = field(default_factory=dict)

    @property
    def apps_synced(self) -> int:
        return len(self.servers_synced)

    def add_app_result(self, app: AppType, count: int) -> None:
        self.servers_synced[app.value] = count


def list_servers(state: AppState) -> dict[str, McpServerEntry]:
    """Return all MCP servers ordered by id."""
    with state.read() as config:
        return {server_id: config.mcp.servers[server_id] for server_id in sorted(config.mcp.servers)}


def _sync_app(
    config: UnifiedConfig,
    app: AppType,
    adapter_factory: AdapterFactory,
) -> int:
    adapter = adapter_factory(app)
    enabled = config.mcp.enabled_for(app)
    save_servers(adapter, {server_id: entry.server for server_id, entry in enabled.items()})
    logger.debug(f"Synced {len(enabled)} MCP server(s) to {adapter.config_path}")
    return len(enabled)


def sync_app(
    state: AppState,
    app: AppType,
    adapter_factory: AdapterFactory = get_adapter,
) -> int:
    """Rewrite one app's live MCP section from the unified store.

    Returns:
        Number of servers written
    """
    with state.read() as config:
        return _sync_app(config, app, adapter_factory)


def sync_all_enabled(
    state: AppState,
    adapter_factory: AdapterFactory = get_adapter,
) -> SyncReport:
    """Rewrite every app's live MCP section from the unified store.

    ABOUTME: Whole-section replace - manual live edits to that section don't survive
    ABOUTME: Idempotent: a second run produces byte-identical files
    ABOUTME: Stops at the first failing app and propagates its error

    Examples:
        >>> report = sync_all_enabled(AppState.load())
        >>> report.servers_synced
        {'claude': 2, 'codex': 0, 'gemini': 1}
    """
    report = SyncReport()
    with state.read() as config:
        for app in AppType:
            report.add_app_result(app, _sync_app(config, app, adapter_factory))
    return report


def toggle_app(
    state: AppState,
    server_id: str,
    app: AppType,
    enabled: bool,
    adapter_factory: AdapterFactory = get_adapter,
) -> None:
    """Enable or disable a server for one app, persist, then sync that app only.

    Raises:
        NotFoundError: If server_id doesn't exist
    """
    with state.write() as config:
        entry = config.mcp.servers.get(server_id)
        if entry is None:
            raise NotFoundError(f"MCP server '{server_id}' not found")

        previous = entry.apps.is_enabled(app)
        entry.apps.set_enabled(app, enabled)
        try:
            state.persist()
        except Exception:
            entry.apps.set_enabled(app, previous)
            raise
        _sync_app(config, app, adapter_factory)

    logger.info(f"{'Enabled' if enabled else 'Disabled'} MCP server '{server_id}' for {app.value}")


def delete_server(
    state: AppState,
    server_id: str,
    adapter_factory: AdapterFactory = get_adapter,
) -> bool:
    """Remove a server from the registry and from every live file it was in.

    Returns:
        True if the server existed, False otherwise
    """
    with state.write() as config:
        entry = config.mcp.servers.pop(server_id, None)
        if entry is None:
            return False

        try:
            state.persist()
        except Exception:
            config.mcp.servers[server_id] = entry
            raise
        for app in entry.apps.enabled_apps():
            _sync_app(config, app, adapter_factory)

    logger.info(f"Deleted MCP server '{server_id}'")
    return True


def import_from_app(
    state: AppState,
    app: AppType,
    adapter_factory: AdapterFactory = get_adapter,
) -> int:
    """Import MCP servers from an app's live file into the unified store.

    ABOUTME: New ids are inserted enabled for the source app only
    ABOUTME: Existing ids are never touched - first writer wins
    ABOUTME: Store is persisted only when something was inserted

    Returns:
        Number of newly inserted servers
    """
    adapter = adapter_factory(app)
    live_servers = load_servers(adapter)

    with state.write() as config:
        new_ids = [server_id for server_id in live_servers if server_id not in config.mcp.servers]
        for server_id in new_ids:
            config.mcp.servers[server_id] = McpServerEntry(
                id=server_id,
                name=server_id,
                server=live_servers[server_id],
                apps=McpApps.only(app),
            )
            logger.debug(f"Imported MCP server '{server_id}' from {adapter.name}")

        if new_ids:
            try:
                state.persist()
            except Exception:
                for server_id in new_ids:
                    del config.mcp.servers[server_id]
                raise

    return len(new_ids)
