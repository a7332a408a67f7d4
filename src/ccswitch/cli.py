# CLI interface for ccswitch
# ABOUTME: Presentation only - parses args, prompts, prints; all logic lives in the core modules
import argparse
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from ccswitch import __version__
from ccswitch.config import ConfigStore, get_config_summary, read_config_file
from ccswitch.errors import AppError, ConfigIOError, NotFoundError, ParseError, ValidationError
from ccswitch.models import AppType
from ccswitch.plugin import sync_on_settings_toggle
from ccswitch.providers import delete_provider, get_current_provider, list_providers, switch_provider
from ccswitch.settings import is_integration_enabled, set_enable_integration
from ccswitch.state import AppState
from ccswitch.sync import delete_server, import_from_app, list_servers, sync_all_enabled, toggle_app
from ccswitch.utils.backup import (
    create_backup,
    get_backup_dir,
    import_config_from_path,
    list_backups,
    reset_config,
    restore_backup,
)
from ccswitch.utils.validation import validate_command_exists, validate_config, validate_server_entry

# ABOUTME: Exit codes
# 0 = success, 1 = not found, 2 = config error, 3 = fatal
EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3


def confirm(prompt: str, assume_yes: bool = False) -> bool:
    """Ask a yes/no question, defaulting to no."""
    if assume_yes:
        return True
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


# ---- mcp ----

def cmd_mcp_list(args: argparse.Namespace) -> int:
    state = AppState.load()
    servers = list_servers(state)
    if not servers:
        print("No MCP servers found.")
        print("Use 'ccswitch mcp import --app <app>' to add servers.")
        return EXIT_SUCCESS

    print(f"{'ID':<24} {'Name':<24} {'Claude':<7} {'Codex':<7} {'Gemini':<7} Tags")
    for server_id, entry in servers.items():
        marks = ["✓" if entry.apps.is_enabled(app) else " " for app in AppType]
        print(
            f"{server_id:<24} {entry.name:<24} {marks[0]:<7} {marks[1]:<7} {marks[2]:<7} "
            f"{', '.join(entry.tags)}"
        )
    return EXIT_SUCCESS


def cmd_mcp_toggle(args: argparse.Namespace, enabled: bool) -> int:
    state = AppState.load()
    toggle_app(state, args.id, args.app, enabled)
    verb = "Enabled" if enabled else "Disabled"
    print(f"{verb} MCP server '{args.id}' for {args.app.value}")
    return EXIT_SUCCESS


def cmd_mcp_delete(args: argparse.Namespace) -> int:
    state = AppState.load()
    entry = list_servers(state).get(args.id)
    if entry is None:
        raise NotFoundError(f"MCP server '{args.id}' not found")

    enabled_apps = ", ".join(app.value for app in entry.apps.enabled_apps())
    print(f"ID:   {entry.id}")
    print(f"Name: {entry.name}")
    if enabled_apps:
        print(f"Enabled for: {enabled_apps}")

    if not confirm(f"Delete MCP server '{args.id}'?", args.yes):
        print("Cancelled.")
        return EXIT_SUCCESS

    delete_server(state, args.id)
    print(f"Deleted MCP server '{args.id}'")
    if enabled_apps:
        print(f"  Removed from: {enabled_apps}")
    return EXIT_SUCCESS


def cmd_mcp_sync(args: argparse.Namespace) -> int:
    state = AppState.load()
    report = sync_all_enabled(state)
    for app_name, count in report.servers_synced.items():
        print(f"  {app_name} - {count} server(s) synced")
    print(f"Sync complete: {report.apps_synced} app(s) updated")
    return EXIT_SUCCESS


def cmd_mcp_import(args: argparse.Namespace) -> int:
    state = AppState.load()
    count = import_from_app(state, args.app)
    if count:
        print(f"Imported {count} MCP server(s) from {args.app.value}")
    else:
        print(f"No new MCP servers found in {args.app.value} config.")
    return EXIT_SUCCESS


def cmd_mcp_validate(args: argparse.Namespace) -> int:
    if validate_command_exists(args.command):
        print(f"Command '{args.command}' is available in PATH")
        return EXIT_SUCCESS
    print(f"Command '{args.command}' not found in PATH")
    return EXIT_NOT_FOUND


# ---- provider ----

def cmd_provider_list(args: argparse.Namespace) -> int:
    state = AppState.load()
    providers = list_providers(state, args.app)
    if not providers:
        print(f"No providers configured for {args.app.value}.")
        return EXIT_SUCCESS

    current = get_current_provider(state, args.app)
    for provider_id, provider in providers.items():
        marker = "*" if current is not None and provider_id == current.id else " "
        category = f" [{provider.category}]" if provider.category else ""
        print(f"{marker} {provider_id:<24} {provider.name}{category}")
    return EXIT_SUCCESS


def cmd_provider_switch(args: argparse.Namespace) -> int:
    state = AppState.load()
    provider = switch_provider(state, args.app, args.id)
    print(f"Switched {args.app.value} to provider '{provider.name}'")
    return EXIT_SUCCESS


def cmd_provider_delete(args: argparse.Namespace) -> int:
    if not confirm(f"Delete {args.app.value} provider '{args.id}'?", args.yes):
        print("Cancelled.")
        return EXIT_SUCCESS
    state = AppState.load()
    delete_provider(state, args.app, args.id)
    print(f"Deleted provider '{args.id}'")
    return EXIT_SUCCESS


# ---- config ----

def cmd_config_path(args: argparse.Namespace) -> int:
    store = ConfigStore()
    print(f"Config file: {store.path}")
    print(f"Config dir:  {store.path.parent}")
    if not store.exists():
        print("Status:      File does not exist")
    backups = list_backups()
    if backups:
        print(f"Backups:     {len(backups)} in {get_backup_dir()}")
    return EXIT_SUCCESS


def cmd_config_show(args: argparse.Namespace) -> int:
    config = ConfigStore().load()
    print(json.dumps(config.to_dict(), indent=2, ensure_ascii=False))
    return EXIT_SUCCESS


def cmd_config_export(args: argparse.Namespace) -> int:
    target = Path(args.path)
    if target.exists() and not confirm(f"{target} exists. Overwrite?", args.yes):
        print("Cancelled.")
        return EXIT_SUCCESS
    ConfigStore().export_to(target)
    print(f"Exported config to {target}")
    return EXIT_SUCCESS


def cmd_config_import(args: argparse.Namespace) -> int:
    source = Path(args.path)
    if not confirm("Replace the current config with this file?", args.yes):
        print("Cancelled.")
        return EXIT_SUCCESS
    backup_id = import_config_from_path(source, AppState.load())
    print(f"Imported config from {source}")
    print(f"Backup created: {backup_id}")
    return EXIT_SUCCESS


def cmd_config_backup(args: argparse.Namespace) -> int:
    backup_id = create_backup()
    print(f"Backup created: {backup_id}")
    return EXIT_SUCCESS


def cmd_config_backups(args: argparse.Namespace) -> int:
    backups = list_backups()
    if not backups:
        print("No backups found.")
    for backup_id in backups:
        print(backup_id)
    return EXIT_SUCCESS


def cmd_config_restore(args: argparse.Namespace) -> int:
    if not confirm(f"Restore config from '{args.backup}'?", args.yes):
        print("Cancelled.")
        return EXIT_SUCCESS

    state = AppState.load()
    source = Path(args.backup)
    if source.is_file():
        backup_id = import_config_from_path(source, state)
    else:
        backup_id = restore_backup(args.backup, state)
    print(f"Restored config from {args.backup}")
    print(f"Previous config backed up: {backup_id}")
    return EXIT_SUCCESS


def cmd_config_validate(args: argparse.Namespace) -> int:
    store = ConfigStore()
    if not store.exists():
        raise ConfigIOError(store.path, "config file does not exist")

    config = read_config_file(store.path)
    validate_config(config)
    print("Config is valid")

    summary = get_config_summary(config)
    for app in AppType:
        print(f"{app.value.capitalize() + ' providers:':<18} {summary[app.value]}")
    print(f"{'MCP servers:':<18} {summary['mcp']}")

    for entry in config.mcp.servers.values():
        for issue in validate_server_entry(entry):
            print(f"  {issue.severity}: server '{issue.server_id}': {issue.message}")
    return EXIT_SUCCESS


def cmd_config_reset(args: argparse.Namespace) -> int:
    if not confirm("Reset config to defaults?", args.yes):
        print("Cancelled.")
        return EXIT_SUCCESS
    backup_id = reset_config(AppState.load())
    print("Config reset to defaults")
    print(f"Previous config backed up: {backup_id}")
    return EXIT_SUCCESS


# ---- settings ----

def cmd_settings_integration(args: argparse.Namespace) -> int:
    if args.state == "status":
        enabled = is_integration_enabled()
        print(f"Claude plugin integration: {'on' if enabled else 'off'}")
        return EXIT_SUCCESS

    enabled = args.state == "on"
    set_enable_integration(enabled)
    sync_on_settings_toggle(enabled)
    print(f"Claude plugin integration turned {args.state}")
    return EXIT_SUCCESS


def _app_arg(value: str) -> AppType:
    try:
        return AppType.parse(value)
    except ParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccswitch",
        description="Manage providers and MCP servers for Claude Code, Codex and Gemini",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"ccswitch v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    # Shared option parents
    app_opt = argparse.ArgumentParser(add_help=False)
    app_opt.add_argument(
        "--app",
        type=_app_arg,
        default=AppType.CLAUDE,
        help="Target app: claude, codex or gemini (default: claude)"
    )
    yes_opt = argparse.ArgumentParser(add_help=False)
    yes_opt.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Don't ask for confirmation"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # mcp commands
    mcp = subparsers.add_parser("mcp", help="Manage MCP servers").add_subparsers(dest="action")
    mcp.add_parser("list", help="List all MCP servers").set_defaults(func=cmd_mcp_list)
    for name, enabled in (("enable", True), ("disable", False)):
        p = mcp.add_parser(name, parents=[app_opt], help=f"{name.capitalize()} a server for an app")
        p.add_argument("id", help="Server ID")
        p.set_defaults(func=lambda a, enabled=enabled: cmd_mcp_toggle(a, enabled))
    p = mcp.add_parser("delete", parents=[yes_opt], help="Delete an MCP server")
    p.add_argument("id", help="Server ID")
    p.set_defaults(func=cmd_mcp_delete)
    mcp.add_parser("sync", help="Sync MCP servers to all live files").set_defaults(func=cmd_mcp_sync)
    mcp.add_parser(
        "import", parents=[app_opt], help="Import MCP servers from an app's live file"
    ).set_defaults(func=cmd_mcp_import)
    p = mcp.add_parser("validate", help="Check a command is on PATH")
    p.add_argument("command", help="Command to look up")
    p.set_defaults(func=cmd_mcp_validate)

    # provider commands
    prov = subparsers.add_parser("provider", help="Manage providers").add_subparsers(dest="action")
    prov.add_parser("list", parents=[app_opt], help="List providers").set_defaults(
        func=cmd_provider_list
    )
    p = prov.add_parser("switch", parents=[app_opt], help="Switch the current provider")
    p.add_argument("id", help="Provider ID")
    p.set_defaults(func=cmd_provider_switch)
    p = prov.add_parser("delete", parents=[app_opt, yes_opt], help="Delete a provider")
    p.add_argument("id", help="Provider ID")
    p.set_defaults(func=cmd_provider_delete)

    # config commands
    cfg = subparsers.add_parser("config", help="Manage the unified config").add_subparsers(
        dest="action"
    )
    cfg.add_parser("path", help="Show config locations").set_defaults(func=cmd_config_path)
    cfg.add_parser("show", help="Print the full config").set_defaults(func=cmd_config_show)
    p = cfg.add_parser("export", parents=[yes_opt], help="Export config to a file")
    p.add_argument("path", help="Destination file")
    p.set_defaults(func=cmd_config_export)
    p = cfg.add_parser("import", parents=[yes_opt], help="Import config from a file")
    p.add_argument("path", help="Source file")
    p.set_defaults(func=cmd_config_import)
    cfg.add_parser("backup", help="Back up the config").set_defaults(func=cmd_config_backup)
    cfg.add_parser("backups", help="List backups").set_defaults(func=cmd_config_backups)
    p = cfg.add_parser("restore", parents=[yes_opt], help="Restore a backup (id or file path)")
    p.add_argument("backup", help="Backup ID or file path")
    p.set_defaults(func=cmd_config_restore)
    cfg.add_parser("validate", help="Validate the config").set_defaults(func=cmd_config_validate)
    cfg.add_parser("reset", parents=[yes_opt], help="Reset config to defaults").set_defaults(
        func=cmd_config_reset
    )

    # settings commands
    settings = subparsers.add_parser("settings", help="Manage settings").add_subparsers(
        dest="action"
    )
    p = settings.add_parser("integration", help="Claude plugin integration toggle")
    p.add_argument("state", choices=["on", "off", "status"])
    p.set_defaults(func=cmd_settings_integration)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Maps AppError subclasses to exit codes
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        return func(args)
    except NotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except (ParseError, ValidationError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except AppError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
