# Core data models for ccswitch
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ccswitch.errors import ParseError

# ABOUTME: Only schema version this release reads or writes
CONFIG_VERSION = 2

# ABOUTME: Provider category that marks a built-in (non third-party) provider
OFFICIAL_CATEGORY = "official"


class AppType(str, Enum):
    """Client applications whose live config files ccswitch manages.

    ABOUTME: Closed set - every per-app branch must handle all three
    """
    CLAUDE = "claude"
    CODEX = "codex"
    GEMINI = "gemini"

    @classmethod
    def parse(cls, value: str) -> "AppType":
        """Parse an app identifier, case-insensitively."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(app.value for app in cls)
            raise ParseError(f"Unknown app '{value}'. Must be one of: {valid}") from None


def _expect_dict(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"Expected an object for {where}, got {type(value).__name__}")
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ParseError(f"Field '{key}' of {where} must be a string")
    return value


@dataclass
class Provider:
    """One provider entry of an application.

    ABOUTME: settings is opaque - consumed verbatim by the owning application
    ABOUTME: extra keeps unknown fields so they survive a load/save cycle
    """
    id: str
    name: str
    settings: dict[str, Any] = field(default_factory=dict)
    category: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_official(self) -> bool:
        return self.category == OFFICIAL_CATEGORY

    @classmethod
    def from_dict(cls, key: str, data: Any) -> "Provider":
        where = f"provider '{key}'"
        data = _expect_dict(data, where)
        provider_id = data.get("id", key)
        if provider_id != key:
            raise ParseError(f"{where} has mismatched id '{provider_id}'")
        name = data.get("name", key)
        if not isinstance(name, str):
            raise ParseError(f"Field 'name' of {where} must be a string")

        known = {"id", "name", "settingsConfig", "category"}
        return cls(
            id=key,
            name=name,
            settings=_expect_dict(data.get("settingsConfig", {}), f"{where} settingsConfig"),
            category=_optional_str(data, "category", where),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "settingsConfig": self.settings,
        }
        if self.category is not None:
            result["category"] = self.category
        result.update(self.extra)
        return result


@dataclass
class AppConfig:
    """Providers of a single application plus the active one."""
    providers: dict[str, Provider] = field(default_factory=dict)
    current_provider_id: str | None = None

    @classmethod
    def from_dict(cls, app: AppType, data: Any) -> "AppConfig":
        data = _expect_dict(data, f"app '{app.value}'")
        providers_data = _expect_dict(data.get("providers", {}), f"app '{app.value}' providers")
        providers = {
            key: Provider.from_dict(key, value)
            for key, value in providers_data.items()
        }
        return cls(
            providers=providers,
            current_provider_id=_optional_str(data, "current", f"app '{app.value}'"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "providers": {key: p.to_dict() for key, p in self.providers.items()},
            "current": self.current_provider_id,
        }


@dataclass
class McpApps:
    """Per-application enable flags of an MCP server.

    ABOUTME: Flags are independent; all three may be False
    """
    claude: bool = False
    codex: bool = False
    gemini: bool = False

    def is_enabled(self, app: AppType) -> bool:
        return bool(getattr(self, app.value))

    def set_enabled(self, app: AppType, enabled: bool) -> None:
        setattr(self, app.value, enabled)

    def enabled_apps(self) -> list[AppType]:
        return [app for app in AppType if self.is_enabled(app)]

    @classmethod
    def only(cls, app: AppType) -> "McpApps":
        apps = cls()
        apps.set_enabled(app, True)
        return apps

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "McpApps":
        data = _expect_dict(data, f"{where} apps")
        apps = cls()
        for app in AppType:
            value = data.get(app.value, False)
            if not isinstance(value, bool):
                raise ParseError(f"Flag '{app.value}' of {where} apps must be a boolean")
            apps.set_enabled(app, value)
        return apps

    def to_dict(self) -> dict[str, bool]:
        return {app.value: self.is_enabled(app) for app in AppType}


@dataclass
class McpServerEntry:
    """MCP server definition in the unified store.

    ABOUTME: server holds the launch spec (type/command/args/env or url/headers)
    ABOUTME: The launch spec is opaque here - platform adapters translate it
    """
    id: str
    name: str
    server: dict[str, Any] = field(default_factory=dict)
    apps: McpApps = field(default_factory=McpApps)
    description: str | None = None
    homepage: str | None = None
    tags: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, key: str, data: Any) -> "McpServerEntry":
        where = f"MCP server '{key}'"
        data = _expect_dict(data, where)
        server_id = data.get("id", key)
        if server_id != key:
            raise ParseError(f"{where} has mismatched id '{server_id}'")
        name = data.get("name", key)
        if not isinstance(name, str):
            raise ParseError(f"Field 'name' of {where} must be a string")
        tags = data.get("tags", [])
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ParseError(f"Field 'tags' of {where} must be a list of strings")

        known = {"id", "name", "server", "apps", "description", "homepage", "tags"}
        return cls(
            id=key,
            name=name,
            server=_expect_dict(data.get("server", {}), f"{where} server"),
            apps=McpApps.from_dict(data.get("apps", {}), where),
            description=_optional_str(data, "description", where),
            homepage=_optional_str(data, "homepage", where),
            tags=list(tags),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "server": self.server,
            "apps": self.apps.to_dict(),
            "description": self.description,
            "homepage": self.homepage,
            "tags": self.tags,
        }
        result.update(self.extra)
        return result


@dataclass
class McpRegistry:
    """MCP servers shared by all applications, keyed by globally unique id."""
    servers: dict[str, McpServerEntry] = field(default_factory=dict)

    def enabled_for(self, app: AppType) -> dict[str, McpServerEntry]:
        """Servers whose flag for app is set, ordered by id."""
        return {
            server_id: self.servers[server_id]
            for server_id in sorted(self.servers)
            if self.servers[server_id].apps.is_enabled(app)
        }


@dataclass
class UnifiedConfig:
    """Root document persisted at ~/.cc-switch/config.json.

    ABOUTME: apps always carries an entry for every AppType
    """
    apps: dict[AppType, AppConfig] = field(
        default_factory=lambda: {app: AppConfig() for app in AppType}
    )
    mcp: McpRegistry = field(default_factory=McpRegistry)

    def app(self, app: AppType) -> AppConfig:
        return self.apps.setdefault(app, AppConfig())

    @classmethod
    def from_dict(cls, data: Any) -> "UnifiedConfig":
        """Build a config from parsed JSON.

        Raises:
            ParseError: If the document doesn't match the schema
        """
        data = _expect_dict(data, "config root")

        version = data.get("version", CONFIG_VERSION)
        if version != CONFIG_VERSION:
            raise ParseError(
                f"Unsupported config version {version!r} (expected {CONFIG_VERSION})"
            )

        apps_data = _expect_dict(data.get("apps", {}), "apps")
        unknown = set(apps_data) - {app.value for app in AppType}
        if unknown:
            raise ParseError(f"Unknown app(s) in config: {', '.join(sorted(unknown))}")

        mcp_data = _expect_dict(data.get("mcp", {}), "mcp")
        servers_data = _expect_dict(mcp_data.get("servers", {}), "mcp servers")

        return cls(
            apps={
                app: AppConfig.from_dict(app, apps_data.get(app.value, {}))
                for app in AppType
            },
            mcp=McpRegistry(servers={
                key: McpServerEntry.from_dict(key, value)
                for key, value in servers_data.items()
            }),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": CONFIG_VERSION,
            "apps": {app.value: self.app(app).to_dict() for app in AppType},
            "mcp": {
                "servers": {key: s.to_dict() for key, s in self.mcp.servers.items()}
            },
        }
