# ccswitch - unified provider and MCP config for Claude Code, Codex and Gemini
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export core data models and errors
from ccswitch.config import ConfigStore, get_config_dir, get_config_path
from ccswitch.errors import (
    AppError,
    ConfigIOError,
    NotFoundError,
    ParseError,
    ValidationError,
)
from ccswitch.models import (
    AppConfig,
    AppType,
    McpApps,
    McpRegistry,
    McpServerEntry,
    Provider,
    UnifiedConfig,
)
from ccswitch.state import AppState

__all__ = [
    "__version__",
    "AppConfig",
    "AppError",
    "AppState",
    "AppType",
    "ConfigIOError",
    "ConfigStore",
    "McpApps",
    "McpRegistry",
    "McpServerEntry",
    "NotFoundError",
    "ParseError",
    "Provider",
    "UnifiedConfig",
    "ValidationError",
    "get_config_dir",
    "get_config_path",
]
