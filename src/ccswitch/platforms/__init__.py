# Live file adapter registry
from ccswitch.models import AppType
from ccswitch.platforms.base import LiveAdapter
from ccswitch.platforms.claude import ClaudeAdapter
from ccswitch.platforms.codex import CodexAdapter
from ccswitch.platforms.gemini import GeminiAdapter

# Registry of adapters, one per application
ALL_PLATFORMS: dict[AppType, type[LiveAdapter]] = {
    AppType.CLAUDE: ClaudeAdapter,
    AppType.CODEX: CodexAdapter,
    AppType.GEMINI: GeminiAdapter,
}

__all__ = [
    "LiveAdapter",
    "ClaudeAdapter",
    "CodexAdapter",
    "GeminiAdapter",
    "ALL_PLATFORMS",
    "get_adapter",
]


def get_adapter(app: AppType) -> LiveAdapter:
    """Instantiate the adapter for one application at its default path."""
    return ALL_PLATFORMS[app]()
