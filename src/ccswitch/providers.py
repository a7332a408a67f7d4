# Provider operations for ccswitch
import logging

from ccswitch.errors import NotFoundError, ValidationError
from ccswitch.models import AppType, Provider
from ccswitch.plugin import sync_on_provider_switch
from ccswitch.state import AppState

logger = logging.getLogger(__name__)


def list_providers(state: AppState, app: AppType) -> dict[str, Provider]:
    """Return an app's providers ordered by id."""
    with state.read() as config:
        providers = config.app(app).providers
        return {provider_id: providers[provider_id] for provider_id in sorted(providers)}


def get_current_provider(state: AppState, app: AppType) -> Provider | None:
    with state.read() as config:
        app_config = config.app(app)
        if app_config.current_provider_id is None:
            return None
        return app_config.providers.get(app_config.current_provider_id)


def switch_provider(state: AppState, app: AppType, provider_id: str) -> Provider:
    """Make provider_id the current provider of app.

    ABOUTME: Persists first, then updates the plugin integration marker

    Raises:
        NotFoundError: If the provider doesn't exist
    """
    with state.write() as config:
        app_config = config.app(app)
        provider = app_config.providers.get(provider_id)
        if provider is None:
            raise NotFoundError(f"Provider '{provider_id}' not found for {app.value}")

        previous = app_config.current_provider_id
        app_config.current_provider_id = provider_id
        try:
            state.persist()
        except Exception:
            app_config.current_provider_id = previous
            raise

    sync_on_provider_switch(app, provider)
    logger.info(f"Switched {app.value} provider to '{provider_id}'")
    return provider


def delete_provider(state: AppState, app: AppType, provider_id: str) -> None:
    """Delete a provider that isn't the current one.

    Raises:
        NotFoundError: If the provider doesn't exist
        ValidationError: If it is the current provider
    """
    with state.write() as config:
        app_config = config.app(app)
        if provider_id not in app_config.providers:
            raise NotFoundError(f"Provider '{provider_id}' not found for {app.value}")
        if app_config.current_provider_id == provider_id:
            raise ValidationError(
                f"Provider '{provider_id}' is the current {app.value} provider; switch first"
            )

        provider = app_config.providers.pop(provider_id)
        try:
            state.persist()
        except Exception:
            app_config.providers[provider_id] = provider
            raise

    logger.info(f"Deleted {app.value} provider '{provider_id}'")
