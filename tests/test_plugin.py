# ABOUTME: Tests for Claude plugin integration sync
# ABOUTME: Covers the settings-toggle and provider-switch rules for primaryApiKey
import json
from pathlib import Path

import pytest

from conftest import read_json
from ccswitch.models import AppType, Provider
from ccswitch.plugin import (
    PRIMARY_API_KEY,
    sync_on_provider_switch,
    sync_on_settings_toggle,
)
from ccswitch.settings import set_enable_integration

THIRD_PARTY = Provider(
    id="third-party",
    name="Third Party",
    settings={"env": {"ANTHROPIC_API_KEY": "test"}},
)
OFFICIAL = Provider(id="official", name="Official", category="official")


@pytest.fixture
def plugin_config(home: Path) -> Path:
    return home / ".claude" / "config.json"


def seed(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))


class TestSettingsToggle:
    """Tests for sync_on_settings_toggle."""

    def test_writes_and_clears_primary_api_key(self, plugin_config):
        """Test toggling on sets the sentinel and toggling off removes it."""
        seed(plugin_config, {"foo": "bar"})

        set_enable_integration(True)
        sync_on_settings_toggle(True)
        assert read_json(plugin_config) == {"foo": "bar", "primaryApiKey": "any"}

        set_enable_integration(False)
        sync_on_settings_toggle(False)
        assert read_json(plugin_config) == {"foo": "bar"}

    def test_clear_on_missing_file(self, plugin_config):
        """Test toggling off without a file writes an empty document."""
        sync_on_settings_toggle(False)
        assert read_json(plugin_config) == {}

    def test_explicit_path(self, tmp_path):
        """Test a path override is honoured."""
        target = tmp_path / "elsewhere.json"
        sync_on_settings_toggle(True, path=target)
        assert read_json(target) == {PRIMARY_API_KEY: "any"}


class TestProviderSwitch:
    """Tests for sync_on_provider_switch."""

    def test_noop_when_integration_disabled(self, plugin_config):
        """Test nothing is written, not even a new file, when the toggle is off."""
        set_enable_integration(False)

        sync_on_provider_switch(AppType.CLAUDE, THIRD_PARTY)

        assert not plugin_config.exists()

    def test_third_party_sets_marker(self, plugin_config):
        """Test a third-party provider sets the sentinel."""
        set_enable_integration(True)

        sync_on_provider_switch(AppType.CLAUDE, THIRD_PARTY)

        assert read_json(plugin_config)[PRIMARY_API_KEY] == "any"

    def test_official_clears_marker(self, plugin_config):
        """Test an official provider removes the key and keeps the rest."""
        seed(plugin_config, {"primaryApiKey": "any", "foo": "bar"})
        set_enable_integration(True)

        sync_on_provider_switch(AppType.CLAUDE, OFFICIAL)

        assert read_json(plugin_config) == {"foo": "bar"}

    def test_switch_back_restores_marker(self, plugin_config):
        """Test official -> third-party brings the sentinel back."""
        set_enable_integration(True)

        sync_on_provider_switch(AppType.CLAUDE, OFFICIAL)
        assert PRIMARY_API_KEY not in read_json(plugin_config)

        sync_on_provider_switch(AppType.CLAUDE, THIRD_PARTY)
        assert read_json(plugin_config)[PRIMARY_API_KEY] == "any"

    @pytest.mark.parametrize("app", [AppType.CODEX, AppType.GEMINI])
    def test_other_apps_ignored(self, plugin_config, app):
        """Test only claude provider switches touch the marker."""
        set_enable_integration(True)

        sync_on_provider_switch(app, THIRD_PARTY)

        assert not plugin_config.exists()

    def test_disabling_clears_regardless_of_provider(self, plugin_config):
        """Test turning the integration off removes the key even for third-party."""
        set_enable_integration(True)
        sync_on_provider_switch(AppType.CLAUDE, THIRD_PARTY)

        set_enable_integration(False)
        sync_on_settings_toggle(False)
        sync_on_provider_switch(AppType.CLAUDE, THIRD_PARTY)

        assert PRIMARY_API_KEY not in read_json(plugin_config)
