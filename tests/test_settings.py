# Tests for process-wide settings
import json

import pytest

from conftest import read_json
from ccswitch.config import get_settings_path
from ccswitch.errors import ParseError
from ccswitch.settings import (
    AppSettings,
    is_integration_enabled,
    load_settings,
    save_settings,
    set_enable_integration,
)


def test_defaults_without_file():
    """Test missing settings.json gives defaults."""
    assert load_settings() == AppSettings()
    assert is_integration_enabled() is False


def test_toggle_persists():
    """Test the toggle is written and read back."""
    set_enable_integration(True)
    assert is_integration_enabled() is True
    assert read_json(get_settings_path()) == {"enableClaudePluginIntegration": True}

    set_enable_integration(False)
    assert is_integration_enabled() is False


def test_unknown_keys_preserved():
    """Test other settings survive a save."""
    path = get_settings_path()
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"language": "zh"}))

    save_settings(AppSettings(enable_claude_plugin_integration=True))

    assert read_json(path) == {"language": "zh", "enableClaudePluginIntegration": True}


def test_independent_of_unified_store(state):
    """Test the toggle never touches config.json."""
    before = state.store.path.read_bytes()
    set_enable_integration(True)
    assert state.store.path.read_bytes() == before


def test_non_bool_rejected():
    """Test a non-boolean toggle value is a parse error."""
    path = get_settings_path()
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"enableClaudePluginIntegration": "yes"}))

    with pytest.raises(ParseError):
        load_settings()
