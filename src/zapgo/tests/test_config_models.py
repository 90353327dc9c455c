"""
Test suite for configuration models.
"""

import pytest
from pydantic import ValidationError

from zapgo.config import (
    AppConfig,
    AppSettings,
    CommandConfig,
    EngineSettings,
    LogLevel,
    ZapgoSettings,
    default_app_config,
)


class TestCommandConfig:
    """Test the command entry model."""

    def test_camel_case_document(self):
        command = CommandConfig.model_validate({
            "id": "g",
            "pluginId": "link_opener",
            "triggers": ["g"],
            "pluginParams": {"template": "x", "placeholders": ""},
        })

        assert command.plugin_id == "link_opener"
        assert command.plugin_params == {"template": "x", "placeholders": ""}
        assert command.enabled is True

    def test_triggers_stripped(self):
        command = CommandConfig(plugin_id="time", triggers=[" time ", "", "   ", "t"])
        assert command.triggers == ["time", "t"]

    def test_plugin_id_required(self):
        with pytest.raises(ValidationError):
            CommandConfig.model_validate({"triggers": ["x"]})

    def test_unknown_keys_ignored(self):
        command = CommandConfig.model_validate({"pluginId": "ai", "color": "red"})
        assert command.plugin_id == "ai"


class TestAppConfig:
    """Test the configuration document."""

    def test_default_has_config_fallback(self):
        config = default_app_config()

        assert config.commands == []
        assert config.fallback_command.plugin_id == "config"
        assert config.fallback_command.triggers == ["fallback"]

    def test_to_document_uses_aliases(self):
        config = AppConfig(commands=[CommandConfig(id="t", plugin_id="time", triggers=["time"])])
        document = config.to_document()

        assert document["commands"][0]["pluginId"] == "time"
        assert "name" not in document["commands"][0]
        assert document["fallbackCommand"]["pluginId"] == "config"

    def test_removed_fallback_survives_round_trip(self):
        document = AppConfig(fallback_command=None).to_document()

        assert document["fallbackCommand"] is None
        assert AppConfig.model_validate(document).fallback_command is None

    def test_missing_fallback_gets_default(self):
        assert AppConfig.model_validate({"commands": []}).fallback_command.plugin_id == "config"


class TestSettings:
    """Test application settings models."""

    def test_defaults(self):
        settings = ZapgoSettings()

        assert settings.app.log_level == LogLevel.INFO
        assert settings.engine.debounce_ms == 150
        assert settings.engine.execution_timeout_seconds is None
        assert settings.store.config_file.endswith("config.json")

    def test_debounce_bounds(self):
        with pytest.raises(ValidationError):
            EngineSettings(debounce_ms=-1)

    def test_log_file_expanded(self):
        settings = AppSettings(log_file="~/logs/zapgo.log")
        assert not settings.log_file.startswith("~")

    def test_log_level_from_string(self):
        assert AppSettings(log_level="DEBUG").log_level == LogLevel.DEBUG
