"""
Test suite for the configuration manager.
"""

from typing import List, Optional

import pytest

from zapgo.config import AppConfig, CommandConfig, ConfigManager, ConfigurationError


class MemoryStore:
    """In-memory config store recording saves."""

    def __init__(self, config: Optional[AppConfig] = None, fail_save: bool = False, fail_load: bool = False):
        self.config = config
        self.fail_save = fail_save
        self.fail_load = fail_load
        self.saved: List[AppConfig] = []

    def load(self) -> Optional[AppConfig]:
        if self.fail_load:
            raise OSError("disk gone")
        return self.config

    def save(self, config: AppConfig) -> bool:
        if self.fail_save:
            return False
        self.saved.append(config)
        return True


def sample_config() -> AppConfig:
    return AppConfig(commands=[
        CommandConfig(id="t", plugin_id="time", triggers=["time"]),
        CommandConfig(id="a", plugin_id="ai", triggers=["ai"], enabled=False),
        CommandConfig(id="g", plugin_id="link_opener", triggers=["g"]),
    ])


class TestLoading:

    def test_load_from_store(self):
        manager = ConfigManager(MemoryStore(sample_config()))
        config = manager.load_config()

        assert [cmd.id for cmd in config.commands] == ["t", "a", "g"]

    def test_load_defaults_when_store_empty(self):
        config = ConfigManager(MemoryStore()).load_config()

        assert config.commands == []
        assert config.fallback_command.plugin_id == "config"

    def test_load_defaults_when_store_raises(self):
        config = ConfigManager(MemoryStore(sample_config(), fail_load=True)).load_config()
        assert config.commands == []

    def test_get_config_is_a_copy(self):
        manager = ConfigManager(MemoryStore(sample_config()))
        manager.load_config()

        manager.get_config().commands.clear()

        assert len(manager.get_config().commands) == 3


class TestQueries:

    def setup_method(self):
        self.manager = ConfigManager(MemoryStore(sample_config()))
        self.manager.load_config()

    def test_enabled_commands(self):
        assert [cmd.id for cmd in self.manager.get_enabled_commands()] == ["t", "g"]

    def test_commands_by_plugin(self):
        assert [cmd.id for cmd in self.manager.get_commands_by_plugin("ai")] == ["a"]

    def test_fallback(self):
        assert self.manager.get_fallback_command().plugin_id == "config"


class TestEditing:

    def setup_method(self):
        self.store = MemoryStore(sample_config())
        self.manager = ConfigManager(self.store)
        self.manager.load_config()

    def test_set_config_persists(self):
        self.manager.set_config(AppConfig())
        assert len(self.store.saved) == 1

    def test_set_config_failure_raises(self):
        manager = ConfigManager(MemoryStore(fail_save=True))

        with pytest.raises(ConfigurationError):
            manager.set_config(AppConfig())

    def test_update_existing_command(self):
        self.manager.update_command_config("t", {"triggers": ["clock"], "name": "Clock"})
        command = self.manager.get_config().commands[0]

        assert command.triggers == ["clock"]
        assert command.name == "Clock"
        assert command.plugin_id == "time"

    def test_update_unknown_command_appends(self):
        self.manager.update_command_config("new", {"plugin_id": "config", "triggers": ["cfg"]})
        command = self.manager.get_config().commands[-1]

        assert command.id == "new"
        assert command.plugin_id == "config"
        assert command.enabled is True

    def test_update_fallback(self):
        self.manager.update_fallback_command({"plugin_id": "ai"})
        assert self.manager.get_fallback_command().plugin_id == "ai"

    def test_update_fallback_when_none(self):
        self.manager.set_fallback_command(None)
        self.manager.update_fallback_command({"plugin_id": "ai"})
        fallback = self.manager.get_fallback_command()

        assert fallback.plugin_id == "ai"
        assert fallback.triggers == ["fallback"]
        assert fallback.id.startswith("fallback_")

    def test_add_command(self):
        command_id = self.manager.add_command("time", name="Clock")
        command = self.manager.get_config().commands[-1]

        assert command.id == command_id
        assert command_id.startswith("time_")
        assert command.triggers == ["time"]
        assert command.name == "Clock"

    def test_remove_command(self):
        self.manager.remove_command("a")
        assert [cmd.id for cmd in self.manager.get_config().commands] == ["t", "g"]

    def test_remove_fallback_by_id(self):
        self.manager.set_fallback_command(CommandConfig(id="fb", plugin_id="ai", triggers=["fallback"]))
        self.manager.remove_command("fb")

        assert self.manager.get_fallback_command() is None
