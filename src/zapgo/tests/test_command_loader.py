"""
Test suite for building the command registry from configuration.
"""

import pytest

from zapgo.commands import CommandRegistry, MatchType, build_command_registry, create_command
from zapgo.config import AppConfig, CommandConfig, default_app_config
from zapgo.plugins import ConfigPlugin, LinkOpenerPlugin, default_catalog
from zapgo.utils.error_handling import ConfigurationError

from conftest import RecordingHost


def make_config(commands, fallback=None):
    return AppConfig(commands=commands, fallback_command=fallback)


class TestCreateCommand:
    """Test creating a single command from configuration."""

    def test_link_opener_configured(self):
        config = CommandConfig(
            id="google",
            plugin_id="link_opener",
            triggers=["g"],
            name="Google",
            plugin_params={"template": "https://google.com/?q={$q}", "placeholders": "q"},
        )
        command = create_command(config, default_catalog(), RecordingHost())

        assert command.id == "google"
        assert command.name == "Google"
        assert isinstance(command.plugin, LinkOpenerPlugin)
        assert [p.name for p in command.params] == ["q"]

    def test_unknown_plugin(self):
        config = CommandConfig(plugin_id="nope", triggers=["x"])

        with pytest.raises(ConfigurationError):
            create_command(config, default_catalog(), RecordingHost())


class TestBuildCommandRegistry:
    """Test registry (re)population."""

    def test_registers_enabled_commands_in_order(self):
        config = make_config([
            CommandConfig(id="t", plugin_id="time", triggers=["time"]),
            CommandConfig(id="off", plugin_id="ai", triggers=["ai"], enabled=False),
            CommandConfig(id="c", plugin_id="config", triggers=["config"]),
        ])
        registry = build_command_registry(config, default_catalog(), RecordingHost())

        assert [cmd.id for cmd in registry] == ["t", "c"]
        assert registry.fallback is None

    def test_skips_unknown_plugins(self):
        config = make_config([
            CommandConfig(id="bad", plugin_id="missing", triggers=["x"]),
            CommandConfig(id="t", plugin_id="time", triggers=["time"]),
        ])
        registry = build_command_registry(config, default_catalog(), RecordingHost())

        assert [cmd.id for cmd in registry] == ["t"]

    def test_default_fallback_is_config(self):
        registry = build_command_registry(default_app_config(), default_catalog(), RecordingHost())

        assert len(registry) == 0
        assert isinstance(registry.fallback.plugin, ConfigPlugin)
        assert registry.find_matching_command("anything").match_type == MatchType.FALLBACK

    def test_reload_replaces_commands(self):
        registry = CommandRegistry()
        catalog = default_catalog()
        host = RecordingHost()

        build_command_registry(
            make_config([CommandConfig(id="a", plugin_id="ai", triggers=["ai"])]),
            catalog, host, registry,
        )
        first_plugin = registry.get_commands()[0].plugin
        build_command_registry(
            make_config([CommandConfig(id="a", plugin_id="ai", triggers=["ask"])]),
            catalog, host, registry,
        )

        assert len(registry) == 1
        assert registry.get_commands()[0].triggers == ["ask"]
        assert registry.get_commands()[0].plugin is not first_plugin

    def test_timeout_applied(self):
        config = make_config([CommandConfig(id="t", plugin_id="time", triggers=["time"])])
        registry = build_command_registry(config, default_catalog(), RecordingHost(), timeout=2.5)

        assert registry.get_commands()[0].timeout == 2.5

    def test_host_reaches_plugins(self):
        host = RecordingHost()
        config = make_config([CommandConfig(id="c", plugin_id="config", triggers=["config"])])
        registry = build_command_registry(config, default_catalog(), host)

        assert registry.get_commands()[0].plugin.host is host
