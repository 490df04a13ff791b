"""Tests for the plugin and command registries."""

from unittest.mock import AsyncMock

import pytest

from chatbot.core.errors import RegistryFrozenError
from chatbot.plugins import BasePlugin, CommandDefinitionArgument, command
from chatbot.plugins.commands.definition import CommandDefinition
from chatbot.plugins.commands.registry import CommandRegistry, PluginRegistry


def make_definition(command_id="test", **kwargs):
    kwargs.setdefault("triggers", ("test",))
    kwargs.setdefault("callback", AsyncMock())
    return CommandDefinition(command_id=command_id, **kwargs)


class SamplePlugin(BasePlugin):
    @command("ping", description="Pong")
    async def ping(self, bot, client, message, args, trigger):
        pass


class BrokenPlugin(BasePlugin):
    @command("bad", arguments=[CommandDefinitionArgument(pattern="", alias="value")])
    async def bad(self, bot, client, message, args, trigger):
        pass


class TestCommandRegistry:
    """Test CommandRegistry class."""

    def test_register_and_get(self):
        """Test registering a command."""
        registry = CommandRegistry()
        definition = make_definition()

        registry.register(definition)

        assert registry.get("test") is definition
        assert "test" in registry
        assert len(registry) == 1
        assert registry.commands == (definition,)

    def test_duplicate_replaces(self):
        """Test a duplicate id replaces the earlier definition."""
        registry = CommandRegistry()
        first = make_definition()
        second = make_definition()

        registry.register(first)
        registry.register(second)

        assert len(registry) == 1
        assert registry.get("test") is second

    def test_register_after_freeze(self):
        """Test registration fails once frozen."""
        registry = CommandRegistry()
        registry.freeze()

        assert registry.frozen is True
        with pytest.raises(RegistryFrozenError):
            registry.register(make_definition())

    def test_validate(self):
        """Test validation errors are collected with a prefix."""
        registry = CommandRegistry()
        registry.register(make_definition())
        registry.register(make_definition("broken", triggers=()))

        assert registry.validate() == ["Command validation error: broken: Missing required Triggers"]


class TestPluginRegistry:
    """Test PluginRegistry class."""

    def test_register_and_get(self):
        """Test registering a plugin."""
        registry = PluginRegistry()
        plugin = SamplePlugin()

        registry.register(plugin)

        assert registry.get("sample") is plugin
        assert "sample" in registry
        assert registry.plugins == (plugin,)

    def test_duplicate_name_replaces(self):
        """Test a duplicate name replaces the earlier plugin."""
        registry = PluginRegistry()
        first = SamplePlugin()
        second = SamplePlugin()

        registry.register(first)
        registry.register(second)

        assert registry.plugins == (second,)

    def test_freeze_snapshots_commands(self):
        """Test frozen registries return the same definitions every time."""
        registry = PluginRegistry()
        plugin = SamplePlugin()
        registry.register(plugin)

        registry.freeze()

        first = registry.commands_for(plugin)
        assert first is registry.commands_for(plugin)
        assert [definition.command_id for definition in first] == ["sample-ping"]

    def test_register_after_freeze(self):
        """Test registration fails once frozen."""
        registry = PluginRegistry()
        registry.freeze()

        with pytest.raises(RegistryFrozenError):
            registry.register(SamplePlugin())

    def test_validate_valid(self):
        """Test a well formed plugin has no errors."""
        registry = PluginRegistry()
        registry.register(SamplePlugin())

        assert registry.validate() == []

    def test_validate_missing_name(self):
        """Test a plugin without a name is reported."""
        registry = PluginRegistry()
        registry.register(SamplePlugin(name=""))

        assert registry.validate() == ["Plugin validation error: : Missing required Name"]

    def test_validate_command_errors(self):
        """Test command errors are reported against their plugin."""
        registry = PluginRegistry()
        registry.register(BrokenPlugin())

        assert registry.validate() == [
            "Plugin validation error: broken: broken-bad: Argument value is missing required Pattern"
        ]

    def test_failing_commands_reported(self):
        """Test a plugin whose commands() raises is reported, not raised."""
        registry = PluginRegistry()
        plugin = SamplePlugin()
        plugin.commands = lambda: 1 / 0
        registry.register(plugin)

        assert registry.validate() == ["Plugin validation error: sample: Error collecting commands: division by zero"]

        registry.freeze()

        assert registry.commands_for(plugin) == ()
        assert registry.validate() == ["Plugin validation error: sample: Error collecting commands: division by zero"]

    def test_plugin_without_commands(self):
        """Test plugins whose commands() returns None are tolerated."""
        registry = PluginRegistry()
        plugin = SamplePlugin()
        plugin.commands = lambda: None
        registry.register(plugin)

        registry.freeze()

        assert registry.commands_for(plugin) == ()
        assert registry.validate() == []
