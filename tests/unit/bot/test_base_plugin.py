"""Tests for the plugin base class and command decorator."""

import pytest

from chatbot.permissions import ExposureLevel, PermissionLevel
from chatbot.plugins import BasePlugin, CommandDefinitionArgument, command


class WeatherPlugin(BasePlugin):
    @command(
        "forecast",
        description="Shows the forecast",
        aliases=["fc", "weather"],
        arguments=[CommandDefinitionArgument(pattern=r"\w+", alias="city")],
        permission_level=PermissionLevel.MODERATOR,
        exposure_level=ExposureLevel.PUBLIC,
    )
    async def forecast(self, bot, client, message, args, trigger):
        return args["city"]

    @command("alerts", command_id="weather-alerts-v2", unlisted=True, command_prefix="!")
    async def alerts(self, bot, client, message, args, trigger):
        pass

    async def helper(self):
        pass


class TestCommandDecorator:
    """Test the command decorator."""

    def test_metadata_stored(self):
        """Test the decorator stores metadata on the function."""

        @command("ping", description="Pong", aliases=["p"])
        async def ping(bot, client, message, args, trigger):
            pass

        meta = ping._command_definition
        assert meta["name"] == "ping"
        assert meta["triggers"] == ["ping", "p"]
        assert meta["description"] == "Pong"
        assert meta["arguments"] == []
        assert meta["permission_level"] == PermissionLevel.USER
        assert meta["command_id"] is None

    def test_function_unchanged(self):
        """Test the decorator returns the original function."""

        async def ping(bot, client, message, args, trigger):
            pass

        assert command("ping")(ping) is ping


class TestBasePlugin:
    """Test BasePlugin class."""

    def test_default_name(self):
        """Test the name is derived from the class name."""
        assert WeatherPlugin().name == "weather"

    def test_explicit_name(self):
        """Test an explicit name wins."""
        plugin = WeatherPlugin(name="meteo")

        assert plugin.name == "meteo"
        assert plugin.logger.name == "plugin.meteo"

    def test_commands_collected(self):
        """Test decorated methods become command definitions."""
        definitions = {definition.command_id: definition for definition in WeatherPlugin().commands()}

        assert set(definitions) == {"weather-forecast", "weather-alerts-v2"}

        forecast = definitions["weather-forecast"]
        assert forecast.triggers == ("forecast", "fc", "weather")
        assert forecast.arguments[0].alias == "city"
        assert forecast.permission_level is PermissionLevel.MODERATOR
        assert forecast.exposure_level is ExposureLevel.PUBLIC

        alerts = definitions["weather-alerts-v2"]
        assert alerts.unlisted is True
        assert alerts.command_prefix == "!"

    @pytest.mark.asyncio
    async def test_callback_is_bound(self):
        """Test collected callbacks are bound to the plugin instance."""
        plugin = WeatherPlugin()
        forecast = next(d for d in plugin.commands() if d.command_id == "weather-forecast")

        assert await forecast.callback(None, None, None, {"city": "oslo"}, "forecast") == "oslo"

    @pytest.mark.asyncio
    async def test_default_hooks(self, chat_bot, make_message):
        """Test the default hooks do nothing."""
        plugin = BasePlugin(name="plain")
        message = make_message("hi")

        assert plugin.commands() == []
        assert await plugin.message(chat_bot, chat_bot.client, message) is None
        assert plugin.help(chat_bot, chat_bot.client, message, False) is None
        assert await plugin.load(chat_bot.client) is None
        assert await plugin.save() is None

    def test_repr(self):
        """Test the plugin representation."""
        assert repr(WeatherPlugin()) == "<WeatherPlugin name='weather'>"
