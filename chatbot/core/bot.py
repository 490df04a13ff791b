from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any

from ..config.settings import BotSettings, settings as default_settings
from ..plugins.commands.definition import CommandCallback, CommandDefinition
from ..plugins.commands.registry import CommandRegistry, PluginRegistry
from .client import Client, Message
from .dispatcher import Dispatcher
from .errors import ConfigurationError
from .prefix import DEFAULT_COMMAND_PREFIX, PrefixFunc, PrefixResolver, as_prefix_resolver, resolve_prefix
from .utils import call_maybe_async

logger = logging.getLogger(__name__)


class ChatBot:
    """Routes messages from a chat :class:`Client` to registered plugins and commands.

    All plugins and commands must be registered before :meth:`open` is called; the
    registries are frozen once the bot opens.
    """

    def __init__(
        self,
        client: Client,
        settings: BotSettings | None = None,
        *,
        command_prefix_resolver: PrefixResolver | PrefixFunc | None = None,
        state: Any = None,
    ) -> None:
        self.client = client
        self.settings = settings if settings is not None else default_settings
        self.command_prefix_resolver = as_prefix_resolver(command_prefix_resolver)
        self.state = state

        self.plugins = PluginRegistry()
        self.commands = CommandRegistry()
        self.dispatcher = Dispatcher(self, max_concurrent_tasks=self.settings.max_concurrent_tasks)

        self.is_open = False
        self._listen_task: asyncio.Task | None = None

    def register_plugin(self, plugin: Any) -> None:
        self.plugins.register(plugin)

    def register_command(self, trigger: str, description: str, callback: CommandCallback) -> CommandDefinition:
        return self.register_prefix_command("", trigger, description, callback)

    def register_prefix_command(
        self, prefix: str, trigger: str, description: str, callback: CommandCallback
    ) -> CommandDefinition:
        """Register a standalone command with a static prefix override ("" uses the bot prefix)."""
        definition = CommandDefinition(
            command_id=f"chatbot-cmd-{trigger}",
            description=description,
            triggers=(trigger,),
            command_prefix=prefix,
            callback=callback,
        )
        self.commands.register(definition)
        return definition

    def register_command_definition(self, definition: CommandDefinition) -> None:
        self.commands.register(definition)

    async def get_command_prefix(self, message: Message) -> str:
        """Get the bot-level prefix for ``message``, falling back to the configured and default prefixes."""
        prefix = await resolve_prefix(self.command_prefix_resolver, self, self.client, message)
        if prefix:
            return prefix

        if self.settings.command_prefix:
            return self.settings.command_prefix

        return DEFAULT_COMMAND_PREFIX

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` listing every misconfigured plugin and command."""
        errors = self.plugins.validate() + self.commands.validate()
        if errors:
            raise ConfigurationError(errors)

    async def open(self) -> bool:
        """
        Validate registrations, connect the client and start the receive loop.

        Returns:
            True if the bot started. On a configuration or connection error the
            failure is logged and the bot stays inert.
        """
        if self.is_open:
            logger.warning("Bot is already open")
            return True

        self.plugins.freeze()
        self.commands.freeze()

        try:
            self.validate()
        except ConfigurationError as e:
            for error in e.errors:
                logger.error(error)
            logger.error("A misconfigured plugin or command was found, not starting")
            return False

        try:
            stream = await self.client.open()
        except Exception as e:
            logger.error(f"Error opening chat client: {e}")
            return False

        for plugin in self.plugins.plugins:
            try:
                await call_maybe_async(plugin.load, self.client)
            except Exception as e:
                logger.error(f"Error loading plugin {plugin.name}: {e}")

        self._listen_task = asyncio.create_task(self.listen(stream))
        self.is_open = True
        logger.info(f"Bot opened with {len(self.plugins)} plugin(s) and {len(self.commands)} command(s)")
        return True

    async def listen(self, stream: AsyncIterator[Message]) -> None:
        logger.info("Listening")
        async for message in stream:
            self.dispatcher.dispatch(message)
        logger.info("Message stream closed")

    async def wait_closed(self) -> None:
        if self._listen_task is not None:
            await self._listen_task

    async def save(self) -> None:
        """Run every plugin's ``save`` hook."""
        for plugin in self.plugins.plugins:
            try:
                await call_maybe_async(plugin.save)
            except Exception as e:
                logger.error(f"Error saving plugin {plugin.name}: {e}")

    async def close(self) -> None:
        """Stop receiving, let in-flight dispatches finish and close the client."""
        if self._listen_task is not None:
            self._listen_task.cancel()
            try:
                await self._listen_task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.error(f"Receive loop ended with an error: {e}")
            self._listen_task = None

        await self.dispatcher.drain()

        try:
            await self.client.close()
        except Exception as e:
            logger.error(f"Error closing chat client: {e}")

        self.is_open = False
        logger.info("Bot closed")
