"""Per-message routing of inbound messages to plugins and commands."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import TYPE_CHECKING, Any

from ..permissions.manager import AccessController
from ..plugins.commands.triggers import TriggerMatcher
from .help import HelpGenerator
from .utils import call_maybe_async

if TYPE_CHECKING:
    from ..plugins.commands.definition import CommandDefinition
    from .bot import ChatBot
    from .client import Message

logger = logging.getLogger(__name__)


class Dispatcher:
    """Fans each inbound message out to plugin hooks and command candidates.

    Every plugin ``message`` hook and every command match attempt runs as its own
    asyncio task. Tasks are fire-and-forget: nothing waits for them before the next
    message is handled, and an exception in one task is logged and goes no further.
    ``max_concurrent_tasks`` optionally bounds how many hook and attempt tasks run
    at once; ``0`` means unbounded.
    """

    def __init__(self, bot: ChatBot, max_concurrent_tasks: int = 0) -> None:
        self.bot = bot
        self.trigger_matcher = TriggerMatcher()
        self.access_controller = AccessController()
        self.help_generator = HelpGenerator(bot)
        self._semaphore = asyncio.Semaphore(max_concurrent_tasks) if max_concurrent_tasks > 0 else None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def dispatch(self, message: Message) -> asyncio.Task:
        """Schedule handling of ``message`` and return immediately."""
        return self._spawn(self.handle_message(message), "message", bounded=False)

    async def handle_message(self, message: Message) -> None:
        bot = self.bot
        client = bot.client
        command_prefix = await bot.get_command_prefix(message)
        parts = message.raw_message.split()

        if not bot.settings.command_lookup_disabled and self.trigger_matcher.is_commands_request(
            command_prefix, parts, message
        ):
            await self.help_generator.send(message, command_prefix)
            return

        from_me = client.is_me(message)

        for plugin in bot.plugins.plugins:
            self._spawn(call_maybe_async(plugin.message, bot, client, message), f"plugin {plugin.name} message hook")
            if from_me:
                continue

            for definition in bot.plugins.commands_for(plugin):
                self._spawn(
                    self.attempt(definition, message, command_prefix, parts),
                    f"command {definition.command_id}",
                )

        if from_me:
            return

        for definition in bot.commands.commands:
            self._spawn(self.attempt(definition, message, command_prefix, parts), f"command {definition.command_id}")

    async def attempt(
        self,
        definition: CommandDefinition,
        message: Message,
        command_prefix: str,
        parts: Sequence[str],
    ) -> bool:
        """Try to dispatch ``definition`` for ``message``; return True if its callback ran."""
        bot = self.bot
        client = bot.client

        if not message.message or not parts:
            return False

        prefix = await definition.resolve_prefix(bot, client, message) or command_prefix

        found = self.trigger_matcher.find(definition, prefix, parts, message)
        if found is None:
            return False
        trigger, matched_text = found

        if not self.access_controller.allow(definition, message, client):
            return False

        content = definition.matcher.strip_trigger(message.raw_message, matched_text)
        matched, args = definition.matcher.extract(content)
        if not matched:
            return False

        logger.info(f"<{message.channel}> {message.user_name}: {message.raw_message}")
        await call_maybe_async(definition.callback, bot, client, message, args, trigger)
        return True

    async def drain(self) -> None:
        """Wait until every in-flight task, including ones spawned meanwhile, has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self.drain()

    def _spawn(self, awaitable: Awaitable[Any], label: str, bounded: bool = True) -> asyncio.Task:
        task = asyncio.create_task(self._run_isolated(awaitable, label, bounded))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_isolated(self, awaitable: Awaitable[Any], label: str, bounded: bool) -> Any:
        try:
            if bounded and self._semaphore is not None:
                async with self._semaphore:
                    return await awaitable
            return await awaitable
        except Exception:
            logger.exception(f"Error in {label}")
            return None
