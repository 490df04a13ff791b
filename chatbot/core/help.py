from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .utils import call_maybe_async

if TYPE_CHECKING:
    from ..plugins.commands.definition import CommandDefinition
    from .bot import ChatBot
    from .client import Message

logger = logging.getLogger(__name__)

NO_COMMANDS_FOUND = "No commands found"


class HelpGenerator:
    """Builds the consolidated ``commands`` listing."""

    def __init__(self, bot: ChatBot) -> None:
        self.bot = bot

    async def build(self, message: Message, command_prefix: str) -> list[str]:
        """
        Collect help lines for every discoverable command.

        Plugins that return a non-empty custom ``help`` replace their generated
        lines. Unlisted commands are skipped. A plugin whose ``help`` fails falls
        back to its generated lines, and a command whose prefix cannot be resolved
        is left out. The result is sorted and never empty.

        Args:
            message: The message that requested the listing
            command_prefix: The bot-level prefix resolved for ``message``

        Returns:
            The sorted help lines
        """
        lines: list[str] = []

        for plugin in self.bot.plugins.plugins:
            try:
                custom = await call_maybe_async(plugin.help, self.bot, self.bot.client, message, False)
            except Exception:
                logger.exception(f"Error building help for plugin {plugin.name}")
                custom = None

            if custom:
                lines.extend(custom)
            else:
                lines.extend(
                    await self._command_lines(self.bot.plugins.commands_for(plugin), message, command_prefix)
                )

        lines.extend(await self._command_lines(self.bot.commands.commands, message, command_prefix))

        lines.sort()

        if not lines:
            lines = [NO_COMMANDS_FOUND]

        return lines

    async def send(self, message: Message, command_prefix: str) -> None:
        lines = await self.build(message, command_prefix)
        logger.info(f"<{message.channel}> {message.user_name}: requested command listing ({len(lines)} lines)")
        await self.bot.client.send_message(message.channel, "\n".join(lines))

    async def _command_lines(
        self, definitions: Iterable[CommandDefinition], message: Message, command_prefix: str
    ) -> list[str]:
        lines = []
        for definition in definitions:
            if definition.unlisted:
                continue

            try:
                prefix = await definition.resolve_prefix(self.bot, self.bot.client, message) or command_prefix
            except Exception:
                logger.exception(f"Error resolving prefix for command {definition.command_id}")
                continue

            lines.append(definition.help_line(prefix))
        return lines
