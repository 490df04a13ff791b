from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from .commands.definition import CommandDefinition

if TYPE_CHECKING:
    from ..core.bot import ChatBot
    from ..core.client import Client, Message


class BasePlugin:
    """Base class for bot plugins.

    Subclasses declare commands with the ``@command`` decorator and may override
    :meth:`message` to see every inbound message, :meth:`help` to replace the
    generated ``commands`` listing, and :meth:`load` / :meth:`save` to persist state.

    Hooks run concurrently with each other. Mutable plugin state should be guarded
    with :attr:`lock`.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name if name is not None else self.__class__.__name__.lower().replace("plugin", "")
        self.logger = logging.getLogger(f"plugin.{self.name}")
        self.lock = asyncio.Lock()

    def commands(self) -> list[CommandDefinition]:
        definitions = []
        for attr_name in dir(self):
            if attr_name.startswith("_"):
                continue

            attr = getattr(self, attr_name)
            meta = getattr(attr, "_command_definition", None)
            if not isinstance(meta, dict):
                continue

            definitions.append(
                CommandDefinition(
                    command_id=meta["command_id"] or f"{self.name}-{meta['name']}",
                    triggers=meta["triggers"],
                    callback=attr,
                    description=meta["description"],
                    arguments=meta["arguments"],
                    permission_level=meta["permission_level"],
                    exposure_level=meta["exposure_level"],
                    unlisted=meta["unlisted"],
                    command_prefix=meta["command_prefix"],
                    prefix_resolver=meta["prefix_resolver"],
                    disable_trigger_on_mention=meta["disable_trigger_on_mention"],
                )
            )
            self.logger.debug(f"Collected command: {attr_name} -> {meta['name']}")

        return definitions

    async def message(self, bot: ChatBot, client: Client, message: Message) -> None:
        """Called for every inbound message, including the bot's own."""

    def help(self, bot: ChatBot, client: Client, message: Message, detailed: bool) -> list[str] | None:
        """Return custom ``commands`` listing lines, or ``None`` to use the generated ones."""
        return None

    async def load(self, client: Client) -> None:
        pass

    async def save(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
