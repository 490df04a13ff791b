"""Command definitions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import IntEnum
from functools import cached_property
from typing import TYPE_CHECKING, Any, Union

from ...core.prefix import PrefixFunc, PrefixResolver, as_prefix_resolver, resolve_prefix
from ...permissions.levels import ExposureLevel, PermissionLevel
from .argument_types import CommandDefinitionArgument
from .parsers import ArgumentExtractor

if TYPE_CHECKING:
    from ...core.bot import ChatBot
    from ...core.client import Client, Message

CommandCallback = Callable[
    ["ChatBot", "Client", "Message", dict[str, str], str], Union[None, Awaitable[None]]
]


def _as_tuple(value: Any) -> tuple:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    try:
        return tuple(value)
    except TypeError:
        return (value,)


def _as_enum(enum_type: type[IntEnum], value: Any) -> Any:
    """Convert ``value`` to ``enum_type``, leaving unknown values for :meth:`CommandDefinition.validate`."""
    try:
        return enum_type(value)
    except (TypeError, ValueError):
        return value


@dataclass(frozen=True)
class CommandDefinition:
    """Immutable description of one invocable command.

    The callback is called as ``callback(bot, client, message, args, trigger)``
    where ``args`` maps argument aliases to the matched text and ``trigger`` is the
    trigger word that matched. Its return value is ignored.

    Fields default to empty values so that incomplete definitions can be built and
    reported by :meth:`validate` when the bot is opened.
    """

    command_id: str = ""
    triggers: tuple[str, ...] = ()
    callback: CommandCallback | None = None
    description: str = ""
    arguments: tuple[CommandDefinitionArgument, ...] = ()
    permission_level: PermissionLevel = PermissionLevel.USER
    exposure_level: ExposureLevel = ExposureLevel.EVERYWHERE
    unlisted: bool = False
    command_prefix: str = ""
    prefix_resolver: PrefixResolver | PrefixFunc | None = None
    disable_trigger_on_mention: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "triggers", _as_tuple(self.triggers))
        object.__setattr__(self, "arguments", _as_tuple(self.arguments))
        object.__setattr__(self, "permission_level", _as_enum(PermissionLevel, self.permission_level))
        object.__setattr__(self, "exposure_level", _as_enum(ExposureLevel, self.exposure_level))
        try:
            object.__setattr__(self, "prefix_resolver", as_prefix_resolver(self.prefix_resolver))
        except TypeError:
            # Left as given and reported by validate()
            pass

    @cached_property
    def matcher(self) -> ArgumentExtractor:
        """Argument matcher compiled once for this definition."""
        return ArgumentExtractor(self.arguments)

    def validate(self) -> list[str]:
        errors = []

        if not self.command_id:
            errors.append("Missing required CommandID")

        if not self.triggers:
            errors.append(f"{self.command_id}: Missing required Triggers")
        elif not all(isinstance(trigger, str) and trigger for trigger in self.triggers):
            errors.append(f"{self.command_id}: Triggers must be non-empty strings")

        if self.callback is None:
            errors.append(f"{self.command_id}: Missing required Callback")
        elif not callable(self.callback):
            errors.append(f"{self.command_id}: Callback is not callable")

        if not isinstance(self.permission_level, PermissionLevel):
            errors.append(f"{self.command_id}: Invalid PermissionLevel {self.permission_level!r}")
        if not isinstance(self.exposure_level, ExposureLevel):
            errors.append(f"{self.command_id}: Invalid ExposureLevel {self.exposure_level!r}")
        if self.prefix_resolver is not None and not isinstance(self.prefix_resolver, PrefixResolver):
            errors.append(f"{self.command_id}: Invalid prefix resolver {self.prefix_resolver!r}")

        if not all(isinstance(argument, CommandDefinitionArgument) for argument in self.arguments):
            errors.append(f"{self.command_id}: Arguments must be CommandDefinitionArgument instances")
        else:
            errors.extend(f"{self.command_id}: {error}" for error in ArgumentExtractor.validate(self.arguments))
        return errors

    async def resolve_prefix(self, bot: ChatBot, client: Client, message: Message) -> str:
        """Return the command's own prefix, or ``""`` when it has none."""
        if self.prefix_resolver is not None:
            prefix = await resolve_prefix(self.prefix_resolver, bot, client, message)
            if prefix:
                return prefix
        return self.command_prefix

    def help_line(self, prefix: str) -> str:
        command_string = f"{prefix}{self.triggers[0]}"
        for argument in self.arguments:
            command_string += f" <{argument.alias}>"
        return f"`{command_string}` - {self.description}"
