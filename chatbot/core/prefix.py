"""Command prefix resolution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Union

from .utils import call_maybe_async

if TYPE_CHECKING:
    from .bot import ChatBot
    from .client import Client, Message

DEFAULT_COMMAND_PREFIX = "?"

PrefixFunc = Callable[["ChatBot", "Client", "Message"], Union[str, Awaitable[str]]]


class PrefixResolver(ABC):
    """Chooses the command prefix for a message."""

    @abstractmethod
    def resolve(self, bot: ChatBot, client: Client, message: Message) -> str | Awaitable[str]:
        """Return the prefix to use for ``message``, or ``""`` to defer to the next source."""


class StaticPrefix(PrefixResolver):
    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def resolve(self, bot: ChatBot, client: Client, message: Message) -> str:
        return self.prefix

    def __repr__(self) -> str:
        return f"StaticPrefix({self.prefix!r})"


class FunctionPrefix(PrefixResolver):
    """Delegates to a function of ``(bot, client, message)``; coroutine functions are awaited."""

    def __init__(self, func: PrefixFunc) -> None:
        self.func = func

    def resolve(self, bot: ChatBot, client: Client, message: Message) -> str | Awaitable[str]:
        return self.func(bot, client, message)

    def __repr__(self) -> str:
        return f"FunctionPrefix({getattr(self.func, '__name__', self.func)!r})"


def as_prefix_resolver(value: Any) -> PrefixResolver | None:
    """Coerce a string, callable or resolver into a :class:`PrefixResolver`."""
    if value is None or isinstance(value, PrefixResolver):
        return value
    if isinstance(value, str):
        return StaticPrefix(value) if value else None
    if callable(value):
        return FunctionPrefix(value)
    raise TypeError(f"Cannot use {value!r} as a command prefix")


async def resolve_prefix(
    resolver: PrefixResolver | None, bot: ChatBot, client: Client, message: Message
) -> str:
    if resolver is None:
        return ""
    prefix = await call_maybe_async(resolver.resolve, bot, client, message)
    return prefix or ""
