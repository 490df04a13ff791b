"""Transport abstractions consumed by the dispatch engine.

A chat platform integration provides a :class:`Client` that yields
:class:`Message` objects. The engine never talks to a platform directly;
everything it needs to know about a message or its sender goes through
these two interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from datetime import datetime
from enum import Enum


class MessageType(Enum):
    """What happened to a message on the platform."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Message(ABC):
    """An inbound chat message as seen by the dispatcher."""

    @property
    @abstractmethod
    def channel(self) -> str:
        """Identifier of the channel the message was posted in."""

    @property
    @abstractmethod
    def user_name(self) -> str:
        """Display name of the author."""

    @property
    @abstractmethod
    def user_id(self) -> str:
        """Identifier of the author."""

    @property
    @abstractmethod
    def raw_message(self) -> str:
        """Unprocessed message text."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Message text with mentions, roles and channels replaced by display names."""

    @property
    @abstractmethod
    def timestamp(self) -> datetime | None:
        """Time the message was created."""

    @abstractmethod
    def is_mention_trigger(self, word: str) -> tuple[bool, str]:
        """
        Check whether the message starts with a mention of the bot followed by ``word``.

        Returns:
            A ``(matched, matched_text)`` pair where ``matched_text`` is the leading
            part of the raw message that forms the invocation
        """

    @property
    def type(self) -> MessageType:
        """Whether the message was created, edited or deleted."""
        return MessageType.CREATE

    @property
    def message_id(self) -> str:
        return ""

    @property
    def user_avatar(self) -> str:
        return ""


class Client(ABC):
    """Chat platform capability used by the bot."""

    @abstractmethod
    async def open(self) -> AsyncIterator[Message]:
        """Connect to the platform and return the stream of inbound messages."""

    async def close(self) -> None:
        """Disconnect from the platform."""

    @abstractmethod
    async def send_message(self, channel: str, text: str) -> None:
        """Post ``text`` to ``channel``."""

    @abstractmethod
    def is_private(self, message: Message) -> bool:
        """True when the message was sent in a private (direct) context."""

    @abstractmethod
    def is_moderator(self, message: Message) -> bool:
        ...

    @abstractmethod
    def is_channel_owner(self, message: Message) -> bool:
        ...

    @abstractmethod
    def is_bot_owner(self, message: Message) -> bool:
        ...

    @abstractmethod
    def is_me(self, message: Message) -> bool:
        """True when the bot itself authored the message."""
