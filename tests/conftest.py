"""Pytest configuration and shared fixtures."""

import logging
import re
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from chatbot.core.bot import ChatBot
from chatbot.core.client import Client, Message, MessageType
from chatbot.config.settings import BotSettings

# Disable logging during tests
logging.disable(logging.CRITICAL)

BOT_USER_ID = "999999999"
OWNER_USER_ID = "555555555"


class FakeMessage(Message):
    """In-memory message used in place of a transport message."""

    def __init__(
        self,
        text: str,
        user_id: str = "111111111",
        user_name: str = "testuser",
        channel: str = "444444444",
        private: bool = False,
        processed: str | None = None,
        message_type: MessageType = MessageType.CREATE,
    ) -> None:
        self._text = text
        self._user_id = user_id
        self._user_name = user_name
        self._channel = channel
        self._processed = processed
        self._type = message_type
        self.private = private

    @property
    def channel(self) -> str:
        return self._channel

    @property
    def user_name(self) -> str:
        return self._user_name

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def raw_message(self) -> str:
        return self._text

    @property
    def message(self) -> str:
        return self._text if self._processed is None else self._processed

    @property
    def type(self) -> MessageType:
        return self._type

    @property
    def timestamp(self) -> datetime:
        return datetime(2022, 1, 1, tzinfo=timezone.utc)

    def is_mention_trigger(self, word: str) -> tuple[bool, str]:
        match = re.match(rf"^<@!?{BOT_USER_ID}>\s+{re.escape(word)}(?=\s|$)", self._text)
        if match is None:
            return False, ""
        return True, match.group(0)


class FakeClient(Client):
    """Transport double that records sent messages and answers access questions from sets."""

    def __init__(self, messages: list[Message] | None = None) -> None:
        self.messages = messages or []
        self.moderators: set[str] = set()
        self.channel_owners: set[str] = set()
        self.owner_user_id = OWNER_USER_ID
        self.send_message = AsyncMock()
        self.opened = False
        self.closed = False

    async def open(self):
        self.opened = True
        return self._stream()

    async def _stream(self):
        for message in self.messages:
            yield message

    async def close(self) -> None:
        self.closed = True

    async def send_message(self, channel: str, text: str) -> None:  # replaced by an AsyncMock per instance
        pass

    def is_private(self, message: Message) -> bool:
        return message.private

    def is_moderator(self, message: Message) -> bool:
        return message.user_id in self.moderators

    def is_channel_owner(self, message: Message) -> bool:
        return message.user_id in self.channel_owners

    def is_bot_owner(self, message: Message) -> bool:
        return message.user_id == self.owner_user_id

    def is_me(self, message: Message) -> bool:
        return message.user_id == BOT_USER_ID


@pytest.fixture
def make_message():
    """Factory for creating fake messages."""
    return FakeMessage


@pytest.fixture
def fake_client():
    """Fake chat client."""
    return FakeClient()


@pytest.fixture
def bot_settings():
    """Bot settings isolated from the environment and .env files."""
    return BotSettings(_env_file=None, command_prefix="?", owner_user_id=OWNER_USER_ID)


@pytest.fixture
def chat_bot(fake_client, bot_settings):
    """Bot wired to the fake client."""
    return ChatBot(fake_client, bot_settings)


@pytest.fixture
def sent_texts(fake_client):
    """Return the texts sent through the fake client so far."""

    def collect() -> list[str]:
        return [call.args[1] for call in fake_client.send_message.await_args_list]

    return collect
