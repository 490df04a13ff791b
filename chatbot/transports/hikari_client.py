"""Discord transport built on hikari."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import AsyncIterator
from datetime import datetime

import hikari

from ..config.settings import settings
from ..core.client import Client, Message, MessageType

logger = logging.getLogger(__name__)

DEFAULT_INTENTS = (
    hikari.Intents.ALL_MESSAGES
    | hikari.Intents.GUILDS
    | hikari.Intents.GUILD_MEMBERS
    | hikari.Intents.MESSAGE_CONTENT
)

MODERATOR_PERMISSIONS = hikari.Permissions.MANAGE_MESSAGES

USER_MENTION = re.compile(r"<@!?(\d+)>")
ROLE_MENTION = re.compile(r"<@&(\d+)>")
CHANNEL_MENTION = re.compile(r"<#(\d+)>")


def calculate_member_permissions(member: hikari.Member, guild: hikari.Guild) -> hikari.Permissions:
    """
    Calculate the guild-level permissions of a member.

    Args:
        member: The guild member to calculate permissions for
        guild: The guild the member belongs to

    Returns:
        The combined permissions of @everyone and the member's roles
    """
    # @everyone role has same ID as guild
    everyone_role = guild.get_role(guild.id)
    permissions = everyone_role.permissions if everyone_role else hikari.Permissions.NONE

    for role_id in member.role_ids:
        role = guild.get_role(role_id)
        if role:
            permissions |= role.permissions

    return permissions


class HikariMessage(Message):
    """A Discord message received through a :class:`HikariClient`.

    Edits arrive as ``MessageUpdateEvent``s, whose content and author may be missing
    when Discord did not send them.
    """

    def __init__(
        self,
        client: HikariClient,
        event: hikari.MessageCreateEvent | hikari.MessageUpdateEvent,
        message_type: MessageType = MessageType.CREATE,
    ) -> None:
        self._client = client
        self.event = event
        self._type = message_type
        self._content: str | None = None

    @property
    def guild_id(self) -> hikari.Snowflake | None:
        return getattr(self.event, "guild_id", None)

    @property
    def member(self) -> hikari.Member | None:
        return getattr(self.event, "member", None)

    @property
    def author(self) -> hikari.User | None:
        author = self.event.author
        if author is None or author is hikari.UNDEFINED:
            return None
        return author

    @property
    def type(self) -> MessageType:
        return self._type

    @property
    def channel(self) -> str:
        return str(self.event.channel_id)

    @property
    def user_name(self) -> str:
        author = self.author
        if author is None:
            return ""
        if self.member is not None:
            return self.member.display_name
        return author.display_name or author.username

    @property
    def user_id(self) -> str:
        if self.author is None:
            return ""
        return str(self.author.id)

    @property
    def user_avatar(self) -> str:
        if self.author is None:
            return ""
        return str(self.author.display_avatar_url)

    @property
    def message_id(self) -> str:
        return str(self.event.message_id)

    @property
    def raw_message(self) -> str:
        content = self.event.content
        return content if isinstance(content, str) else ""

    @property
    def message(self) -> str:
        if self._content is None:
            self._content = self._client.replace_mentions(self)
        return self._content

    @property
    def timestamp(self) -> datetime | None:
        return self.event.message.timestamp

    def is_mention_trigger(self, word: str) -> tuple[bool, str]:
        return self._client.match_mention_trigger(self.raw_message, word)


class HikariClient(Client):
    """Discord :class:`Client` backed by a :class:`hikari.GatewayBot`.

    New and edited messages are queued by ``MessageCreateEvent`` and
    ``MessageUpdateEvent`` listeners and handed to the bot through the stream
    returned by :meth:`open`.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        owner_user_id: str | None = None,
        client_id: str | None = None,
        intents: hikari.Intents = DEFAULT_INTENTS,
        gateway: hikari.GatewayBot | None = None,
    ) -> None:
        if gateway is None:
            token = token or settings.discord_token
            if not token:
                raise ValueError("Missing discord token")
            gateway = hikari.GatewayBot(token=token, intents=intents)

        self.gateway = gateway
        self.owner_user_id = owner_user_id if owner_user_id is not None else settings.owner_user_id
        self.client_id = client_id if client_id is not None else settings.client_id
        self._queue: asyncio.Queue[HikariMessage | None] = asyncio.Queue()

    @property
    def rest(self) -> hikari.api.RESTClient:
        return self.gateway.rest

    @property
    def cache(self) -> hikari.api.Cache:
        return self.gateway.cache

    @property
    def user_id(self) -> int | None:
        me = self.gateway.get_me()
        if me is not None:
            return int(me.id)
        if self.client_id:
            return int(self.client_id)
        return None

    async def open(self) -> AsyncIterator[Message]:
        self.gateway.subscribe(hikari.MessageCreateEvent, self.on_message_create)
        self.gateway.subscribe(hikari.MessageUpdateEvent, self.on_message_update)
        logger.info("Starting Discord gateway...")
        await self.gateway.start()
        return self._messages()

    async def close(self) -> None:
        self.gateway.unsubscribe(hikari.MessageCreateEvent, self.on_message_create)
        self.gateway.unsubscribe(hikari.MessageUpdateEvent, self.on_message_update)
        await self.gateway.close()
        await self._queue.put(None)

    async def on_message_create(self, event: hikari.MessageCreateEvent) -> None:
        await self._queue.put(HikariMessage(self, event))

    async def on_message_update(self, event: hikari.MessageUpdateEvent) -> None:
        await self._queue.put(HikariMessage(self, event, MessageType.UPDATE))

    async def _messages(self) -> AsyncIterator[Message]:
        while True:
            message = await self._queue.get()
            if message is None:
                return
            yield message

    async def send_message(self, channel: str, text: str) -> None:
        await self.rest.create_message(int(channel), text)

    def is_private(self, message: HikariMessage) -> bool:
        return message.guild_id is None

    def is_moderator(self, message: HikariMessage) -> bool:
        guild = self._guild(message)
        if guild is None or message.member is None:
            return False

        permissions = calculate_member_permissions(message.member, guild)
        if permissions & hikari.Permissions.ADMINISTRATOR:
            return True
        return (permissions & MODERATOR_PERMISSIONS) == MODERATOR_PERMISSIONS

    def is_channel_owner(self, message: HikariMessage) -> bool:
        guild = self._guild(message)
        return guild is not None and str(guild.owner_id) == message.user_id

    def is_bot_owner(self, message: Message) -> bool:
        return bool(self.owner_user_id) and message.user_id == str(self.owner_user_id)

    def is_me(self, message: Message) -> bool:
        user_id = self.user_id
        return user_id is not None and message.user_id == str(user_id)

    def match_mention_trigger(self, raw_message: str, word: str) -> tuple[bool, str]:
        """Match ``<@bot> word`` (or ``<@!bot> word``) at the start of ``raw_message``."""
        user_id = self.user_id
        if user_id is None:
            return False, ""

        pattern = rf"^\s*<@!?{user_id}>\s+{re.escape(word)}(?=\s|$)"
        match = re.match(pattern, raw_message)
        if match is None:
            return False, ""
        return True, match.group(0).strip()

    def replace_mentions(self, message: HikariMessage) -> str:
        """Replace user, role and channel mentions in the raw text with display names."""
        content = message.raw_message
        mentioned_users = getattr(message.event.message, "user_mentions", None) or {}

        def user_name(match: re.Match) -> str:
            user_id = int(match.group(1))
            if message.guild_id is not None:
                member = self.cache.get_member(message.guild_id, user_id)
                if member is not None:
                    return f"@{member.display_name}"
            user = mentioned_users.get(user_id)
            return f"@{user.username}" if user is not None else match.group(0)

        def role_name(match: re.Match) -> str:
            role = self.cache.get_role(int(match.group(1)))
            return f"@{role.name}" if role is not None else match.group(0)

        def channel_name(match: re.Match) -> str:
            channel = self.cache.get_guild_channel(int(match.group(1)))
            return f"#{channel.name}" if channel is not None else match.group(0)

        content = ROLE_MENTION.sub(role_name, content)
        content = USER_MENTION.sub(user_name, content)
        return CHANNEL_MENTION.sub(channel_name, content)

    def _guild(self, message: HikariMessage) -> hikari.Guild | None:
        if message.guild_id is None:
            return None
        return self.cache.get_guild(message.guild_id)
