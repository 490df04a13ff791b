import random
from collections import Counter

from chatbot.core.client import MessageType
from chatbot.permissions import ExposureLevel, PermissionLevel
from chatbot.plugins import BasePlugin, CommandDefinitionArgument, command

from .config import GreeterSettings, greeter_settings


class GreeterPlugin(BasePlugin):
    """Small example plugin: greetings, dice and a per-user message counter."""

    def __init__(self, config: GreeterSettings | None = None) -> None:
        super().__init__()
        self.config = config or greeter_settings
        self.messages_seen: Counter[str] = Counter()

    async def message(self, bot, client, message) -> None:
        if client.is_me(message) or message.type is not MessageType.CREATE:
            return
        async with self.lock:
            self.messages_seen[message.user_name] += 1

    @command("hello", description="Displays hello world")
    async def hello(self, bot, client, message, args, trigger) -> None:
        await client.send_message(message.channel, self.config.greeting)

    @command(
        "greet",
        description="Greets someone by name",
        aliases=["hi"],
        arguments=[CommandDefinitionArgument(pattern=r"\w+", alias="name")],
    )
    async def greet(self, bot, client, message, args, trigger) -> None:
        await client.send_message(message.channel, f"Hello, {args['name']}!")

    @command(
        "roll",
        description="Rolls a die",
        arguments=[CommandDefinitionArgument(pattern=r"\d+", alias="sides", optional=True)],
    )
    async def roll(self, bot, client, message, args, trigger) -> None:
        sides = int(args["sides"]) if args["sides"] else self.config.default_sides
        if sides < 2 or sides > self.config.max_sides:
            await client.send_message(message.channel, f"Pick a die between 2 and {self.config.max_sides} sides.")
            return

        result = random.randint(1, sides)
        await client.send_message(message.channel, f"{message.user_name} rolled {result} (d{sides})")

    @command(
        "stats",
        description="Shows how many messages each user has sent",
        permission_level=PermissionLevel.OWNER,
        exposure_level=ExposureLevel.PRIVATE,
        unlisted=True,
    )
    async def stats(self, bot, client, message, args, trigger) -> None:
        async with self.lock:
            top = self.messages_seen.most_common(10)

        if not top:
            await client.send_message(message.channel, "No messages seen yet.")
            return

        lines = [f"{name}: {count}" for name, count in top]
        await client.send_message(message.channel, "\n".join(lines))
