"""Trigger matching for command invocations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...core.client import Message
    from .definition import CommandDefinition

COMMANDS_TRIGGER = "commands"


class TriggerMatcher:
    """Decides whether a message invokes a command trigger.

    A trigger matches literally when the first whitespace token of the raw message is
    ``prefix + trigger``, or, for messages of more than one token, when the message
    starts with a mention of the bot followed by the trigger word.
    """

    def match(
        self,
        definition: CommandDefinition,
        trigger: str,
        prefix: str,
        parts: Sequence[str],
        message: Message,
    ) -> tuple[bool, str]:
        if not parts:
            return False, ""

        if parts[0] == prefix + trigger:
            return True, parts[0]

        if not definition.disable_trigger_on_mention and len(parts) > 1:
            return message.is_mention_trigger(trigger)

        return False, ""

    def find(
        self,
        definition: CommandDefinition,
        prefix: str,
        parts: Sequence[str],
        message: Message,
    ) -> tuple[str, str] | None:
        """Return ``(trigger, matched_text)`` for the first matching trigger, if any."""
        for trigger in definition.triggers:
            matched, matched_text = self.match(definition, trigger, prefix, parts, message)
            if matched:
                return trigger, matched_text
        return None

    def is_commands_request(self, prefix: str, parts: Sequence[str], message: Message) -> bool:
        if parts and parts[0] == prefix + COMMANDS_TRIGGER:
            return True
        triggered, _ = message.is_mention_trigger(COMMANDS_TRIGGER)
        return triggered
