"""Argument extraction from message text."""

import logging
import re
from collections.abc import Sequence

from .argument_types import CommandDefinitionArgument

logger = logging.getLogger(__name__)


class ArgumentExtractor:
    """Matches the text after a trigger against a command's ordered arguments.

    All arguments are compiled into a single anchored pattern: each one becomes a
    named group, every group after the first is preceded by a whitespace separator,
    and optional arguments make their whole group (separator included) optional.
    """

    def __init__(self, arguments: Sequence[CommandDefinitionArgument]) -> None:
        self.arguments = tuple(arguments)
        self.pattern = self.build_pattern(self.arguments)
        self._regex = re.compile(self.pattern) if self.arguments else None

    @staticmethod
    def build_pattern(arguments: Sequence[CommandDefinitionArgument]) -> str:
        parts = []
        for i, argument in enumerate(arguments):
            if i == 0:
                part = f"(?P<{argument.alias}>{argument.pattern})"
            else:
                part = rf"(?:\s+(?P<{argument.alias}>{argument.pattern}))"

            if argument.optional:
                part += "?"

            parts.append(part)
        return "".join(parts)

    @classmethod
    def validate(cls, arguments: Sequence[CommandDefinitionArgument]) -> list[str]:
        """Return a list of configuration problems with ``arguments``."""
        errors = []
        seen: set[str] = set()

        for i, argument in enumerate(arguments):
            label = argument.alias or f"#{i}"
            if not argument.pattern:
                errors.append(f"Argument {label} is missing required Pattern")
            if not argument.alias:
                errors.append(f"Argument {label} is missing required Alias")
            elif not argument.alias.isidentifier():
                errors.append(f"Argument alias {argument.alias!r} must be a valid identifier")
            elif argument.alias in seen:
                errors.append(f"Argument alias {argument.alias!r} is used more than once")
            seen.add(argument.alias)

        optional_seen = False
        for argument in arguments:
            if argument.optional:
                optional_seen = True
            elif optional_seen:
                errors.append(
                    f"Required argument {argument.alias!r} follows an optional argument; "
                    "only trailing arguments may be optional"
                )
                break

        if not errors and arguments:
            try:
                re.compile(cls.build_pattern(arguments))
            except re.error as e:
                errors.append(f"Invalid argument pattern: {e}")

        return errors

    @staticmethod
    def strip_trigger(raw_message: str, matched_trigger: str) -> str:
        """Remove the invocation token and surrounding whitespace from the raw text."""
        return raw_message.strip().removeprefix(matched_trigger).strip()

    def extract(self, content: str) -> tuple[bool, dict[str, str]]:
        """
        Extract argument values from ``content``.

        Args:
            content: Message text with the trigger token already stripped

        Returns:
            ``(True, {alias: value})`` when the whole of ``content`` matches, otherwise
            ``(False, {})``. Optional arguments that were not supplied map to ``""``.
        """
        if not self.arguments:
            return True, {}

        match = self._regex.fullmatch(content)
        if match is None:
            return False, {}

        values = {argument.alias: match.group(argument.alias) or "" for argument in self.arguments}

        if len(values) != len(self.arguments):
            logger.debug(f"Argument count mismatch for pattern {self.pattern!r}")
            return False, {}

        return True, values
