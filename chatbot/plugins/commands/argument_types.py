"""Command argument types and definitions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandDefinitionArgument:
    """Defines one positional argument parsed out of the message text.

    ``pattern`` is a regular expression matching the argument's token or phrase and
    ``alias`` is the key the matched text is stored under (and the name shown in help).
    Only trailing arguments may be optional.
    """

    pattern: str
    alias: str
    optional: bool = False
