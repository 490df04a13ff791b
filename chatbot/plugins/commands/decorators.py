"""Command decorators for declaring plugin commands."""

from ...permissions.levels import ExposureLevel, PermissionLevel
from .argument_types import CommandDefinitionArgument


def command(
    name: str,
    description: str = "",
    aliases: list[str] | None = None,
    arguments: list[CommandDefinitionArgument] | None = None,
    permission_level: PermissionLevel = PermissionLevel.USER,
    exposure_level: ExposureLevel = ExposureLevel.EVERYWHERE,
    unlisted: bool = False,
    command_prefix: str = "",
    prefix_resolver=None,
    disable_trigger_on_mention: bool = False,
    command_id: str | None = None,
):
    """
    Mark a plugin method as a command.

    The metadata is turned into a :class:`CommandDefinition` by
    ``BasePlugin.commands()``. ``name`` is the primary trigger (used in help text)
    and ``aliases`` are additional triggers. The decorated method is called as
    ``method(bot, client, message, args, trigger)``.
    """

    def decorator(func):
        # Store command metadata on the function
        func._command_definition = {
            "name": name,
            "command_id": command_id,
            "description": description,
            "triggers": [name, *(aliases or [])],
            "arguments": arguments or [],
            "permission_level": permission_level,
            "exposure_level": exposure_level,
            "unlisted": unlisted,
            "command_prefix": command_prefix,
            "prefix_resolver": prefix_resolver,
            "disable_trigger_on_mention": disable_trigger_on_mention,
        }
        return func

    return decorator
