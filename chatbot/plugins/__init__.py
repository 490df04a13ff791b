from .base import BasePlugin
from .commands import CommandDefinition, CommandDefinitionArgument, command

__all__ = ["BasePlugin", "CommandDefinition", "CommandDefinitionArgument", "command"]
