"""Plugin-based chat bot framework with prefix command routing."""

from .core import (
    ChatBot,
    Client,
    ConfigurationError,
    FunctionPrefix,
    Message,
    MessageType,
    PrefixResolver,
    RegistryFrozenError,
    StaticPrefix,
)
from .permissions import ExposureLevel, PermissionLevel
from .plugins import BasePlugin, CommandDefinition, CommandDefinitionArgument, command

__version__ = "0.4.0"

__all__ = [
    "BasePlugin",
    "ChatBot",
    "Client",
    "command",
    "CommandDefinition",
    "CommandDefinitionArgument",
    "ConfigurationError",
    "ExposureLevel",
    "FunctionPrefix",
    "Message",
    "MessageType",
    "PermissionLevel",
    "PrefixResolver",
    "RegistryFrozenError",
    "StaticPrefix",
]
