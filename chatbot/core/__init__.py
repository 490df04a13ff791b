from .bot import ChatBot
from .client import Client, Message, MessageType
from .dispatcher import Dispatcher
from .errors import ChatBotError, ConfigurationError, RegistryFrozenError
from .help import HelpGenerator
from .prefix import DEFAULT_COMMAND_PREFIX, FunctionPrefix, PrefixResolver, StaticPrefix

__all__ = [
    "ChatBot",
    "ChatBotError",
    "Client",
    "ConfigurationError",
    "DEFAULT_COMMAND_PREFIX",
    "Dispatcher",
    "FunctionPrefix",
    "HelpGenerator",
    "Message",
    "MessageType",
    "PrefixResolver",
    "RegistryFrozenError",
    "StaticPrefix",
]
