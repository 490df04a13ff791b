"""Command system for chatbot plugins."""

from .argument_types import CommandDefinitionArgument
from .decorators import command
from .definition import CommandDefinition
from .parsers import ArgumentExtractor
from .registry import CommandRegistry, PluginRegistry
from .triggers import TriggerMatcher

__all__ = [
    "ArgumentExtractor",
    "command",
    "CommandDefinition",
    "CommandDefinitionArgument",
    "CommandRegistry",
    "PluginRegistry",
    "TriggerMatcher",
]
