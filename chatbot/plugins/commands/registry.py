"""Plugin and command registries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ...core.errors import RegistryFrozenError
from .definition import CommandDefinition

if TYPE_CHECKING:
    from ..base import BasePlugin

logger = logging.getLogger("registry")


class CommandRegistry:
    """Holds standalone command definitions keyed by ``command_id``.

    Registration must happen before the bot is opened. :meth:`freeze` turns the
    registry read-only so dispatch tasks can iterate it without locking.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandDefinition] = {}
        self._frozen = False
        self._snapshot: tuple[CommandDefinition, ...] | None = None

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, definition: CommandDefinition) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register command {definition.command_id!r} after the bot has been opened"
            )

        if definition.command_id in self._commands:
            logger.warning(f"Command with that id is already registered: {definition.command_id}")

        self._commands[definition.command_id] = definition
        logger.debug(f"Registered command: {definition.command_id} (triggers: {list(definition.triggers)})")

    def get(self, command_id: str) -> CommandDefinition | None:
        return self._commands.get(command_id)

    @property
    def commands(self) -> tuple[CommandDefinition, ...]:
        if self._snapshot is not None:
            return self._snapshot
        return tuple(self._commands.values())

    def freeze(self) -> None:
        self._snapshot = tuple(self._commands.values())
        self._frozen = True

    def validate(self) -> list[str]:
        errors = []
        for definition in self.commands:
            command_errors = definition.validate()
            if command_errors:
                errors.extend(f"Command validation error: {error}" for error in command_errors)
            else:
                # Compile the argument matcher up front
                definition.matcher
        return errors

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, command_id: str) -> bool:
        return command_id in self._commands


class PluginRegistry:
    """Holds registered plugins keyed by name.

    Freezing also snapshots each plugin's ``commands()`` so that argument matchers
    are compiled once and every message sees the same definitions. A plugin whose
    ``commands()`` raises is recorded as misconfigured and reported by :meth:`validate`.
    """

    def __init__(self) -> None:
        self._plugins: dict[str, Any] = {}
        self._frozen = False
        self._plugin_snapshot: tuple[Any, ...] | None = None
        self._command_snapshot: dict[int, tuple[CommandDefinition, ...]] = {}
        self._collection_errors: dict[int, str] = {}

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, plugin: BasePlugin) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register plugin {plugin.name!r} after the bot has been opened")

        if plugin.name in self._plugins:
            logger.warning(f"Plugin with that name already registered: {plugin.name}")

        self._plugins[plugin.name] = plugin
        logger.debug(f"Registered plugin: {plugin.name}")

    def get(self, name: str) -> BasePlugin | None:
        return self._plugins.get(name)

    @property
    def plugins(self) -> tuple[Any, ...]:
        if self._plugin_snapshot is not None:
            return self._plugin_snapshot
        return tuple(self._plugins.values())

    def commands_for(self, plugin: BasePlugin) -> tuple[CommandDefinition, ...]:
        snapshot = self._command_snapshot.get(id(plugin))
        if snapshot is not None:
            return snapshot
        return tuple(plugin.commands() or ())

    def freeze(self) -> None:
        self._plugin_snapshot = tuple(self._plugins.values())
        self._command_snapshot = {}
        self._collection_errors = {}
        for plugin in self._plugin_snapshot:
            definitions, error = self._collect(plugin)
            self._command_snapshot[id(plugin)] = definitions
            if error:
                self._collection_errors[id(plugin)] = error
        self._frozen = True

    def validate(self) -> list[str]:
        errors = []
        for plugin in self.plugins:
            plugin_errors = []
            if not plugin.name:
                plugin_errors.append("Missing required Name")

            if self._frozen:
                definitions = self.commands_for(plugin)
                collection_error = self._collection_errors.get(id(plugin))
            else:
                definitions, collection_error = self._collect(plugin)

            if collection_error:
                plugin_errors.append(collection_error)

            for definition in definitions:
                command_errors = definition.validate()
                if command_errors:
                    plugin_errors.extend(command_errors)
                else:
                    definition.matcher

            errors.extend(f"Plugin validation error: {plugin.name}: {error}" for error in plugin_errors)
        return errors

    @staticmethod
    def _collect(plugin: BasePlugin) -> tuple[tuple[CommandDefinition, ...], str | None]:
        try:
            return tuple(plugin.commands() or ()), None
        except Exception as e:
            return (), f"Error collecting commands: {e}"

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, name: str) -> bool:
        return name in self._plugins
