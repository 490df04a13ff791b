from __future__ import annotations

from typing import TYPE_CHECKING

from .levels import ExposureLevel, PermissionLevel

if TYPE_CHECKING:
    from ..core.client import Client, Message
    from ..plugins.commands.definition import CommandDefinition


class AccessController:
    """Decides whether a message's context satisfies a command's exposure and permission levels.

    Denials are silent: the command is simply not dispatched.
    """

    def allow(self, definition: CommandDefinition, message: Message, client: Client) -> bool:
        if not self.check_exposure(definition.exposure_level, message, client):
            return False
        return self.check_permission(definition.permission_level, message, client)

    def check_exposure(self, exposure_level: ExposureLevel, message: Message, client: Client) -> bool:
        if exposure_level == ExposureLevel.PRIVATE:
            return client.is_private(message)
        if exposure_level == ExposureLevel.PUBLIC:
            return not client.is_private(message)
        return True

    def check_permission(self, permission_level: PermissionLevel, message: Message, client: Client) -> bool:
        if permission_level <= PermissionLevel.USER:
            return True
        return self.caller_level(message, client, floor=permission_level) >= permission_level

    def caller_level(
        self, message: Message, client: Client, floor: PermissionLevel = PermissionLevel.MODERATOR
    ) -> PermissionLevel:
        """Return the highest tier the author demonstrates.

        Tiers below ``floor`` are not probed, so an owner-only check never asks the
        transport about moderator status.
        """
        if client.is_bot_owner(message):
            return PermissionLevel.OWNER
        if floor <= PermissionLevel.ADMIN and client.is_channel_owner(message):
            return PermissionLevel.ADMIN
        if floor <= PermissionLevel.MODERATOR and client.is_moderator(message):
            return PermissionLevel.MODERATOR
        return PermissionLevel.USER
