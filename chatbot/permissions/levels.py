from enum import IntEnum


class PermissionLevel(IntEnum):
    """Minimum caller privilege tier required by a command, least restrictive first."""

    USER = 0
    MODERATOR = 1
    ADMIN = 2
    OWNER = 3


class ExposureLevel(IntEnum):
    """Messaging contexts in which a command may be used."""

    EVERYWHERE = 0
    PUBLIC = 1
    PRIVATE = 2
