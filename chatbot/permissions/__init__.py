from .levels import ExposureLevel, PermissionLevel
from .manager import AccessController

__all__ = [
    "AccessController",
    "ExposureLevel",
    "PermissionLevel",
]
