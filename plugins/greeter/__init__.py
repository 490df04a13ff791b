from .plugin import GreeterPlugin

__all__ = ["GreeterPlugin"]
