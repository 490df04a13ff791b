from .hikari_client import HikariClient, HikariMessage

__all__ = ["HikariClient", "HikariMessage"]
