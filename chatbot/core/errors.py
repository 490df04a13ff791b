"""Exceptions raised by the chatbot framework."""


class ChatBotError(Exception):
    """Base class for framework errors."""


class ConfigurationError(ChatBotError):
    """One or more registered plugins or commands are misconfigured."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} configuration error(s): " + "; ".join(self.errors))


class RegistryFrozenError(ChatBotError):
    """Registration was attempted after the bot was opened."""
