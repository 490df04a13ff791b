from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    discord_token: str | None = Field(default=None, description="Discord bot token for the hikari transport")

    command_prefix: str = Field(default="?", description="Command prefix")
    owner_user_id: str | None = Field(default=None, description="User ID allowed to run owner commands")
    client_id: str | None = Field(default=None, description="Known client ID of the bot")
    command_lookup_disabled: bool = Field(default=False, description="Disable the built-in commands listing")

    # Dispatch
    max_concurrent_tasks: int = Field(
        default=0,
        ge=0,
        description="Maximum number of concurrently running hook and command tasks (0 = unbounded)",
    )

    environment: str = Field(default="development", description="Environment")
    log_level: str = Field(default="INFO", description="Logging level")


# Global settings instance
settings = BotSettings()
