from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GreeterSettings(BaseSettings):
    """Configuration for the Greeter plugin."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GREETER_",
        case_sensitive=False,
        extra="ignore",
    )

    greeting: str = Field(default="Hello, World!", description="Reply to the hello command")
    default_sides: int = Field(default=6, ge=2, description="Die size used when roll is called without one")
    max_sides: int = Field(default=1000, ge=2, description="Largest die the roll command accepts")


# Plugin settings instance
greeter_settings = GreeterSettings()
