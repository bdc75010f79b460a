from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    env: str = Field(default="development", description="ENV")
    debug: bool = Field(default=False, description="DEBUG")

    # Discord
    discord_token: str = Field(alias="DISCORD_TOKEN", min_length=1)
    command_prefix: str = Field(default="~", alias="COMMAND_PREFIX", min_length=1)
    manager_role_name: str = Field(default="mxpManager", alias="MXP_MANAGER_ROLE")

    # MongoDB
    mongodb_uri: str = Field(alias="MONGODB_URI", min_length=1)
    mongodb_db_name: str = Field(default="mxpbot", alias="MONGODB_DB_NAME")

    # Sentry
    sentry_dsn: str | None = Field(default=None, alias="SENTRY_DSN")


@lru_cache
def get_settings() -> Settings:
    return Settings()
