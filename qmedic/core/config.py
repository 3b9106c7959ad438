# qmedic/core/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "local"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./qmedic.db"
    database_echo: bool = False
    # Seconds a transaction waits for a locked item row before failing
    db_lock_timeout_seconds: int = 10

    # Redis (dashboard summary cache only)
    redis_url: str | None = None
    summary_cache_ttl_seconds: int = 60

    # Defaults applied when clients omit them
    default_action_user: str = "Current User"
    export_default_user: str = "System"

    cors_origins: list[str] = ["*"]

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance so the .env is parsed once.
    """
    return Settings()
