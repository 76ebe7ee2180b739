from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Pipeline Sentinel"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./sentinel.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Audit Log (in-process only)
    # ==============================
    AUDIT_LOG_MAX_ENTRIES: int = 1000

    # ==============================
    # Feed & Lists
    # ==============================
    FEED_DEFAULT_TIME_RANGE: str = "24h"
    RISK_LIST_LIMIT: int = 500


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
