"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Defaults reproduce the observed behavior (5 s return delay, "Unknown" department)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Return delay and fallback labels are settings, not literals in the core
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.domain_types import DEFAULT_RETURN_DELAY_MS, UNKNOWN_DEPARTMENT


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Sorter
    return_delay_ms: int = Field(DEFAULT_RETURN_DELAY_MS, ge=0)

    # Produce board (static catalog)
    produce_catalog_path: str | None = None
    produce_categories: list[str] = ["Fruit", "Vegetable"]
    produce_fallback_category: str = "Vegetable"

    # Users board (remote directory)
    users_api_url: str = "https://dummyjson.com/users"
    users_api_timeout_seconds: float = 10.0
    users_unknown_department: str = UNKNOWN_DEPARTMENT

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
