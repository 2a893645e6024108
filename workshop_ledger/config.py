"""Application configuration loaded from the environment via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings; every field can be overridden with WORKSHOP_LEDGER_<NAME>."""

    model_config = SettingsConfigDict(
        env_prefix="WORKSHOP_LEDGER_", env_file=".env", case_sensitive=False
    )

    # Storage
    database_path: str = "workshop_ledger.sqlite3"
    max_record_size: int = 1024

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
