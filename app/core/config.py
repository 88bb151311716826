"""
Application Configuration
=========================
Loads configuration from environment variables using pydantic-settings.
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field can be overridden with an env var of the same name
    (case-insensitive), e.g. CSV_FETCH_TIMEOUT_SECONDS=10.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ----- Backend -----
    app_name: str = "Chartflow API"
    backend_host: str = "0.0.0.0"
    backend_port: int = 8000
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # ----- CSV Data Input -----
    csv_fetch_timeout_seconds: float = 30.0
    csv_type_sample_rows: int = 10
    csv_numeric_ratio: float = 0.8
    csv_date_ratio: float = 0.7

    # ----- PostgreSQL Input -----
    postgres_default_host: str = "localhost"
    postgres_default_port: int = 6543
    postgres_page_size: int = 1000
    postgres_connect_timeout_seconds: int = 30

    # ----- Node Execution -----
    progress_row_interval: int = 100

    # ----- Logging -----
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are only loaded once.
    """
    return Settings()
