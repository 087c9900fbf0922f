"""
Centralized Settings Configuration

Uses Pydantic Settings to load configuration from environment variables
with validation and type coercion.
"""

from datetime import date
from typing import Optional

import pytz
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:100.0) Gecko/20100101 Firefox/100.0"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (peewee db_url format: postgresql://, postgres+pool://, sqlite:///)
    database_url: str = "sqlite:///strike_data.db"
    database_max_connections: int = 20

    # Season imported by every pipeline
    season: int = 2025

    # Match import: daily schedule from this date up to yesterday in this timezone
    schedule_start_date: date = date(2025, 3, 27)
    schedule_timezone: str = "Europe/Madrid"

    # Transport
    http_timeout: int = 30
    http_user_agent: str = DEFAULT_USER_AGENT
    circuit_breaker_threshold: int = 5
    circuit_breaker_timeout: int = 60

    # Metric merge
    derived_total_precision: int = 2

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"
    service_name: str = "strike-data-platform"

    # Pipeline Auth
    pipeline_api_token: Optional[SecretStr] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either json or console."""
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v

    @field_validator("derived_total_precision")
    @classmethod
    def validate_precision(cls, v: int) -> int:
        if v < 0:
            raise ValueError("derived_total_precision must be >= 0")
        return v

    @field_validator("schedule_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone: {v}")
        return v


def get_settings() -> Settings:
    """
    Get application settings.

    This function creates a new Settings instance each time,
    allowing for testing with different configurations.
    """
    return Settings()


# Default settings instance for convenience
# Import this for quick access: from core.settings import settings
settings = Settings()
