"""
Tane Configuration

Loads configuration from environment variables and an optional .env file.

    TANE_SEED=12345 pytest tests/      # replay a failing run
    TANE_SIZE=5 tane sample ascii_string
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tane.constants import (
    FILL_COUNT_WARN,
    GEN_SIZE_DEFAULT,
    RUNNER_SAMPLES_COUNT_DEFAULT,
)


class Settings(BaseSettings):
    """Tane settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TANE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Fixed seed for every context created without an explicit one
    seed: int | None = None

    # Size budget handed to new contexts
    size: int = Field(default=GEN_SIZE_DEFAULT, ge=0)

    # Fill counts at or above this log a warning
    fill_warn_count: int = Field(default=FILL_COUNT_WARN, gt=0)

    # Samples drawn per property by the runner
    samples_count: int = Field(default=RUNNER_SAMPLES_COUNT_DEFAULT, gt=0)

    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
