"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from DRAFT_RPG_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DRAFT_RPG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    # Dice
    seed: int | None = None  # None draws a fresh seed each run

    # Duels
    max_rounds: int = Field(default=10, ge=1)
    fatigue_per_round: int = Field(default=1, ge=0)

    # Rule tuning
    rest_units_per_point: int = Field(default=2, ge=1)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
