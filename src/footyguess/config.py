"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from footyguess.domain.scoring import ScoringMode
from footyguess.services.leaderboard import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    daily_scoring_mode: str = ScoringMode.LOCATION.value
    normal_scoring_mode: str = ScoringMode.LOCATION.value
    leaderboard_default_limit: int = Field(
        default=DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT
    )
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_scoring_mode(raw: str | None) -> ScoringMode:
    """Parse a scoring mode from env, defaulting to location only."""
    if raw is None:
        return ScoringMode.LOCATION
    cleaned = raw.strip().lower().replace("-", "_")
    if cleaned in {"", "location"}:
        return ScoringMode.LOCATION
    if cleaned in {"location_and_time", "location_time", "combined"}:
        return ScoringMode.LOCATION_AND_TIME
    raise ValueError(f"Unknown scoring mode: {raw}")
