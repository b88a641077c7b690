"""Environment-driven configuration helpers for WagerWire."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCORE_API_URL = (
    "https://us-central1-pachira-betform.cloudfunctions.net/sofascoreProxy/sofascore-event"
)


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: AnyUrl | str = Field(default="sqlite:///./wagerwire.db")

    score_api_url: str = Field(default=DEFAULT_SCORE_API_URL)
    score_api_timeout: float = Field(default=30.0, gt=0)

    starting_bankroll: float = Field(default=10000.0, ge=0)
    default_stake: float = Field(default=100.0, gt=0)
    poll_interval_seconds: int = Field(default=15, ge=1)
    characters: list[str] = Field(default_factory=lambda: ["Benny", "Max", "Ellie"])

    wagerwire_api_key: str = Field(default="", validation_alias="WAGERWIRE_API_KEY")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_api_access_key() -> str:
    key = os.getenv("WAGERWIRE_API_KEY") or get_settings().wagerwire_api_key
    if not key:
        raise RuntimeError(
            "WAGERWIRE_API_KEY is not configured. Set it in your environment or .env file."
        )
    return key
