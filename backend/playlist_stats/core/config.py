from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BACKEND_",
        extra="allow",
        populate_by_name=True,
    )

    environment: str = "development"
    log_level: str = "DEBUG"
    host: str = "0.0.0.0"
    port: int = 8080
    spotify_client_id: str = Field(
        "", validation_alias=AliasChoices("BACKEND_SPOTIFY_CLIENT_ID", "CLIENT_ID", "spotify_client_id")
    )
    spotify_client_secret: str = Field(
        "", validation_alias=AliasChoices("BACKEND_SPOTIFY_CLIENT_SECRET", "CLIENT_SECRET", "spotify_client_secret")
    )
    http_timeout_seconds: float = 15.0
    recommendation_limit: int = 20
    allow_origins: List[str] = ["*"]

    @field_validator("recommendation_limit")
    @classmethod
    def _clamp_limit(cls, v: int) -> int:
        return max(1, min(v, 100))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
