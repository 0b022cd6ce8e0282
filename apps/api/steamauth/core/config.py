"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    verification_provider: Literal["mock", "steam"] = "steam"
    self_url: str = Field(min_length=1)
    realm: str | None = None
    user_agent: str = "OpenID Verification (+steamauth)"
    connect_timeout_seconds: float = Field(default=6.0, gt=0)
    timeout_seconds: float = Field(default=6.0, gt=0)
    nonce_max_skew_seconds: int = Field(default=300, ge=0)

    model_config = SettingsConfigDict(env_prefix="STEAMAUTH_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
