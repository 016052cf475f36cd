"""Configuration management.

Uses pydantic-settings for type-safe configuration from environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables.
    Prefix: LPCHECK_
    """

    model_config = SettingsConfigDict(
        env_prefix="LPCHECK_",
        extra="ignore",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log output format: console for terminals, json for log collectors",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
