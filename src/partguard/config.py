"""Application configuration from environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="PARTGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Permission structure
    permissions_file: Path | None = Field(
        default=None,
        description="JSON permission structure; the bundled Part-DB structure if unset",
    )
    default_permission: Literal["allow", "disallow"] = Field(
        default="disallow",
        description="Result when no user or group in the chain decides an operation",
    )
    also_set_max_depth: int = Field(
        default=32,
        ge=1,
        description="Maximum alsoSet implication depth accepted by the loader",
    )

    # Column security
    masked_text: str = Field(
        default="???",
        description="Placeholder text for string fields and object names",
    )

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
