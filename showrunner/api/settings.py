"""
API Settings

Pydantic settings for the FastAPI server, read from the environment
(SHOWRUNNER_ prefix) and the .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from showrunner.core.config import ShowrunnerConfig, load_config


class Settings(BaseSettings):
    """API server settings."""
    model_config = SettingsConfigDict(
        env_prefix="SHOWRUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    debug: bool = Field(default=False)

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    # Per-client request limit for every endpoint
    rate_limit: str = Field(default="60/minute")

    # Path to the JSON config file; None falls back to SHOWRUNNER_CONFIG or the default location
    config_file: Optional[str] = Field(default=None)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache()
def get_app_config() -> ShowrunnerConfig:
    """Get the cached application configuration."""
    return load_config(get_settings().config_file)
