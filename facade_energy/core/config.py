"""
Configuration management for Facade Energy.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Can be configured via environment variables (prefix FACADE_) or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FACADE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Document store
    storage_backend: Literal["memory", "supabase"] = Field(
        default="memory", description="Where building designs and city data are stored"
    )
    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("FACADE_SUPABASE_URL", "SUPABASE_URL"),
    )
    supabase_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("FACADE_SUPABASE_KEY", "SUPABASE_KEY"),
    )
    seed_cities_on_startup: bool = Field(default=True, description="Seed reference cities if the store is empty")

    # Result cache
    redis_url: str | None = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    cache_enabled: bool = Field(default=True, description="Cache analysis results in Redis")
    cache_ttl_seconds: int = Field(default=3600, description="Analysis result expiry (s)")
    cache_prefix: str = Field(default="analysis")

    # API server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=5050)
    cors_origins: list[str] = Field(default=["*"])

    # Logging
    log_level: str = Field(default="INFO")
    log_to_file: bool = Field(default=False)
    log_dir: Path = Field(default=Path("logs"))


# Global settings instance
settings = Settings()
