"""Settings loaded from environment variables with .env file support."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the lessonpath tool."""

    model_config = SettingsConfigDict(
        env_prefix="LESSONPATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Inputs
    catalog_path: Path = Path("data") / "learningModules.json"
    completed_path: Path | None = None
    strict_catalog: bool = False

    # Logging
    log_level: str = "INFO"
    environment: Literal["development", "production"] = "development"
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
