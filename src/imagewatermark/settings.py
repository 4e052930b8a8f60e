"""Runtime settings for the watermarking engine."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide defaults loaded from the environment or a .env file."""

    max_workers: int = Field(0, ge=0, description="Default batch worker count (0 = CPU count)")
    log_level: str = Field("INFO", description="Logging level")
    log_file: Optional[Path] = Field(None, description="Optional log file path")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMAGEWATERMARK_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
