"""Configuration management for mab-runner.

Uses pydantic-settings for env var loading (``MAB_`` prefix, optional
``.env`` file).
"""

from __future__ import annotations

import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_STATE_FILE = Path(tempfile.gettempdir()) / "mab-runner-state.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Well-known location shared by every invocation
    state_file: Path = _DEFAULT_STATE_FILE

    # Logs go to stderr; stdout carries the JSON results
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get application settings (cached singleton)."""
    return Settings()
