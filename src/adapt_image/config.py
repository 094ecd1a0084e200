"""Library settings, read from ADAPT_IMAGE_* environment variables or .env."""

import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_cache_dir() -> Path:
    return Path(tempfile.gettempdir()) / "adapt_image_cache"


def _default_lock_dir() -> Path:
    return Path(tempfile.gettempdir())


class AdaptImageSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ADAPT_IMAGE_", env_file=".env", extra="ignore")

    # where derivatives are written
    cache_dir: Path = Field(default_factory=_default_cache_dir)
    # lock files live here only while a derivative is generated
    lock_dir: Path = Field(default_factory=_default_lock_dir)

    # total generation attempts when the lock is held by someone else
    max_attempts: int = Field(5, ge=1)
    # seconds between attempts
    retry_delay: float = Field(2.0, ge=0)


@lru_cache
def get_settings() -> AdaptImageSettings:
    return AdaptImageSettings()
