"""Environment-based configuration for PhotoShim."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from PHOTOSHIM_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PHOTOSHIM_",
        case_sensitive=False,
    )

    # Reject null, released or mistyped input handles before the native call
    check_handles: bool = True

    # Async driver
    max_concurrent: int = Field(default=2, ge=1)
    queue_timeout: float = Field(default=5.0, gt=0)

    # Logging (applied by photoshim.main.lifespan)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


def get_settings() -> Settings:
    """Create and return settings."""
    return Settings()
