# backend/doctor_slots/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_RANGE_END,
    DEFAULT_RANGE_START,
    DEFAULT_TIME_LABEL,
    DEFAULT_WINDOW_DAYS,
    MAX_SLOTS_PER_DAY,
    WINDOW_MODE_ROLLING,
)


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    """Runtime settings for the availability scheduler, loaded from environment."""

    environment: str = "development"
    log_level: str = "INFO"

    # Slot model
    max_slots_per_day: int = MAX_SLOTS_PER_DAY
    default_time_label: str = DEFAULT_TIME_LABEL
    default_range_start: str = DEFAULT_RANGE_START
    default_range_end: str = DEFAULT_RANGE_END

    # Day window shown to the editor
    window_mode: Literal["rolling", "week"] = WINDOW_MODE_ROLLING
    window_days: int = Field(default=DEFAULT_WINDOW_DAYS, ge=1, le=31)

    # Persistence port (REST backend)
    api_base_url: str = "http://localhost:5000"
    api_token: SecretStr = SecretStr("")
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    empty_save_placeholder: bool = True

    # Local persistence
    database_url: str = "sqlite+pysqlite:///./doctor_slots.db"

    model_config = SettingsConfigDict(env_prefix="DOCTOR_SLOTS_", extra="ignore")

    @field_validator("max_slots_per_day")
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        """Capacity is part of the data model and cannot be tuned."""
        if v != MAX_SLOTS_PER_DAY:
            raise ValueError(f"max_slots_per_day must be {MAX_SLOTS_PER_DAY}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("default_time_label", "default_range_start", "default_range_end")
    @classmethod
    def validate_label(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Time labels cannot be blank")
        return v.strip()

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in {"prod", "production"}


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
