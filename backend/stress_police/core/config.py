"""
Application configuration using Pydantic Settings.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from stress_police.models.schedule import WorkingHours


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # ===========================================
    # Work schedule
    # ===========================================
    # Daily availability window used when the caller gives none
    WORK_START_HOUR: int = 9
    WORK_END_HOUR: int = 19

    # Upper bound on calendar days the scheduler may advance in one run
    SCHEDULE_MAX_DAYS: int = 366

    # IANA zone of the device clock; day boundaries follow its DST rules
    TIMEZONE: str = "UTC"

    @property
    def default_working_hours(self) -> WorkingHours:
        """Default daily working window (validated)."""
        return WorkingHours.from_hours(self.WORK_START_HOUR, self.WORK_END_HOUR)

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
