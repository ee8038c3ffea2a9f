# app/core/config.py
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables (or a local `.env` file)
    at runtime.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Session Calendar"
    APP_ENV: str = Field("local", description="Environment name: local/test/dev/stage/prod")

    DB_URL: str = Field(
        "sqlite+aiosqlite:///./session_calendar.db",
        description="SQLAlchemy-compatible database URL",
    )

    INTERNAL_API_KEY: str | None = Field(
        default=None,
        description="API key required for hitting /internal endpoints",
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level for the service (DEBUG, INFO, WARNING, ...).",
    )

    MAX_WINDOW_DAYS: int = Field(
        default=366,
        description=(
            "Widest date window (in days) accepted by /events. Wider requests "
            "are rejected so the day-by-day expansion stays bounded."
        ),
    )

    CALENDAR_TZ: str = Field(
        default="UTC",
        description=(
            "IANA time zone the weekly schedule times are written in, e.g. "
            "'Europe/Berlin'. Generated session ids use this wall clock."
        ),
    )

    @field_validator("CALENDAR_TZ")
    @classmethod
    def _known_time_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value!r}") from exc
        return value

    @property
    def calendar_zone(self) -> ZoneInfo:
        return ZoneInfo(self.CALENDAR_TZ)


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
