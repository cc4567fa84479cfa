"""Application configuration managed via environment variables."""
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Performance Tracker Backend"
    debug: bool = False
    log_level: str = "INFO"
    local_timezone: str = "UTC"
    snapshot_path: str | None = None
    default_range: str = "week"
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "performance-tracker"

    @field_validator("local_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown IANA timezone {value!r} for LOCAL_TIMEZONE") from exc
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
