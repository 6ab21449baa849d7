"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import List
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ---------------- DATABASE ----------------
    database_url: str = "sqlite+aiosqlite:///./queuedesk.db"

    # ---------------- AUTH ----------------
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # ---------------- APP ----------------
    app_name: str = "QueueDesk"
    app_version: str = "1.0.0"
    debug: bool = False
    cors_origins: List[str] = []

    # ---------------- SCHEDULING ----------------
    business_timezone: str = "UTC"
    default_daily_capacity: int = 5
    conflict_lookback_minutes: int = 60
    activity_log_default_limit: int = 10

    @property
    def business_tz(self) -> ZoneInfo:
        return ZoneInfo(self.business_timezone)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
