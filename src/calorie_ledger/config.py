"""Application configuration."""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from calorie_ledger.domain.layout import LedgerLayout

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    hook_token: str
    ledger_timezone: str = "UTC"
    log_collection: str = "food_log"
    profile_collection: str = "profile"
    summary_collection: str = "daily_summary"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("ledger_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        parse_timezone(value)
        return value


def parse_timezone(name: str) -> ZoneInfo:
    """Return the zone for ``name`` or raise ValueError."""
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name!r}") from exc


def build_layout(settings: Settings) -> LedgerLayout:
    """Return the store layout named by the settings."""
    return LedgerLayout(
        log_collection=settings.log_collection,
        profile_collection=settings.profile_collection,
        summary_collection=settings.summary_collection,
    )
