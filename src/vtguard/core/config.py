# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VTGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # VirusTotal
    api_key: str = ""  # overrides the stored credential when set
    api_base_url: str = "https://www.virustotal.com/vtapi/v2"
    request_timeout: float = 60.0

    # Database
    db_path: Path = Path("vtguard.db")

    # Cache / polling
    cache_max_age_days: int = 7
    poll_delay_seconds: float = 30.0
    poll_max_attempts: int = 1
    poll_backoff_factor: float = 2.0

    # Scheduled scans
    auto_scan_targets: Annotated[list[str], NoDecode] = []
    auto_scan_interval_hours: float = 24.0

    @field_validator("auto_scan_targets", mode="before")
    @classmethod
    def _parse_auto_scan_targets(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        return v if isinstance(v, list) else []

    # Notification channels
    notification_channels: Annotated[list[str], NoDecode] = ["log"]
    webhook_url: str = ""

    @field_validator("notification_channels", mode="before")
    @classmethod
    def _parse_notification_channels(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [c.strip() for c in v.split(",") if c.strip()]
        return v if isinstance(v, list) else []

    @field_validator("poll_max_attempts")
    @classmethod
    def _check_poll_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("poll_max_attempts must be at least 1")
        return v

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"


def get_settings() -> Settings:
    return Settings()
