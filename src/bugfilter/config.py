"""Configuration via pydantic-settings — 12-factor app style."""
from __future__ import annotations

import pytz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Bugfilter configuration — loaded from env vars / .env file."""

    timezone: str = Field(default="UTC", description="Time zone whose midnight bounds a calendar day")
    default_output: str = Field(default="table", description="Default CLI output format (table|json)")
    max_rows: int = Field(default=100, description="Rows shown before a table is truncated")

    class Config:
        env_prefix = "BUGFILTER_"
        env_file = ".env"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"unknown time zone: {value!r}") from exc
        return value

    def tzinfo(self) -> pytz.BaseTzInfo:
        return pytz.timezone(self.timezone)


settings = Settings()
