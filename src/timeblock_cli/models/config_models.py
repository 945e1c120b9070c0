"""Configuration models for timeblock-cli."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from timeblock_cli.utils.clock import is_valid_time


class StorageConfig(BaseModel):
    """Storage configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite file path (None uses the data dir)"
    )


class ScheduleConfig(BaseModel):
    """Scheduling configuration."""

    day_start: str = Field(
        default="06:00", description="Time at which the logical day begins"
    )

    @field_validator("day_start")
    @classmethod
    def validate_day_start(cls, v: str) -> str:
        """Require a strict HH:MM value."""
        if not is_valid_time(v):
            raise ValueError(f"day_start must be HH:MM, got {v!r}")
        return v


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
