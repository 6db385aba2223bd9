"""
Configuration — typed settings loaded from the environment or a .env file.

Uses pydantic-settings so every knob is validated once, at first use:

    SERVICE_BASE_LOG_LEVEL=DEBUG
    SERVICE_BASE_LOG_RENDERER=json
    SERVICE_BASE_LOG_CALLS=true
    SERVICE_BASE_TYPES_PATH=src/app/types.py

Environment variables win over the .env file, which wins over defaults.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceBaseSettings(BaseSettings):
    """Settings for service execution logging and the scaffolding generators."""

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_BASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Threshold for structlog output")
    log_renderer: Literal["console", "json"] = Field(
        default="console",
        description="console for humans, json for log shippers",
    )
    log_calls: bool = Field(
        default=False,
        description="Log start/completion of every Service.run() at DEBUG",
    )
    application_service_path: str = Field(
        default="app/services/application_service.py",
        description="Where the application-service generator writes, relative to the project root",
    )
    types_path: str = Field(
        default="app/models/types.py",
        description="Where the types generator writes, relative to the project root",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> ServiceBaseSettings:
    """Load settings once per process. Tests call get_settings.cache_clear() to reload."""
    return ServiceBaseSettings()
