"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables prefixed with CATALYST_PARSER_
  - Fall back to a .env file at the project root
  - Validate types and ranges when the settings object is built

Sub-settings are plain BaseModel classes populated through
env_nested_delimiter="__", so CATALYST_PARSER_API__PORT maps to api.port.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class ApiSettings(BaseModel):
    """Bind address for the HTTP service."""

    host: str = Field(default="127.0.0.1", description="Interface uvicorn listens on")
    port: int = Field(default=8000, ge=1, le=65535, description="TCP port uvicorn listens on")


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="CATALYST_PARSER_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    signature_preview_chars: int = Field(
        default=80,
        ge=1,
        description="Characters of the signature shown in text output",
    )
    api: ApiSettings = Field(default_factory=ApiSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept standard logging level names in any case."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level
