"""
Configuration and settings for the backend.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = ("gemini_api_key", "database_url", "admin_password")


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Secrets, all required
    gemini_api_key: str = Field(min_length=1)
    database_url: str = Field(min_length=1)
    admin_password: str = Field(min_length=1)

    # LLM / Gemini
    gemini_model: str = Field(default="gemini-1.5-pro")
    ai_timeout_seconds: float = Field(default=30.0, gt=0)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")


def missing_settings(exc: ValidationError) -> list[str]:
    """Return the env var names of required settings that failed validation."""
    missing = []
    for error in exc.errors():
        field = error["loc"][0] if error["loc"] else None
        if field in REQUIRED_SETTINGS and field.upper() not in missing:
            missing.append(field.upper())
    return missing


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """
    Build settings once at startup.

    Exits the process with status 1 when a required secret is missing or
    empty, naming every missing variable.
    """
    try:
        return Settings(_env_file=env_file)
    except ValidationError as exc:
        missing = missing_settings(exc)
        if missing:
            logger.critical(
                "Missing required configuration: %s", ", ".join(missing)
            )
        else:
            logger.critical("Invalid configuration: %s", exc)
        raise SystemExit(1) from exc
