"""Configuration loader for the PeerTube to NIP-71 converter (Pydantic edition)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConverterError

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ConverterError):
    """Raised when configuration cannot be loaded safely."""


class AppConfig(BaseSettings):
    """Strongly typed runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        validate_default=True,
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias=AliasChoices("APP_ENVIRONMENT", "APP_ENV"),
    )
    log_level: str | None = Field(default=None, validation_alias="APP_LOG_LEVEL")
    log_path: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("APP_LOG_PATH", "LOG_PATH"),
    )

    # Fetching
    http_timeout_seconds: float | None = Field(None, gt=0, validation_alias="APP_HTTP_TIMEOUT_SECONDS")

    # Output
    json_indent: int = Field(2, ge=0, le=8, validation_alias="APP_JSON_INDENT")

    @field_validator("log_path", mode="after")
    @classmethod
    def _expand_path(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        expanded = value.expanduser()
        return expanded if expanded.is_absolute() else (Path.cwd() / expanded).resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: str | None) -> str | None:
        if value is None or not str(value).strip():
            return None
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def effective_log_level(self) -> int:
        """Numeric logging level, defaulting to DEBUG only in development."""
        if self.log_level:
            return getattr(logging, self.log_level)
        return logging.DEBUG if self.environment == "development" else logging.INFO

    def ensure_runtime_directories(self) -> None:
        """Create directories required for runtime operation."""
        if self.log_path is not None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)


def load_config(env_path: Path | None = None) -> AppConfig:
    """Load configuration from .env/environment with validation."""
    load_kwargs: dict[str, str] = {}
    if env_path is not None:
        load_dotenv(env_path, override=False)
        load_kwargs["_env_file"] = str(env_path)
    else:
        load_dotenv(override=False)
    try:
        config = AppConfig(**load_kwargs)
    except ValidationError as exc:
        raise ConfigError("Invalid configuration") from exc

    config.ensure_runtime_directories()
    return config
