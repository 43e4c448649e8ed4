"""Centralized configuration management using Pydantic Settings.

Configuration is loaded from environment variables and an optional ``.env``
file. Every field has a default, so the client works without any setup
against the default service URL.

Example:
    >>> from envdata.config import get_settings
    >>> print(get_settings().api.envdata_api_url)
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from envdata.clients.envdata.constants import DEFAULT_BASE_URL

LOGGER = logging.getLogger(__name__)

# Shared by every settings group so each one also reads the .env file
_ENV_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=False,
    extra="ignore",
)


class APISettings(BaseSettings):
    """Environmental data service configuration."""

    model_config = _ENV_CONFIG

    envdata_api_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the environmental data service",
    )
    envdata_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds (unset waits indefinitely)",
    )
    envdata_validate_payloads: bool = Field(
        default=True,
        description="Validate unwrapped payloads against the response models",
    )

    @field_validator("envdata_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Ensure the URL starts with http:// or https://."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Service URL must start with http:// or https://")
        return v.rstrip("/")


class LoggingSettings(BaseSettings):
    """Console logging configuration."""

    model_config = _ENV_CONFIG

    envdata_log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("envdata_log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def level(self) -> int:
        return logging.getLevelName(self.envdata_log_level)


class Settings(BaseSettings):
    """Root settings container.

    Example .env file:
        ENVDATA_API_URL=https://envdata.example.org/api
        ENVDATA_TIMEOUT=30
        ENVDATA_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    api: APISettings = Field(default_factory=APISettings)
    log: LoggingSettings = Field(default_factory=LoggingSettings)


# Lazy initialization - only create settings when accessed
_settings: Optional[Settings] = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get or create the Settings singleton (thread-safe).

    Returns:
        Settings instance loaded from environment variables/.env file.

    Raises:
        ValidationError: If a configured value is invalid.
    """
    global _settings

    if _settings is not None:
        return _settings

    with _settings_lock:
        # Double-check after acquiring lock
        if _settings is None:
            LOGGER.info("Initializing Settings from environment variables and .env file")
            try:
                _settings = Settings()
            except ValidationError as e:
                LOGGER.error("Configuration validation failed: %s", e)
                raise

    return _settings


def reset_settings() -> None:
    """Drop the cached Settings so the next access reloads the environment."""
    global _settings
    with _settings_lock:
        _settings = None


__all__ = ["Settings", "APISettings", "LoggingSettings", "get_settings", "reset_settings"]
