"""
Application configuration using pydantic-settings.
Values come from TICKER_* environment variables (or .env) and may be
overridden by command-line options.
"""

import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from buildticker.core.exceptions import ConfigError


class Settings(BaseSettings):
    """Ticker settings."""

    # HTTP listener
    bind: str = "127.0.0.1"
    port: int = Field(default=9876, ge=1, le=65535)

    # Board
    max_cards: int = Field(default=20, ge=1)
    refresh_interval: float = Field(default=1.0, gt=0)

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        name = str(value).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level: {value}")
        return name

    @field_validator("log_file", mode="before")
    @classmethod
    def _normalize_log_file(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level)

    @property
    def listen_url(self) -> str:
        return f"http://{self.bind}:{self.port}/webhook"

    model_config = {
        "env_prefix": "TICKER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def load_settings(**overrides) -> Settings:
    """
    Build settings, letting non-None overrides win over the environment.

    Raises:
        ConfigError: If any resolved value fails validation
    """
    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**explicit)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
