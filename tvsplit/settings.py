"""Application settings using Pydantic Settings.

This module defines the TvsSettings class which loads configuration
from environment variables and .env files using pydantic-settings.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class ValidationSettings(BaseSettings):
    """Defaults applied to new validators."""

    model_config = SettingsConfigDict(
        env_prefix="TVS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    train_ratio: float = Field(
        default=0.75,
        gt=0,
        lt=1,
        description="Expected fraction of rows used for training",
    )
    seed: int | None = Field(
        default=None,
        description="Seed of the train/validation split, random when unset",
    )


class LoggingSettings(BaseSettings):
    """Logging-related settings."""

    model_config = SettingsConfigDict(
        env_prefix="TVS_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: LogLevel = Field(default="INFO", description="Minimum level of the stderr sink")
    serialize: bool = Field(default=False, description="Whether to emit JSON records")
    debug: bool = Field(
        default=False, description="Whether to include variable values in tracebacks"
    )


class TvsSettings(BaseSettings):
    """Root settings class that composes all settings groups."""

    model_config = SettingsConfigDict(
        env_prefix="TVS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
