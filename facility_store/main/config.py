"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files, docker secret files and default values.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from facility_store.domain.services.device_type_assembly import MissingTypePolicy
from facility_store.shared import EnumEnvironment, EnumLogLevel
from facility_store.shared.env import load_secret_file_variables


class DatabaseSettings(BaseSettings):
    """Document store configuration settings."""

    address: str = Field(
        default="http://localhost:5984", description="Base URL of the document store"
    )
    username: Optional[str] = Field(default=None, description="Basic auth user")
    password: Optional[str] = Field(default=None, description="Basic auth password")
    timeout: float = Field(
        default=30.0, gt=0, description="Per request deadline in seconds"
    )
    query_page_size: int = Field(
        default=1000, ge=1, description="Limit for children-of-prefix queries"
    )
    scan_limit: int = Field(
        default=5000, ge=1, description="Default limit for whole-collection scans"
    )
    missing_type_policy: MissingTypePolicy = Field(
        default=MissingTypePolicy.OMIT,
        description="What device listings do with devices whose type is missing",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class CascadeSettings(BaseSettings):
    """Rename cascade configuration settings."""

    max_workers: int = Field(
        default=4, ge=1, description="Children moved concurrently during a rename"
    )

    model_config = SettingsConfigDict(
        env_prefix="CASCADE_", case_sensitive=False, extra="ignore"
    )


class EventSettings(BaseSettings):
    """Change notification settings."""

    redis_url: Optional[str] = Field(
        default=None,
        description="Redis URL for change events (if None, events are only logged)",
    )
    channel_prefix: str = Field(
        default="facility", description="Prefix of the Redis pub/sub channels"
    )

    model_config = SettingsConfigDict(
        env_prefix="EVENTS_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    cascade: CascadeSettings = Field(default_factory=CascadeSettings)
    events: EventSettings = Field(default_factory=EventSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Build a fresh settings instance.

    ``*_FILE`` secrets are resolved first so ``DB_PASSWORD_FILE`` fills
    ``DB_PASSWORD``. Nothing is cached; callers keep the instance they need.
    """
    load_secret_file_variables()
    return AppSettings()
