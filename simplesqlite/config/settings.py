"""
Configuration Settings
======================

Centralized configuration using Pydantic V2 Settings.

Every field can be overridden with an environment variable prefixed with
``SIMPLESQLITE_`` (e.g. ``SIMPLESQLITE_ECHO_SQL=true``) or from a ``.env`` file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from simplesqlite.core.constants import DEFAULT_DB_FILENAME


_JOURNAL_MODES = {"", "DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    default_db_filename: str = Field(default=DEFAULT_DB_FILENAME)
    echo_sql: bool = Field(default=False)
    foreign_keys: bool = Field(default=False)
    journal_mode: str = Field(default="")
    log_level: str = Field(default="INFO")

    @field_validator("default_db_filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """A blank default would make blank paths unresolvable."""
        if not v.strip():
            raise ValueError("default_db_filename must not be blank")
        return v.strip()

    @field_validator("journal_mode")
    @classmethod
    def validate_journal_mode(cls, v: str) -> str:
        mode = v.strip().upper()
        if mode not in _JOURNAL_MODES:
            raise ValueError(f"journal_mode ({v}) must be one of {sorted(_JOURNAL_MODES - {''})} or empty")
        return mode

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level ({v}) must be one of {sorted(_LOG_LEVELS)}")
        return level

    model_config = SettingsConfigDict(
        env_prefix="SIMPLESQLITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
