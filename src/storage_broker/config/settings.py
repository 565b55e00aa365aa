"""
Configuration management for the storage broker.

This module provides environment-based configuration using Pydantic BaseSettings,
so the same code can run against a local SQLite file during development and a
real database in production without code changes.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SB_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the SB_ prefix. For example,
    SB_TABLE_CONFIG_PATH overrides TABLE_CONFIG_PATH.

    Fields:
    - DATABASE_URL: SQLAlchemy connection URL
    - LOG_LEVEL: Logging level (uppercase)
    - TABLE_CONFIG_PATH: YAML file describing entity tables
    - IDENTITY_PROPERTY: Property name of the generated identity column
    - BIND_PREFIX: Prefix used when minting bind-parameter names
    """

    DATABASE_URL: str = Field(
        default="sqlite:///storage_broker.db",
        description="SQLAlchemy database URL",
    )
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (uppercase)")
    TABLE_CONFIG_PATH: str = Field(
        default="config/tables.yml",
        description="Path to the entity table configuration file",
    )
    IDENTITY_PROPERTY: str = Field(
        default="id", description="Property holding the generated identity"
    )
    BIND_PREFIX: str = Field(
        default="val", description="Prefix for generated bind-parameter names"
    )

    model_config = SettingsConfigDict(
        env_prefix="SB_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("BIND_PREFIX")
    @classmethod
    def _check_bind_prefix(cls, value: str) -> str:
        if not value or not value.isidentifier():
            raise ValueError("BIND_PREFIX must be a valid identifier")
        return value

    def get_table_config_path(self) -> Path:
        """Resolve TABLE_CONFIG_PATH against the project root when relative."""
        path = Path(self.TABLE_CONFIG_PATH).expanduser()
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
