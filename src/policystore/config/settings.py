"""Adapter settings and configuration."""

from __future__ import annotations

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


def validate_table_name(name: str) -> str:
    """Return ``name`` if it is safe to interpolate as a SQL table name."""
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid table name: {name!r}")
    return name


class Settings(BaseSettings):
    """Policy store configuration.

    Settings are loaded from ``POLICYSTORE_*`` environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="POLICYSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    db_path: str = "policy.db"
    table_name: str = "casbin_rule"
    timeout: float = Field(default=5.0, gt=0)

    # Logging
    log_level: str = "INFO"

    @field_validator("table_name")
    @classmethod
    def _check_table_name(cls, value: str) -> str:
        return validate_table_name(value)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()
