"""Tests for policystore.config.settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from policystore.config.settings import Settings, validate_table_name


if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep a developer's .env and POLICYSTORE_* variables out of the tests
    monkeypatch.chdir(tmp_path)
    for var in ("DB_PATH", "TABLE_NAME", "TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(f"POLICYSTORE_{var}", raising=False)


def test_defaults() -> None:
    settings = Settings()
    assert settings.db_path == "policy.db"
    assert settings.table_name == "casbin_rule"
    assert settings.timeout == 5.0
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLICYSTORE_DB_PATH", "/var/lib/authz/policy.db")
    monkeypatch.setenv("POLICYSTORE_TABLE_NAME", "authz_rules")
    monkeypatch.setenv("POLICYSTORE_TIMEOUT", "0.5")
    monkeypatch.setenv("POLICYSTORE_LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.db_path == "/var/lib/authz/policy.db"
    assert settings.table_name == "authz_rules"
    assert settings.timeout == 0.5
    assert settings.log_level == "DEBUG"


def test_env_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("POLICYSTORE_TABLE_NAME=from_env_file\n", encoding="utf-8")
    assert Settings().table_name == "from_env_file"


@pytest.mark.parametrize("name", ["casbin_rule", "_rules", "Policy2"])
def test_valid_table_names(name: str) -> None:
    assert validate_table_name(name) == name


@pytest.mark.parametrize("name", ["", "2rules", "rules;drop", "my rules", "rules\"", "a" * 64])
def test_invalid_table_names(name: str) -> None:
    with pytest.raises(ValueError, match="Invalid table name"):
        validate_table_name(name)


def test_invalid_table_name_in_settings() -> None:
    with pytest.raises(ValidationError):
        Settings(table_name="x; DROP TABLE casbin_rule")


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(timeout=0)
