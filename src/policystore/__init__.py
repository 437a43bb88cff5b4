"""policystore - SQLite persistence adapter for Casbin policies.

This package provides:
- A codec between Casbin policy rules and fixed-width table rows
- A storage adapter implementing the Casbin adapter contract
- A command-line tool for inspecting and editing stored rules
"""

from __future__ import annotations

from policystore.config.settings import Settings
from policystore.core.exceptions import (
    AdapterClosedError,
    ConfigError,
    PolicyStoreError,
    RuleCapacityError,
    RuleEncodingError,
    SchemaError,
    StorageError,
)
from policystore.core.models import CasbinRule
from policystore.storage.adapter import SQLiteAdapter


__version__ = "0.1.0"

__all__ = [
    "AdapterClosedError",
    "CasbinRule",
    "ConfigError",
    "PolicyStoreError",
    "RuleCapacityError",
    "RuleEncodingError",
    "SQLiteAdapter",
    "SchemaError",
    "Settings",
    "StorageError",
]
