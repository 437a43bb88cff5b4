"""Core module - Row model, exceptions and schema constants."""

from __future__ import annotations

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
from policystore.core.types import MAX_FIELDS, VALUE_COLUMNS, PolicySection


__all__ = [
    "MAX_FIELDS",
    "VALUE_COLUMNS",
    # Exceptions
    "AdapterClosedError",
    # Models
    "CasbinRule",
    "ConfigError",
    "PolicySection",
    "PolicyStoreError",
    "RuleCapacityError",
    "RuleEncodingError",
    "SchemaError",
    "StorageError",
]
