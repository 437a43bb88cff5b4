"""policystore exception hierarchy."""

from __future__ import annotations


class PolicyStoreError(Exception):
    """Base exception for all policystore errors."""


class ConfigError(PolicyStoreError):
    """Raised when adapter settings are invalid."""


class StorageError(PolicyStoreError):
    """Raised when a database connection, query, insert or delete fails."""


class SchemaError(StorageError):
    """Raised when creating or dropping the policy table fails."""


class AdapterClosedError(StorageError):
    """Raised when an operation is attempted on a closed adapter."""


class RuleEncodingError(PolicyStoreError):
    """Raised when a policy rule cannot be stored in the policy table."""


class RuleCapacityError(RuleEncodingError):
    """Raised when a rule or field range does not fit the six value columns."""
