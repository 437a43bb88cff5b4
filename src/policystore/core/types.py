"""Core type definitions and schema constants."""

from __future__ import annotations

from enum import Enum


# Fixed width of the policy table
MAX_FIELDS = 6
PTYPE_MAX_LENGTH = 10
VALUE_MAX_LENGTH = 256
VALUE_COLUMNS = tuple(f"v{i}" for i in range(MAX_FIELDS))


class PolicySection(str, Enum):
    """Model sections persisted by the adapter, in save order."""

    POLICY = "p"
    GROUPING = "g"
