"""Storage layer for Casbin policy rules."""

from policystore.storage.adapter import SQLiteAdapter
from policystore.storage.codec import decode, encode

__all__ = ["SQLiteAdapter", "decode", "encode"]
