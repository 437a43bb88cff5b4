"""SQLite storage adapter for Casbin policies."""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from casbin import persist

from policystore.config.settings import Settings, validate_table_name
from policystore.core.exceptions import (
    AdapterClosedError,
    ConfigError,
    SchemaError,
    StorageError,
)
from policystore.core.types import PolicySection
from policystore.storage import schema
from policystore.storage.codec import decode, encode, filter_clause, row_from_record


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from casbin.model import Model

    from policystore.core.models import CasbinRule

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(action: str, error_cls: type[StorageError] = StorageError) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as e:
        logger.error("Failed to %s: %s", action, e)
        raise error_cls(f"Failed to {action}: {e}") from e


class SQLiteAdapter(persist.Adapter):
    """Stores Casbin policy rules in one fixed-width SQLite table.

    The connection is opened once, on first use or by :meth:`open`, and held
    until :meth:`close`. The adapter can be used as a context manager.
    """

    def __init__(
        self,
        db_path: str | Path = "policy.db",
        table_name: str = "casbin_rule",
        timeout: float = 5.0,
    ) -> None:
        try:
            self.table_name = validate_table_name(table_name)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        self.db_path = str(db_path)
        self.timeout = timeout
        self._conn: sqlite3.Connection | None = None
        self._closed = False
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SQLiteAdapter:
        """Create an adapter from :class:`Settings` (environment by default)."""
        if settings is None:
            settings = Settings()
        return cls(settings.db_path, settings.table_name, settings.timeout)

    # -- lifecycle ---------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> SQLiteAdapter:
        """Open the connection and create the policy table if needed."""
        with self._lock:
            if self._closed:
                raise AdapterClosedError(f"Adapter for {self.db_path} is closed")
            if self._conn is not None:
                return self
            with _translate_errors(f"open {self.db_path}"):
                conn = sqlite3.connect(
                    self.db_path,
                    timeout=self.timeout,
                    isolation_level=None,
                    check_same_thread=False,
                )
            conn.row_factory = sqlite3.Row
            self._conn = conn
            try:
                self.ensure_schema()
            except SchemaError:
                self._conn = None
                conn.close()
                raise
            logger.info("Opened policy store %s (table %s)", self.db_path, self.table_name)
        return self

    def close(self) -> None:
        """Close the connection. Further operations raise AdapterClosedError."""
        with self._lock:
            self._closed = True
            if self._conn is None:
                return
            conn, self._conn = self._conn, None
            conn.close()
            logger.info("Closed policy store %s", self.db_path)

    def __enter__(self) -> SQLiteAdapter:
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            self.open()
            assert self._conn is not None
            yield self._conn

    @contextmanager
    def _transaction(self, action: str) -> Iterator[sqlite3.Connection]:
        """Run the block in one write transaction, rolling back on any error."""
        with self._connection() as conn:
            with _translate_errors(action):
                conn.execute("BEGIN IMMEDIATE")
            try:
                with _translate_errors(action):
                    yield conn
                    conn.execute("COMMIT")
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise

    def _sql(self, statement: str) -> str:
        return schema.render(statement, self.table_name)

    # -- schema ------------------------------------------------------------

    def ensure_schema(self) -> None:
        """Create the policy table if it does not exist."""
        with self._connection() as conn, _translate_errors(
            f"create table {self.table_name}", SchemaError
        ):
            conn.execute(self._sql(schema.CREATE_TABLE))

    def drop_schema(self) -> None:
        """Drop the policy table and every rule in it."""
        with self._connection() as conn, _translate_errors(
            f"drop table {self.table_name}", SchemaError
        ):
            conn.execute(self._sql(schema.DROP_TABLE))
        logger.info("Dropped policy table %s", self.table_name)

    # -- bulk --------------------------------------------------------------

    def load_policy(self, model: Model) -> None:
        """Load every stored rule into ``model``."""
        with self._connection() as conn, _translate_errors("load policy"):
            records = conn.execute(self._sql(schema.SELECT_ALL)).fetchall()
        for record in records:
            persist.load_policy_line(decode(row_from_record(record)), model)
        logger.info("Loaded %d policy rules from %s", len(records), self.table_name)

    def save_policy(self, model: Model) -> bool:
        """Replace the stored rules with the "p" and "g" sections of ``model``.

        The drop, recreate and insert run in one transaction: either the
        whole new rule set is committed or the previous one is kept.
        """
        rows = [encode(ptype, rule) for ptype, rule in _iter_rules(model)]
        with self._transaction("save policy") as conn:
            conn.execute(self._sql(schema.DROP_TABLE))
            conn.execute(self._sql(schema.CREATE_TABLE))
            conn.executemany(self._sql(schema.INSERT_RULE), [row.as_params() for row in rows])
        logger.info("Saved %d policy rules to %s", len(rows), self.table_name)
        return True

    # -- incremental -------------------------------------------------------

    def add_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Insert one rule. Duplicates are not rejected."""
        row = encode(ptype, rule)
        with self._connection() as conn, _translate_errors("add policy"):
            conn.execute(self._sql(schema.INSERT_RULE), row.as_params())
        logger.debug("Added %s", decode(row))
        return True

    def add_policies(self, sec: str, ptype: str, rules: Iterable[Sequence[str]]) -> bool:
        """Insert several rules in one transaction."""
        rows = [encode(ptype, rule) for rule in rules]
        with self._transaction("add policies") as conn:
            conn.executemany(self._sql(schema.INSERT_RULE), [row.as_params() for row in rows])
        logger.debug("Added %d %s rules", len(rows), ptype)
        return True

    def remove_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Delete every row equal to ``rule``. Removing an absent rule succeeds."""
        row = encode(ptype, rule)
        with self._connection() as conn, _translate_errors("remove policy"):
            deleted = conn.execute(self._sql(schema.DELETE_RULE), row.as_params()).rowcount
        logger.debug("Removed %s (%d rows)", decode(row), deleted)
        return True

    def remove_policies(self, sec: str, ptype: str, rules: Iterable[Sequence[str]]) -> bool:
        """Delete several rules in one transaction."""
        rows = [encode(ptype, rule) for rule in rules]
        with self._transaction("remove policies") as conn:
            conn.executemany(self._sql(schema.DELETE_RULE), [row.as_params() for row in rows])
        logger.debug("Removed %d %s rules", len(rows), ptype)
        return True

    def remove_filtered_policy(
        self, sec: str, ptype: str, field_index: int, *field_values: str
    ) -> bool:
        """Delete every rule whose fields from ``field_index`` on match ``field_values``.

        Columns outside the given range, and empty values, match anything.
        """
        clause, params = filter_clause(field_index, field_values)
        with self._connection() as conn, _translate_errors("remove filtered policy"):
            deleted = conn.execute(self._sql(schema.DELETE_BY_TYPE) + clause, [ptype, *params]).rowcount
        logger.debug(
            "Removed %d %s rules matching %s at field %d", deleted, ptype, list(field_values), field_index
        )
        return True

    # -- inspection --------------------------------------------------------

    def count(self) -> int:
        """Number of stored rows."""
        with self._connection() as conn, _translate_errors("count policy rules"):
            return conn.execute(self._sql(schema.COUNT_ROWS)).fetchone()["cnt"]

    def rules(self, ptype: str | None = None) -> list[CasbinRule]:
        """Stored rows, optionally only those of one policy type."""
        sql, params = self._sql(schema.SELECT_ALL), []
        if ptype:
            sql += " WHERE p_type = ?"
            params.append(ptype)
        with self._connection() as conn, _translate_errors("list policy rules"):
            records = conn.execute(sql, params).fetchall()
        return [row_from_record(record) for record in records]


def _iter_rules(model: Model) -> Iterator[tuple[str, list[str]]]:
    for section in PolicySection:
        for ptype, assertion in model.model.get(section.value, {}).items():
            for rule in assertion.policy:
                yield ptype, rule
