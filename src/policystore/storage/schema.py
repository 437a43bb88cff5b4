"""SQL statements for the policy table."""

from __future__ import annotations

from policystore.core.types import PTYPE_MAX_LENGTH, VALUE_COLUMNS, VALUE_MAX_LENGTH


COLUMNS = ("p_type", *VALUE_COLUMNS)

CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS {table} (
    p_type VARCHAR({ptype_len}) NOT NULL DEFAULT '',
    v0 VARCHAR({value_len}) NOT NULL DEFAULT '',
    v1 VARCHAR({value_len}) NOT NULL DEFAULT '',
    v2 VARCHAR({value_len}) NOT NULL DEFAULT '',
    v3 VARCHAR({value_len}) NOT NULL DEFAULT '',
    v4 VARCHAR({value_len}) NOT NULL DEFAULT '',
    v5 VARCHAR({value_len}) NOT NULL DEFAULT ''
)
"""

DROP_TABLE = "DROP TABLE IF EXISTS {table}"

SELECT_ALL = "SELECT p_type, v0, v1, v2, v3, v4, v5 FROM {table}"

INSERT_RULE = "INSERT INTO {table} (p_type, v0, v1, v2, v3, v4, v5) VALUES (?, ?, ?, ?, ?, ?, ?)"

DELETE_RULE = (
    "DELETE FROM {table} WHERE p_type = ? AND v0 = ? AND v1 = ? AND v2 = ? "
    "AND v3 = ? AND v4 = ? AND v5 = ?"
)

DELETE_BY_TYPE = "DELETE FROM {table} WHERE p_type = ?"

COUNT_ROWS = "SELECT COUNT(*) AS cnt FROM {table}"


def render(statement: str, table: str) -> str:
    """Bind the table name into one of the statements above.

    ``table`` must already be validated as a plain identifier.
    """
    return statement.format(table=table, ptype_len=PTYPE_MAX_LENGTH, value_len=VALUE_MAX_LENGTH)
