"""Converters between policy rules, table rows and policy lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from policystore.core.exceptions import RuleCapacityError, RuleEncodingError
from policystore.core.models import CasbinRule
from policystore.core.types import MAX_FIELDS, VALUE_COLUMNS


if TYPE_CHECKING:
    import sqlite3
    from collections.abc import Sequence


def encode(ptype: str, fields: Sequence[str]) -> CasbinRule:
    """Convert a policy rule to a table row.

    Args:
        ptype: Policy type tag, e.g. ``"p"`` or ``"g"``.
        fields: Up to six rule fields in order.

    Returns:
        Row with unused value columns set to ``""``.

    Raises:
        RuleCapacityError: More than six fields were given.
        RuleEncodingError: A value does not fit its column.
    """
    if len(fields) > MAX_FIELDS:
        raise RuleCapacityError(
            f"Rule {ptype} has {len(fields)} fields, the policy table holds at most {MAX_FIELDS}"
        )
    try:
        return CasbinRule(p_type=ptype, **dict(zip(VALUE_COLUMNS, fields)))
    except ValidationError as e:
        raise RuleEncodingError(f"Cannot store rule {ptype}, {', '.join(map(str, fields))}: {e}") from e


def decode(row: CasbinRule) -> str:
    """Convert a table row to a policy line, e.g. ``"p, alice, data1, read"``.

    Empty columns are treated as absent and left out.
    """
    return ", ".join([row.p_type, *row.rule_fields])


def row_from_record(record: sqlite3.Row | Sequence[str | None]) -> CasbinRule:
    """Convert a ``SELECT p_type, v0..v5`` result row to a CasbinRule.

    NULLs written by other tools are read as absent fields.
    """
    ptype, *values = (value or "" for value in record)
    return CasbinRule.model_construct(p_type=ptype, **dict(zip(VALUE_COLUMNS, values)))


def filter_clause(field_index: int, field_values: Sequence[str]) -> tuple[str, list[str]]:
    """Build the value-column predicate for a filtered removal.

    Columns ``v{field_index}`` onward are matched against ``field_values``;
    columns outside that range, and empty values, are wildcards.

    Returns:
        SQL fragment (empty or starting with ``" AND "``) and its parameters.

    Raises:
        RuleCapacityError: The range starts before ``v0`` or ends past ``v5``.
    """
    if field_index < 0 or field_index + len(field_values) > MAX_FIELDS:
        raise RuleCapacityError(
            f"Field range {field_index}..{field_index + len(field_values) - 1} "
            f"is outside v0..v{MAX_FIELDS - 1}"
        )
    clause, params = "", []
    for offset, value in enumerate(field_values):
        if value == "":
            continue
        clause += f" AND {VALUE_COLUMNS[field_index + offset]} = ?"
        params.append(value)
    return clause, params
