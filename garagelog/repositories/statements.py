"""Assembly of textual SQL statements from joins, predicates and search groups.

Every list, update and delete issued by the repositories is built here. The
output is deterministic: the same inputs always produce the same string, and
joins, predicates and pattern groups keep the order they were given in.

Column and table names are trusted. The values that end up in predicates go
through ``sql_literal`` which only accepts ints, bools, enum members and
datetimes, so a raw request string can never reach the statement that way.
The one free-text path is the match value of a ``PatternGroup``; its quotes
are doubled and its LIKE wildcards escaped.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from garagelog.errors import ValidationFailure

logger = logging.getLogger(__name__)

# Microsecond precision and an explicit UTC offset. SQLite stores the same
# prefix without the offset, so string comparison still orders correctly.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f+00:00"
LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class PatternGroup:
    """Substring match of one value against several columns, ORed together."""

    fields: tuple[str, ...]
    match: str


def sql_literal(value: int | bool | Enum | datetime) -> str:
    """Render a typed value as a SQL literal.

    Raises ValidationFailure for anything that is not an int, bool, enum
    member or datetime.
    """
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, Enum):
        return quote(str(value.value))
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return quote(value.strftime(TIMESTAMP_FORMAT))
    raise ValidationFailure(f"Unsupported predicate value type: {type(value).__name__}")


def quote(text: str) -> str:
    """Wrap text in single quotes, doubling any it contains."""
    return "'" + text.replace("'", "''") + "'"


def eq(column: str, value: int | bool | Enum | datetime) -> str:
    """Equality predicate, e.g. ``j.vehicle_id = 3``."""
    return f"{column} = {sql_literal(value)}"


def lte(column: str, value: int | bool | Enum | datetime) -> str:
    """Less-or-equal predicate, e.g. ``a.alert_at <= '2024-01-01 00:00:00.000000+00:00'``."""
    return f"{column} <= {sql_literal(value)}"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text only ever matches itself."""
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return text


def _pattern_clause(group: PatternGroup) -> str:
    pattern = quote(f"%{escape_like(group.match)}%")
    escape = quote(LIKE_ESCAPE)
    return (
        "("
        + " OR ".join(f"{field} LIKE {pattern} ESCAPE {escape}" for field in group.fields)
        + ")"
    )


def assemble(
    base: str,
    joins: Sequence[str] = (),
    predicates: Sequence[str] = (),
    pattern_groups: Sequence[PatternGroup] = (),
    order_by: str | None = None,
) -> str:
    """Build one statement.

    ``base`` is the leading ``SELECT ... FROM ... AS x`` / ``UPDATE ... SET ...``
    / ``DELETE FROM ...``. Joins follow it in order, then a WHERE clause that
    ANDs the predicates followed by one parenthesized OR clause per pattern
    group, then the optional ORDER BY.
    """
    parts = [base]
    parts.extend(joins)

    conditions = list(predicates)
    conditions.extend(_pattern_clause(group) for group in pattern_groups if group.fields)
    if conditions:
        parts.append("WHERE " + " AND ".join(conditions))

    if order_by:
        parts.append(f"ORDER BY {order_by}")

    statement = " ".join(parts)
    logger.debug(f"Assembled statement: {statement}")
    return statement
