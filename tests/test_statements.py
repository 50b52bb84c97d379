"""Statement assembler tests."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from garagelog.errors import ValidationFailure
from garagelog.models.enums import AlertType
from garagelog.repositories.statements import PatternGroup, assemble, eq, lte, sql_literal


def test_base_only():
    """A bare base statement comes back unchanged."""
    assert assemble("SELECT j.* FROM jobs AS j") == "SELECT j.* FROM jobs AS j"


def test_single_predicate():
    statement = assemble("SELECT j.* FROM jobs AS j", predicates=["j.user_id = 7"])
    assert statement == "SELECT j.* FROM jobs AS j WHERE j.user_id = 7"


def test_join_predicate_and_sort():
    """Joins come before WHERE, ORDER BY comes last."""
    statement = assemble(
        "SELECT l.* FROM labels AS l",
        joins=["JOIN job_labels AS jl ON l.id = jl.label_id"],
        predicates=["jl.job_id = 3"],
        order_by="l.name ASC",
    )
    assert statement == (
        "SELECT l.* FROM labels AS l "
        "JOIN job_labels AS jl ON l.id = jl.label_id "
        "WHERE jl.job_id = 3 ORDER BY l.name ASC"
    )


def test_pattern_group_is_ored_and_anded_with_predicates():
    statement = assemble(
        "SELECT j.* FROM jobs AS j",
        predicates=["j.user_id = 7", "j.is_complete = FALSE"],
        pattern_groups=[PatternGroup(fields=("j.name", "j.description"), match="brake")],
    )
    assert statement == (
        "SELECT j.* FROM jobs AS j WHERE j.user_id = 7 AND j.is_complete = FALSE "
        "AND (j.name LIKE '%brake%' ESCAPE '\\' "
        "OR j.description LIKE '%brake%' ESCAPE '\\')"
    )


def test_pattern_group_without_predicates_starts_where():
    statement = assemble(
        "SELECT u.* FROM users AS u",
        pattern_groups=[PatternGroup(fields=("u.username",), match="ann")],
    )
    assert statement == "SELECT u.* FROM users AS u WHERE (u.username LIKE '%ann%' ESCAPE '\\')"


def test_multiple_groups_keep_order():
    statement = assemble(
        "SELECT v.* FROM vehicles AS v",
        pattern_groups=[
            PatternGroup(fields=("v.make",), match="Honda"),
            PatternGroup(fields=("v.model",), match="Civic"),
        ],
    )
    assert statement.endswith(
        "WHERE (v.make LIKE '%Honda%' ESCAPE '\\') AND (v.model LIKE '%Civic%' ESCAPE '\\')"
    )


def test_joins_keep_order():
    joins = ["JOIN a ON x = a.x", "JOIN b ON x = b.x", "JOIN c ON x = c.x"]
    statement = assemble("SELECT x.* FROM t AS x", joins=joins)
    assert statement == "SELECT x.* FROM t AS x " + " ".join(joins)


def test_deterministic():
    args = {
        "joins": ["JOIN jobs AS j ON v.id = j.vehicle_id"],
        "predicates": ["j.id = 1"],
        "pattern_groups": [PatternGroup(fields=("v.name",), match="truck")],
        "order_by": "v.updated_at DESC",
    }
    assert assemble("SELECT v.* FROM vehicles AS v", **args) == assemble(
        "SELECT v.* FROM vehicles AS v", **args
    )


def test_update_and_delete_bases():
    assert (
        assemble("DELETE FROM vehicles", predicates=["id = 4", "user_id = 2"])
        == "DELETE FROM vehicles WHERE id = 4 AND user_id = 2"
    )
    assert (
        assemble("UPDATE tasks SET name = :name", predicates=["id = 9"])
        == "UPDATE tasks SET name = :name WHERE id = 9"
    )


def test_pattern_quotes_are_escaped():
    statement = assemble(
        "SELECT j.* FROM jobs AS j",
        pattern_groups=[PatternGroup(fields=("j.name",), match="x' OR '1'='1")],
    )
    assert statement.endswith("WHERE (j.name LIKE '%x'' OR ''1''=''1%' ESCAPE '\\')")


@pytest.mark.parametrize(
    ("match", "pattern"),
    [
        ("a_c", "'%a\\_c%'"),
        ("100%", "'%100\\%%'"),
        ("C:\\tmp", "'%C:\\\\tmp%'"),
    ],
)
def test_pattern_wildcards_are_escaped(match, pattern):
    """Search text matches literally: LIKE wildcards in it are escaped."""
    statement = assemble(
        "SELECT j.* FROM jobs AS j",
        pattern_groups=[PatternGroup(fields=("j.name",), match=match)],
    )
    assert statement.endswith(f"WHERE (j.name LIKE {pattern} ESCAPE '\\')")


def test_empty_pattern_group_is_skipped():
    statement = assemble("SELECT j.* FROM jobs AS j", pattern_groups=[PatternGroup((), "x")])
    assert statement == "SELECT j.* FROM jobs AS j"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (42, "42"),
        (True, "TRUE"),
        (False, "FALSE"),
        (AlertType.REMINDER, "'reminder'"),
        (datetime(2024, 3, 1, 8, 30, 0, tzinfo=UTC), "'2024-03-01 08:30:00.000000+00:00'"),
    ],
)
def test_sql_literal(value, expected):
    assert sql_literal(value) == expected


def test_sql_literal_converts_to_utc():
    eastern = timezone(timedelta(hours=-5))
    literal = sql_literal(datetime(2024, 3, 1, 3, 30, tzinfo=eastern))
    assert literal == "'2024-03-01 08:30:00.000000+00:00'"


def test_sql_literal_keeps_microseconds():
    moment = datetime(2024, 3, 1, 8, 30, 0, 123456, tzinfo=UTC)
    assert sql_literal(moment) == "'2024-03-01 08:30:00.123456+00:00'"


@pytest.mark.parametrize("value", ["7", "1 OR 1=1", 1.5, None])
def test_sql_literal_rejects_untyped_values(value):
    """Raw strings and other types never become predicate literals."""
    with pytest.raises(ValidationFailure):
        sql_literal(value)


def test_comparison_helpers():
    assert eq("j.vehicle_id", 3) == "j.vehicle_id = 3"
    assert eq("a.is_read", False) == "a.is_read = FALSE"
    assert lte("a.alert_at", datetime(2024, 1, 1, tzinfo=UTC)) == (
        "a.alert_at <= '2024-01-01 00:00:00.000000+00:00'"
    )
