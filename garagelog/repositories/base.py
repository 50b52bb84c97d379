"""Shared repository behaviour: get, create, owner-scoped update/delete, list."""

import logging
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import DateTime, bindparam, select, text
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from garagelog.errors import NoRowsAffected, NotFound, StorageFailure, ValidationFailure
from garagelog.models.enums import SortKey
from garagelog.repositories.statements import PatternGroup, assemble, eq

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def normalize_value(value: Any) -> Any:
    """Prepare a Python value for binding: enums to their value, datetimes to UTC."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    return value


class Repository(Generic[ModelT]):
    """Base class for entity repositories.

    Subclasses set the model, the table/alias used in assembled statements,
    the columns searched by free text, the columns callers may update and
    the sort keys they support.
    """

    model: ClassVar[type]
    table: ClassVar[str]
    alias: ClassVar[str]
    entity_name: ClassVar[str]
    search_columns: ClassVar[tuple[str, ...]] = ()
    updatable_columns: ClassVar[frozenset[str]] = frozenset()
    sort_keys: ClassVar[frozenset[SortKey]] = frozenset(
        {SortKey.AZ, SortKey.ZA, SortKey.OLDEST, SortKey.NEWEST, SortKey.LAST_UPDATED}
    )
    name_column: ClassVar[str] = "name"
    owner_column: ClassVar[str | None] = "user_id"

    def __init__(self, db: Session):
        self.db = db

    # Reads

    def get_by_id(self, entity_id: int) -> ModelT:
        """Fetch one entity or raise NotFound."""
        try:
            entity = self.db.query(self.model).filter(self.model.id == entity_id).first()
        except SQLAlchemyError as e:
            raise self._storage_failure(f"get {self.entity_name} {entity_id}", e) from e
        if entity is None:
            raise NotFound(f"{self.entity_name.capitalize()} {entity_id} not found")
        return entity

    def order_by(self, sort: SortKey | None) -> str:
        """Map a sort key onto a whitelisted column and direction."""
        a = self.alias
        columns = {
            SortKey.AZ: f"{a}.{self.name_column} ASC",
            SortKey.ZA: f"{a}.{self.name_column} DESC",
            SortKey.OLDEST: f"{a}.created_at ASC",
            SortKey.NEWEST: f"{a}.created_at DESC",
            SortKey.LAST_UPDATED: f"{a}.updated_at DESC",
            SortKey.COMPLETED: f"{a}.completed_at DESC",
        }
        if sort in self.sort_keys:
            return columns[sort]
        return f"{a}.updated_at DESC"

    def search_groups(self, search: str | None) -> list[PatternGroup]:
        if not search:
            return []
        return [PatternGroup(fields=self.search_columns, match=search)]

    def select(
        self,
        joins: Sequence[str] = (),
        predicates: Sequence[str] = (),
        search: str | None = None,
        sort: SortKey | None = None,
    ) -> list[ModelT]:
        """Run an assembled SELECT and decode every row into the model."""
        statement = assemble(
            f"SELECT {self.alias}.* FROM {self.table} AS {self.alias}",
            joins=joins,
            predicates=predicates,
            pattern_groups=self.search_groups(search),
            order_by=self.order_by(sort),
        )
        # No bind parameters in a SELECT; a ":name" in search text stays literal
        clause = text(statement.replace(":", "\\:"))
        try:
            result = self.db.execute(select(self.model).from_statement(clause))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._storage_failure(f"list {self.entity_name}s", e) from e

    # Writes

    def create(self, **values: Any) -> int:
        """Insert a new row and return its id."""
        entity = self.model(**{key: normalize_value(value) for key, value in values.items()})
        try:
            self.db.add(entity)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure(f"create {self.entity_name}", e) from e
        logger.info(f"Created {self.entity_name} {entity.id}")
        return entity.id

    def update(
        self,
        entity_id: int,
        values: Mapping[str, Any],
        owner_id: int | None = None,
    ) -> int:
        """Update columns of one row, scoped to owner_id when given."""
        unknown = set(values) - self.updatable_columns
        if unknown:
            raise ValidationFailure(
                f"Cannot update {self.entity_name} field(s): {', '.join(sorted(unknown))}"
            )
        return self.execute_update(entity_id, dict(values), self.scope(entity_id, owner_id))

    def delete(self, entity_id: int, owner_id: int | None = None) -> int:
        """Delete one row, scoped to owner_id when given."""
        statement = assemble(
            f"DELETE FROM {self.table}", predicates=self.scope(entity_id, owner_id)
        )
        return self.execute_write(statement, action="deleted")

    def scope(self, entity_id: int, owner_id: int | None) -> list[str]:
        """Predicates limiting a write to one row the caller may touch."""
        predicates = [eq("id", entity_id)]
        if owner_id is not None and self.owner_column:
            predicates.append(eq(self.owner_column, owner_id))
        return predicates

    def execute_update(
        self, entity_id: int, values: dict[str, Any], predicates: Sequence[str]
    ) -> int:
        values["updated_at"] = datetime.now(UTC)
        assignments = ", ".join(f"{column} = :{column}" for column in values)
        statement = assemble(f"UPDATE {self.table} SET {assignments}", predicates=predicates)
        params = {key: normalize_value(value) for key, value in values.items()}
        return self.execute_write(statement, params, action="updated")

    def execute_write(
        self,
        statement: str,
        params: Mapping[str, Any] | None = None,
        action: str = "changed",
    ) -> int:
        """Execute an UPDATE/DELETE and return the affected row count.

        Raises NoRowsAffected when nothing matched.
        """
        params = dict(params or {})
        clause = text(statement)
        # Typed binds so datetimes are stored in the dialect's DateTime format
        typed = [
            bindparam(key, type_=DateTime(timezone=True))
            for key, value in params.items()
            if isinstance(value, datetime)
        ]
        if typed:
            clause = clause.bindparams(*typed)
        try:
            result: CursorResult = self.db.execute(clause, params)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure(f"write {self.entity_name}", e) from e
        if result.rowcount == 0:
            logger.info(f"No {self.entity_name} rows {action}: {statement}")
            raise NoRowsAffected(f"No {self.entity_name} rows {action}")
        return result.rowcount

    def _storage_failure(self, operation: str, error: SQLAlchemyError) -> StorageFailure:
        self.db.rollback()
        logger.error(f"DB error during {operation}: {error}")
        return StorageFailure(f"Unable to {operation}")
