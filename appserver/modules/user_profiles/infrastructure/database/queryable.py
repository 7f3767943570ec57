# 📄 File: appserver/modules/user_profiles/infrastructure/database/queryable.py
# 🧭 Purpose (Layman Explanation):
# Builds database questions step by step (filter, sort, page) and only sends them to the
# database when the answer is actually needed.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of the Queryable contract. Wraps an immutable Select over
# one mapped table; builders derive new Selects, terminal methods execute on the
# request's AsyncSession and return detached domain entities. Stored rows that fail
# entity validation are reported as DataIntegrityError.
#
# 🔗 Dependencies:
# - sqlalchemy (select, func, AsyncSession)
# - pydantic (entity validation errors)
# - configurations.EntityMapping
#
# 🔄 Connected Modules / Calls From:
# - app_db_context.AppDbContext.set (realms / user_profiles views)

import logging
from typing import Any, List, Mapping, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from appserver.modules.user_profiles.domain.repositories.queryable import Queryable
from appserver.shared.core.exceptions import DataIntegrityError, PersistenceError

from .configurations import EntityMapping

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlQueryable(Queryable[T]):
    """
    Queryable over committed rows of one table.

    Staged, uncommitted mutations on the owning context are not visible here.
    """

    def __init__(
        self,
        session: AsyncSession,
        mapping: EntityMapping,
        statement: Optional[Select] = None,
    ):
        self._session = session
        self._mapping = mapping
        self._statement = statement if statement is not None else select(mapping.table)

    def _derive(self, statement: Select) -> "SqlQueryable[T]":
        return SqlQueryable(self._session, self._mapping, statement)

    @property
    def columns(self) -> Any:
        return self._mapping.table.c

    # -- builders ------------------------------------------------------------

    def filter_by(self, **fields: Any) -> "SqlQueryable[T]":
        criteria = []
        for name, value in fields.items():
            if name not in self.columns:
                raise ValueError(f"Unknown field for {self._mapping.resource_type}: {name}")
            criteria.append(self.columns[name] == value)
        return self.where(*criteria)

    def where(self, *criteria: Any) -> "SqlQueryable[T]":
        return self._derive(self._statement.where(*criteria))

    def order_by(self, *clauses: Any) -> "SqlQueryable[T]":
        resolved = []
        for clause in clauses:
            if isinstance(clause, str):
                descending = clause.startswith("-")
                name = clause.lstrip("-")
                if name not in self.columns:
                    raise ValueError(f"Unknown field for {self._mapping.resource_type}: {name}")
                column = self.columns[name]
                resolved.append(column.desc() if descending else column.asc())
            else:
                resolved.append(clause)
        return self._derive(self._statement.order_by(*resolved))

    def limit(self, count: int) -> "SqlQueryable[T]":
        return self._derive(self._statement.limit(count))

    def offset(self, count: int) -> "SqlQueryable[T]":
        return self._derive(self._statement.offset(count))

    # -- terminal operations -------------------------------------------------

    async def _execute(self, statement: Select):
        try:
            return await self._session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Query on {self._mapping.resource_type} failed: {e}")
            raise PersistenceError(
                f"Failed to query {self._mapping.resource_type}: {e}",
                operation="query",
                resource_type=self._mapping.resource_type,
            ) from e

    def _to_entity(self, row: Mapping[str, Any]) -> T:
        try:
            return self._mapping.to_entity(row)
        except PydanticValidationError as e:
            entity_id = row.get(self._mapping.id_field)
            logger.error(
                f"Stored {self._mapping.resource_type} {entity_id} violates entity invariants: {e}"
            )
            raise DataIntegrityError(
                f"Stored {self._mapping.resource_type} {entity_id} is not a valid entity",
                resource_type=self._mapping.resource_type,
                resource_id=entity_id,
                details={"invalid_fields": [".".join(str(part) for part in err["loc"]) for err in e.errors()]},
            ) from e

    async def all(self) -> List[T]:
        result = await self._execute(self._statement)
        return [self._to_entity(row) for row in result.mappings().all()]

    async def first(self) -> Optional[T]:
        result = await self._execute(self._statement.limit(1))
        row = result.mappings().first()
        return self._to_entity(row) if row is not None else None

    async def one_or_none(self) -> Optional[T]:
        result = await self._execute(self._statement)
        try:
            row = result.mappings().one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Expected at most one {self._mapping.resource_type}: {e}",
                operation="query",
                resource_type=self._mapping.resource_type,
            ) from e
        return self._to_entity(row) if row is not None else None

    async def count(self) -> int:
        statement = select(func.count()).select_from(self._statement.subquery())
        result = await self._execute(statement)
        return result.scalar_one()

    async def exists(self) -> bool:
        return await self.first() is not None

    async def get(self, entity_id: str) -> Optional[T]:
        return await self.where(self._mapping.id_column == entity_id).one_or_none()

    def __repr__(self) -> str:
        return f"<SqlQueryable({self._mapping.resource_type})>"
