# 📄 File: appserver/modules/user_profiles/infrastructure/database/app_db_context.py
# 🧭 Purpose (Layman Explanation):
# The request's "shopping basket" for database changes: repositories drop their adds, edits
# and removals in it, and nothing reaches the database until the basket is checked out at once.
#
# 🧪 Purpose (Technical Summary):
# Unit-of-work persistence context around one request-scoped AsyncSession. Exposes typed
# queryable views per entity kind, records staged mutations in call order and applies
# them atomically in commit(); stale or missing rows abort the whole commit.
#
# 🔗 Dependencies:
# - sqlalchemy (insert/update/delete, AsyncSession, IntegrityError)
# - configurations (entity mappings), queryable.SqlQueryable
# - appserver.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - entity_repository.EntityRepository (staging and version lookups)
# - presentation/dependencies.py (one context per request)
# - seed.py

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from appserver.modules.user_profiles.domain.models import Realm, UserProfile
from appserver.shared.core.exceptions import (
    AppServerException,
    ConcurrencyError,
    DuplicateKeyError,
    NotFoundError,
    PersistenceError,
)

from .configurations import REALM_MAPPING, USER_PROFILE_MAPPING, EntityMapping
from .queryable import SqlQueryable

logger = logging.getLogger(__name__)


class MutationKind(str, Enum):
    """Kinds of staged mutation"""
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class StagedMutation:
    """
    A pending change recorded on the context.

    For updates and deletes, expected_version is the version the row must
    still have when the change is applied.
    """
    kind: MutationKind
    mapping: EntityMapping
    entity: Any
    expected_version: Optional[int] = None

    @property
    def entity_id(self) -> str:
        return self.mapping.id_of(self.entity)


class AppDbContext:
    """
    Request-scoped persistence context.

    Owns the session and the list of staged mutations. Repositories hold a
    reference to it and never write to the session directly.
    """

    def __init__(self, session: AsyncSession):
        self._session = session
        self._staged: List[StagedMutation] = []

    # -- entity collections --------------------------------------------------

    def set(self, mapping: EntityMapping) -> SqlQueryable:
        """Queryable over the committed rows of the mapped entity kind."""
        return SqlQueryable(self._session, mapping)

    @property
    def realms(self) -> SqlQueryable[Realm]:
        return self.set(REALM_MAPPING)

    @property
    def user_profiles(self) -> SqlQueryable[UserProfile]:
        return self.set(USER_PROFILE_MAPPING)

    # -- staging -------------------------------------------------------------

    def stage_add(self, mapping: EntityMapping, entity: Any) -> None:
        self._stage(StagedMutation(MutationKind.ADD, mapping, entity))

    def stage_update(self, mapping: EntityMapping, entity: Any, expected_version: int) -> None:
        self._stage(StagedMutation(MutationKind.UPDATE, mapping, entity, expected_version))

    def stage_delete(self, mapping: EntityMapping, entity: Any, expected_version: int) -> None:
        self._stage(StagedMutation(MutationKind.DELETE, mapping, entity, expected_version))

    def _stage(self, mutation: StagedMutation) -> None:
        self._staged.append(mutation)
        logger.debug(
            f"Staged {mutation.kind.value} of {mutation.mapping.resource_type} {mutation.entity_id}"
        )

    def latest_staged(self, mapping: EntityMapping, entity_id: str) -> Optional[StagedMutation]:
        """Most recent staged mutation touching this entity, if any."""
        for mutation in reversed(self._staged):
            if mutation.mapping is mapping and mutation.entity_id == entity_id:
                return mutation
        return None

    @property
    def staged_changes(self) -> List[StagedMutation]:
        return list(self._staged)

    @property
    def pending_changes(self) -> int:
        return len(self._staged)

    def discard_changes(self) -> None:
        if self._staged:
            logger.debug(f"Discarding {len(self._staged)} staged change(s)")
        self._staged.clear()

    # -- store lookups -------------------------------------------------------

    async def stored_version(self, mapping: EntityMapping, entity_id: str) -> Optional[int]:
        """Committed version of the row with this identifier, None when absent."""
        statement = select(mapping.version_column).where(mapping.id_column == entity_id)
        try:
            result = await self._session.execute(statement)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to look up {mapping.resource_type} {entity_id}: {e}",
                operation="lookup",
                resource_type=mapping.resource_type,
            ) from e
        return result.scalar_one_or_none()

    # -- unit of work --------------------------------------------------------

    async def commit(self) -> int:
        """
        Apply every staged mutation, in call order, as one transaction.

        Returns:
            Number of affected rows

        Raises:
            DuplicateKeyError: An insert collided with a unique column
            ConcurrencyError: A row changed since its mutation was staged
            NotFoundError: A row to update or delete no longer exists
            PersistenceError: Any other backing-store failure

        On failure the transaction is rolled back and the staged mutations
        are kept, so the caller may inspect or discard them.
        """
        if not self._staged:
            return 0

        affected = 0
        current: Optional[StagedMutation] = None
        try:
            for current in self._staged:
                affected += await self._apply(current)
            await self._session.commit()

        except asyncio.CancelledError:
            logger.warning("Commit cancelled, rolling back")
            await self._session.rollback()
            raise
        except AppServerException:
            await self._session.rollback()
            raise
        except IntegrityError as e:
            await self._session.rollback()
            raise self._classify_integrity_error(e, current) from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Commit failed, transaction rolled back: {e}")
            raise PersistenceError(f"Commit failed: {e}", operation="commit") from e

        logger.info(f"Committed {len(self._staged)} staged change(s), {affected} row(s) affected")
        self._staged.clear()
        return affected

    async def _apply(self, mutation: StagedMutation) -> int:
        mapping = mutation.mapping

        if mutation.kind is MutationKind.ADD:
            result = await self._session.execute(
                insert(mapping.table).values(**mapping.to_row(mutation.entity))
            )
            return result.rowcount

        guard = (
            (mapping.id_column == mutation.entity_id)
            & (mapping.version_column == mutation.expected_version)
        )

        if mutation.kind is MutationKind.UPDATE:
            values = mapping.to_row(mutation.entity)
            values.pop(mapping.id_field)
            values.pop("created_at", None)
            statement = update(mapping.table).where(guard).values(**values)
        else:
            statement = delete(mapping.table).where(guard)

        result = await self._session.execute(statement)
        if result.rowcount == 0:
            await self._raise_stale(mutation)
        return result.rowcount

    async def _raise_stale(self, mutation: StagedMutation) -> None:
        mapping = mutation.mapping
        actual = await self.stored_version(mapping, mutation.entity_id)
        if actual is None:
            raise NotFoundError(
                f"{mapping.resource_type} {mutation.entity_id} no longer exists",
                resource_type=mapping.resource_type,
                resource_id=mutation.entity_id,
            )
        logger.warning(
            f"Stale {mutation.kind.value} of {mapping.resource_type} {mutation.entity_id}: "
            f"expected version {mutation.expected_version}, found {actual}"
        )
        raise ConcurrencyError(
            f"{mapping.resource_type} {mutation.entity_id} was modified concurrently",
            resource_type=mapping.resource_type,
            resource_id=mutation.entity_id,
            expected_version=mutation.expected_version,
            actual_version=actual,
        )

    @staticmethod
    def _classify_integrity_error(
        error: IntegrityError, mutation: Optional[StagedMutation]
    ) -> AppServerException:
        message = str(error.orig).lower()
        resource_type = mutation.mapping.resource_type if mutation else None
        resource_id = mutation.entity_id if mutation else None

        if "unique" in message or "duplicate" in message:
            logger.warning(f"Duplicate key on {resource_type} {resource_id}: {error.orig}")
            return DuplicateKeyError(
                f"{resource_type} {resource_id} collides with an existing row",
                resource_type=resource_type,
                resource_id=resource_id,
            )

        logger.error(f"Constraint violation on {resource_type} {resource_id}: {error.orig}")
        return PersistenceError(
            f"Constraint violation: {error.orig}",
            operation="commit",
            resource_type=resource_type,
        )

    async def close(self) -> None:
        """Drop staged changes and release the session."""
        self.discard_changes()
        await self._session.close()
