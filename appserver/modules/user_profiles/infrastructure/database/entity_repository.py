# 📄 File: appserver/modules/user_profiles/infrastructure/database/entity_repository.py
# 🧭 Purpose (Layman Explanation):
# The one piece of storage code that knows how to add, change, remove and look up any kind
# of record; each record type just tells it which table to use.
#
# 🧪 Purpose (Technical Summary):
# Concrete implementation of BaseRepository over AppDbContext, parameterised by an
# EntityMapping. Validates entities, enforces identifier uniqueness and optimistic
# concurrency against committed and staged state, and stages mutations for commit.
#
# 🔗 Dependencies:
# - app_db_context.AppDbContext, configurations.EntityMapping
# - pydantic (entity validation)
# - appserver.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - realm_repository_impl.RealmRepositoryImpl
# - user_profile_repository_impl.UserProfileRepositoryImpl

"""
Generic Repository Implementation

Entity-specific repositories subclass EntityRepository and only bind
``mapping``. Every CRUD rule lives here once:

- add: validate, reject duplicate identifiers, assign version and timestamps
- update: reject missing rows and stale versions, bump the version
- delete: reject entities of another kind, missing rows (including rows
  already staged for deletion) and stale versions
"""

import logging
from datetime import datetime, timezone
from typing import Any, ClassVar, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from appserver.modules.user_profiles.domain.repositories.base_repository import BaseRepository
from appserver.shared.core.exceptions import (
    ConcurrencyError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)

from .app_db_context import AppDbContext, MutationKind
from .configurations import EntityMapping
from .queryable import SqlQueryable

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntityRepository(BaseRepository[T]):
    """
    SQLAlchemy-backed implementation of the generic repository contract.
    """

    mapping: ClassVar[EntityMapping]

    def __init__(self, context: AppDbContext):
        """
        Args:
            context: Request-scoped persistence context (not owned)
        """
        self._context = context

    @property
    def entities(self) -> SqlQueryable[T]:
        return self._context.set(self.mapping)

    async def add(self, entity: T) -> T:
        candidate = self._validate(entity)
        entity_id = self.mapping.id_of(candidate)

        if await self._current_version(entity_id) is not None:
            logger.warning(f"Rejected duplicate {self.mapping.resource_type}: {entity_id}")
            raise DuplicateKeyError(
                f"{self.mapping.resource_type} {entity_id} already exists",
                resource_type=self.mapping.resource_type,
                resource_id=entity_id,
            )

        now = utc_now()
        persisted = candidate.model_copy(
            update={"version": 1, "created_at": now, "updated_at": now}
        )
        self._context.stage_add(self.mapping, persisted)

        logger.info(f"Staged new {self.mapping.resource_type}: {entity_id}")
        return persisted.model_copy()

    async def update(self, entity: T) -> None:
        candidate = self._validate(entity)
        entity_id = self.mapping.id_of(candidate)

        current = await self._require_version(entity_id)
        self._check_version(candidate, current, "update")

        persisted = candidate.model_copy(
            update={"version": current + 1, "updated_at": utc_now()}
        )
        self._context.stage_update(self.mapping, persisted, expected_version=current)
        logger.info(f"Staged update of {self.mapping.resource_type}: {entity_id}")

    async def delete(self, entity: T) -> None:
        self._check_type(entity)
        entity_id = self.mapping.id_of(entity)

        current = await self._require_version(entity_id)
        self._check_version(entity, current, "deletion")

        self._context.stage_delete(self.mapping, entity, expected_version=current)
        logger.info(f"Staged deletion of {self.mapping.resource_type}: {entity_id}")

    # -- helpers -------------------------------------------------------------

    def _check_type(self, entity: Any) -> None:
        if not isinstance(entity, self.mapping.entity_type):
            raise ValidationError(
                f"Expected {self.mapping.entity_type.__name__}, got {type(entity).__name__}",
            )

    def _check_version(self, entity: T, current: int, action: str) -> None:
        """Reject a mutation built from a read older than the current version."""
        if entity.version == current:
            return

        entity_id = self.mapping.id_of(entity)
        logger.warning(
            f"Rejected stale {action} of {self.mapping.resource_type} {entity_id}: "
            f"version {entity.version}, current {current}"
        )
        raise ConcurrencyError(
            f"{self.mapping.resource_type} {entity_id} was modified since it was read",
            resource_type=self.mapping.resource_type,
            resource_id=entity_id,
            expected_version=entity.version,
            actual_version=current,
        )

    def _validate(self, entity: T) -> T:
        self._check_type(entity)
        try:
            return self.mapping.entity_type.model_validate(entity.model_dump())
        except PydanticValidationError as e:
            errors = [
                {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]
            raise ValidationError(
                f"Invalid {self.mapping.resource_type}",
                errors=errors,
            ) from e

    async def _current_version(self, entity_id: str) -> Optional[int]:
        """
        Version the entity has as seen from this context: the staged state
        when a mutation is pending, the committed row otherwise.
        """
        staged = self._context.latest_staged(self.mapping, entity_id)
        if staged is not None:
            if staged.kind is MutationKind.DELETE:
                return None
            return staged.entity.version
        return await self._context.stored_version(self.mapping, entity_id)

    async def _require_version(self, entity_id: str) -> int:
        current = await self._current_version(entity_id)
        if current is None:
            raise NotFoundError(
                f"{self.mapping.resource_type} {entity_id} not found",
                resource_type=self.mapping.resource_type,
                resource_id=entity_id,
            )
        return current
