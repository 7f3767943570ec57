# 📄 File: appserver/modules/user_profiles/domain/repositories/base_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the one shared set of rules for saving, finding, changing and removing any kind of record,
# so every record type is handled the same way
# 🧪 Purpose (Technical Summary):
# Generic repository contract parameterised by entity type T with the capability set
# {enumerate, add, update, delete}. Mutations are staged on the request's persistence
# context and become durable only when the context commits
# 🔗 Dependencies:
# abc, typing, queryable.Queryable
# 🔄 Connected Modules / Calls From:
# RealmRepository, UserProfileRepository, infrastructure EntityRepository,
# UserProfileProcessingServiceImpl (consumes repositories through this contract only)

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .queryable import Queryable

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """
    Repository interface shared by every entity kind.

    Implementation Notes:
    - Concrete implementations are in the infrastructure layer
    - Methods take and return domain entities, not database models
    - All store-touching operations are async
    - add/update/delete stage changes on the shared persistence context;
      the write happens when that context commits
    - Errors surface unmodified, nothing is retried
    """

    @property
    @abstractmethod
    def entities(self) -> Queryable[T]:
        """
        Read-only queryable view of the persisted entities.

        Filtering composes into the store query. Returned entities are
        detached copies; changing them does not change the store.
        """

    @abstractmethod
    async def add(self, entity: T) -> T:
        """
        Stage insertion of a new entity.

        Args:
            entity: Entity to add; an identifier is generated when absent

        Returns:
            The entity as it will be persisted, with identifier, version
            and timestamps assigned

        Raises:
            DuplicateKeyError: If the identifier already exists
            ValidationError: If required attributes are missing or invalid
        """

    @abstractmethod
    async def update(self, entity: T) -> None:
        """
        Stage replacement of the persisted state of an existing entity.

        The entity's version must equal the stored version; the write
        is rejected otherwise.

        Raises:
            NotFoundError: If no entity has this identifier
            ConcurrencyError: If the entity was modified since it was read
            ValidationError: If the entity fails validation
        """

    @abstractmethod
    async def delete(self, entity: T) -> None:
        """
        Stage removal of the entity matched by identifier.

        Deleting an entity that is already gone (or already staged for
        deletion) fails; callers that want idempotent deletes catch
        NotFoundError themselves.

        Raises:
            NotFoundError: If no entity has this identifier
        """
