# 📄 File: appserver/modules/user_profiles/domain/repositories/queryable.py
# 🧭 Purpose (Layman Explanation):
# Describes a read-only "question" you can ask the database about one kind of record,
# narrowing it step by step before the database actually answers
# 🧪 Purpose (Technical Summary):
# Abstract composable query over one entity type. Builder methods return new queryables
# and push filtering, ordering and paging down to the backing store; terminal methods
# are async and return detached domain entities that cannot write back to the store
# 🔗 Dependencies:
# abc, typing
# 🔄 Connected Modules / Calls From:
# base_repository.py (entities view), infrastructure SqlQueryable, processing service

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


class Queryable(ABC, Generic[T]):
    """
    Read-only, immutable query over the committed rows of one entity kind.

    Builder methods never touch the store. Terminal methods are I/O
    boundaries and may yield to other tasks.
    """

    # -- builders ------------------------------------------------------------

    @abstractmethod
    def filter_by(self, **fields: Any) -> "Queryable[T]":
        """Keep entities whose fields equal the given values."""

    @abstractmethod
    def where(self, *criteria: Any) -> "Queryable[T]":
        """Keep entities matching backend criteria built from ``columns``."""

    @abstractmethod
    def order_by(self, *clauses: Any) -> "Queryable[T]":
        """Order results; accepts field names (prefix '-' for descending) or backend clauses."""

    @abstractmethod
    def limit(self, count: int) -> "Queryable[T]":
        pass

    @abstractmethod
    def offset(self, count: int) -> "Queryable[T]":
        pass

    @property
    @abstractmethod
    def columns(self) -> Any:
        """Backend column collection used to build ``where`` criteria."""

    # -- terminal operations -------------------------------------------------

    @abstractmethod
    async def all(self) -> List[T]:
        pass

    @abstractmethod
    async def first(self) -> Optional[T]:
        pass

    @abstractmethod
    async def one_or_none(self) -> Optional[T]:
        """Return the single match or None; more than one match is an error."""

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def exists(self) -> bool:
        pass

    @abstractmethod
    async def get(self, entity_id: str) -> Optional[T]:
        """Look up one entity by identifier within this query."""

    async def contains(self, entity_id: str) -> bool:
        return await self.get(entity_id) is not None
