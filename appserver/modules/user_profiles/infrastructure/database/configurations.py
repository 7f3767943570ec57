# 📄 File: appserver/modules/user_profiles/infrastructure/database/configurations.py
# 🧭 Purpose (Layman Explanation):
# Describes, for each kind of record, which database table holds it and which column
# is its identity, so one piece of storage code can serve every record type.
#
# 🧪 Purpose (Technical Summary):
# Entity <-> table schema mappings. An EntityMapping converts domain entities to row
# dictionaries and back, and names the identifier and version columns used for
# lookups and optimistic concurrency.
#
# 🔗 Dependencies:
# - SQLAlchemy Table metadata
# - pydantic domain models
#
# 🔄 Connected Modules / Calls From:
# - app_db_context.py, queryable.py, entity_repository.py

from dataclasses import dataclass
from typing import Any, Dict, Generic, Mapping, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import Column, Table

from appserver.modules.user_profiles.domain.models import Realm, UserProfile

from .models import RealmModel, UserProfileModel

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class EntityMapping(Generic[T]):
    """
    Maps one domain entity type onto one table.

    Domain field names equal column names; only columns present on the
    table are written.
    """

    entity_type: Type[T]
    model: Type[Any]
    id_field: str
    resource_type: str
    version_field: str = "version"

    @property
    def table(self) -> Table:
        return self.model.__table__

    @property
    def id_column(self) -> Column:
        return self.table.c[self.id_field]

    @property
    def version_column(self) -> Column:
        return self.table.c[self.version_field]

    def id_of(self, entity: T) -> str:
        return getattr(entity, self.id_field)

    def to_row(self, entity: T) -> Dict[str, Any]:
        values = entity.model_dump()
        return {column.name: values[column.name] for column in self.table.columns}

    def to_entity(self, row: Mapping[str, Any]) -> T:
        return self.entity_type.model_validate(dict(row))


REALM_MAPPING: EntityMapping[Realm] = EntityMapping(
    entity_type=Realm,
    model=RealmModel,
    id_field="realm_id",
    resource_type="realm",
)

USER_PROFILE_MAPPING: EntityMapping[UserProfile] = EntityMapping(
    entity_type=UserProfile,
    model=UserProfileModel,
    id_field="user_id",
    resource_type="user_profile",
)
