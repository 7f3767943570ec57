# 📄 File: appserver/modules/user_profiles/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups everything that reads and writes realms and user profiles in the database
# 🧪 Purpose (Technical Summary):
# SQLAlchemy persistence for the module: table models, schema mappings, the AppDbContext
# unit of work, the queryable implementation and repository implementations

from .app_db_context import AppDbContext, MutationKind, StagedMutation
from .configurations import REALM_MAPPING, USER_PROFILE_MAPPING, EntityMapping
from .entity_repository import EntityRepository
from .models import RealmModel, UserProfileModel
from .queryable import SqlQueryable
from .realm_repository_impl import RealmRepositoryImpl
from .seed import seed_default_data
from .user_profile_repository_impl import UserProfileRepositoryImpl

__all__ = [
    "AppDbContext",
    "EntityMapping",
    "EntityRepository",
    "MutationKind",
    "REALM_MAPPING",
    "RealmModel",
    "RealmRepositoryImpl",
    "SqlQueryable",
    "StagedMutation",
    "USER_PROFILE_MAPPING",
    "UserProfileModel",
    "UserProfileRepositoryImpl",
    "seed_default_data",
]
