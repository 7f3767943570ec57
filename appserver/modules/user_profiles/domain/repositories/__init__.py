# 📄 File: appserver/modules/user_profiles/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the data access contracts for realms and user profiles
# 🧪 Purpose (Technical Summary):
# Package initialization for repository interfaces following the Repository pattern
# 🔄 Connected Modules / Calls From:
# Processing service, infrastructure implementations, presentation wiring

"""
User Profiles Domain Repositories

Repository Interfaces:
- BaseRepository[T]: generic CRUD contract shared by every entity kind
- RealmRepository: BaseRepository narrowed to Realm
- UserProfileRepository: BaseRepository narrowed to UserProfile
- Queryable[T]: read-only composable query returned by ``entities``

New entity kinds are onboarded by narrowing BaseRepository, never by
duplicating CRUD logic.
"""

from .base_repository import BaseRepository
from .queryable import Queryable
from .realm_repository import RealmRepository
from .user_profile_repository import UserProfileRepository

__all__ = [
    "BaseRepository",
    "Queryable",
    "RealmRepository",
    "UserProfileRepository",
]
