# 📄 File: appserver/modules/user_profiles/domain/repositories/realm_repository.py
# 🧭 Purpose (Layman Explanation):
# Names the storage contract for realms; it is the shared contract with realms plugged in
# 🧪 Purpose (Technical Summary):
# Type-narrowing specialization of BaseRepository for Realm. Adds no behaviour
# 🔄 Connected Modules / Calls From:
# RealmRepositoryImpl, presentation dependency wiring

from ..models.realm import Realm
from .base_repository import BaseRepository


class RealmRepository(BaseRepository[Realm]):
    """Repository interface for Realm entities."""
