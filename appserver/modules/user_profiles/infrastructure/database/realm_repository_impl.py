# 📄 File: appserver/modules/user_profiles/infrastructure/database/realm_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores and finds realms by plugging the realm table into the shared storage code
# 🧪 Purpose (Technical Summary):
# RealmRepository implementation: binds REALM_MAPPING to EntityRepository, no extra behaviour
# 🔄 Connected Modules / Calls From:
# presentation/dependencies.py (request wiring), seed.py

from appserver.modules.user_profiles.domain.models import Realm
from appserver.modules.user_profiles.domain.repositories.realm_repository import RealmRepository

from .configurations import REALM_MAPPING
from .entity_repository import EntityRepository


class RealmRepositoryImpl(EntityRepository[Realm], RealmRepository):
    mapping = REALM_MAPPING
