# 📄 File: appserver/modules/user_profiles/infrastructure/database/user_profile_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores and finds user profiles by plugging the user profile table into the shared storage code
# 🧪 Purpose (Technical Summary):
# UserProfileRepository implementation: binds USER_PROFILE_MAPPING to EntityRepository, no extra behaviour
# 🔄 Connected Modules / Calls From:
# presentation/dependencies.py (request wiring), seed.py

from appserver.modules.user_profiles.domain.models import UserProfile
from appserver.modules.user_profiles.domain.repositories.user_profile_repository import (
    UserProfileRepository,
)

from .configurations import USER_PROFILE_MAPPING
from .entity_repository import EntityRepository


class UserProfileRepositoryImpl(EntityRepository[UserProfile], UserProfileRepository):
    mapping = USER_PROFILE_MAPPING
