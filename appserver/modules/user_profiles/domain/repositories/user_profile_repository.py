# 📄 File: appserver/modules/user_profiles/domain/repositories/user_profile_repository.py
# 🧭 Purpose (Layman Explanation):
# Names the storage contract for user profiles; it is the shared contract with profiles plugged in
# 🧪 Purpose (Technical Summary):
# Type-narrowing specialization of BaseRepository for UserProfile. Adds no behaviour
# 🔄 Connected Modules / Calls From:
# UserProfileRepositoryImpl, presentation dependency wiring

from ..models.user_profile import UserProfile
from .base_repository import BaseRepository


class UserProfileRepository(BaseRepository[UserProfile]):
    """Repository interface for UserProfile entities."""
