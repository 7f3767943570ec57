# 📄 File: appserver/modules/user_profiles/application/processing/user_profile_processing_service.py
# 🧭 Purpose (Layman Explanation):
# Looks up a user's profile, finds the realm that user belongs to, and combines
# the two into the profile card returned to the caller.
#
# 🧪 Purpose (Technical Summary):
# Application-level orchestrator composing the user profile and realm repositories
# through the generic BaseRepository contract. Single-shot read composition; the
# only error it adds is DataIntegrityError for a profile whose realm is missing.
#
# 🔗 Dependencies:
# - appserver.modules.user_profiles.domain.repositories (BaseRepository contract)
# - appserver.modules.user_profiles.application.dto (UserProfileDTO)
# - appserver.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - presentation.api.v1.users (GET /users/{user_id})
# - presentation.dependencies (request wiring)

"""
User Profile Processing Service

get_user_profile(user_id):
1. Find the UserProfile through the profile repository's queryable view
   (NotFoundError when absent)
2. Resolve its Realm through the realm repository's queryable view using
   the profile's realm_id (DataIntegrityError when the reference dangles)
3. Project both into a UserProfileDTO

Repository errors are not caught or reinterpreted.
"""

import logging
from abc import ABC, abstractmethod

from appserver.modules.user_profiles.application.dto.user_profile_dto import UserProfileDTO
from appserver.modules.user_profiles.domain.models import Realm, UserProfile
from appserver.modules.user_profiles.domain.repositories.base_repository import BaseRepository
from appserver.shared.core.exceptions import DataIntegrityError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UserProfileProcessingService(ABC):
    """Contract for building user profile views."""

    @abstractmethod
    async def get_user_profile(self, user_id: str) -> UserProfileDTO:
        """
        Build the profile view of one user.

        Raises:
            NotFoundError: If no user profile has this identifier
            DataIntegrityError: If the profile references a missing realm
            ValidationError: If user_id is blank
        """


class UserProfileProcessingServiceImpl(UserProfileProcessingService):
    """
    Composes the user profile and realm repositories to build UserProfileDTOs.
    """

    def __init__(
        self,
        user_profile_repository: BaseRepository[UserProfile],
        realm_repository: BaseRepository[Realm],
    ):
        """
        Args:
            user_profile_repository: Repository for user profiles (not owned)
            realm_repository: Repository for realms (not owned)
        """
        self._user_profile_repository = user_profile_repository
        self._realm_repository = realm_repository

    async def get_user_profile(self, user_id: str) -> UserProfileDTO:
        if not user_id or not user_id.strip():
            raise ValidationError("user_id must not be blank", field="user_id")

        logger.debug(f"Building user profile view for {user_id}")

        profile = await self._user_profile_repository.entities.filter_by(user_id=user_id).one_or_none()
        if profile is None:
            logger.info(f"User profile not found: {user_id}")
            raise NotFoundError(
                f"User profile {user_id} not found",
                resource_type="user_profile",
                resource_id=user_id,
            )

        realm = await self._realm_repository.entities.filter_by(realm_id=profile.realm_id).one_or_none()
        if realm is None:
            logger.error(
                f"User profile {user_id} references missing realm {profile.realm_id}"
            )
            raise DataIntegrityError(
                f"User profile {user_id} references a realm that does not exist",
                resource_type="user_profile",
                resource_id=user_id,
                reference_type="realm",
                reference_id=profile.realm_id,
            )

        return UserProfileDTO.from_entities(profile, realm)
