# 📄 File: appserver/modules/user_profiles/application/dto/user_profile_dto.py
# 🧭 Purpose (Layman Explanation):
# Defines the read-only "profile card" sent back to callers, combining what we know about
# the user with the realm they belong to.
#
# 🧪 Purpose (Technical Summary):
# Frozen pydantic projection of a UserProfile joined with its Realm. Not persisted;
# built only from a profile and its already-resolved realm.
#
# 🔗 Dependencies:
# - pydantic for DTO validation and serialization
# - appserver.modules.user_profiles.domain.models
#
# 🔄 Connected Modules / Calls From:
# - application.processing.user_profile_processing_service (builds the DTO)
# - presentation.api.v1.users (response model)

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from appserver.modules.user_profiles.domain.models import Realm, UserProfile


class UserProfileDTO(BaseModel):
    """
    User profile view returned by the users endpoint.
    """

    model_config = ConfigDict(frozen=True)

    # User-derived fields
    user_id: str = Field(..., description="Unique user identifier", examples=["admin"])
    username: str = Field(..., description="Username within the realm", examples=["admin"])
    email: str = Field(..., description="Email address", examples=["admin@gmail.com"])
    first_name: str = Field(..., description="First name", examples=["Admin"])
    last_name: str = Field(..., description="Last name", examples=["Admin"])
    full_name: str = Field(..., description="First and last name", examples=["Admin Admin"])
    birthday: Optional[date] = Field(default=None, description="Date of birth")

    # Realm-derived fields
    realm_id: str = Field(..., description="Owning realm identifier", examples=["example-com"])
    realm_name: str = Field(..., description="Owning realm name", examples=["EXAMPLE.COM"])
    realm_description: Optional[str] = Field(default=None, description="Owning realm description")

    created_at: Optional[datetime] = Field(default=None, description="Profile creation time")
    updated_at: Optional[datetime] = Field(default=None, description="Last profile update")

    @classmethod
    def from_entities(cls, profile: UserProfile, realm: Realm) -> "UserProfileDTO":
        """
        Project a profile and its realm into a DTO.

        Raises:
            ValueError: If the realm is not the one the profile references
        """
        if profile.realm_id != realm.realm_id:
            raise ValueError(
                f"Realm {realm.realm_id} does not belong to user profile {profile.user_id}"
            )

        return cls(
            user_id=profile.user_id,
            username=profile.username,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            full_name=profile.full_name,
            birthday=profile.birthday,
            realm_id=realm.realm_id,
            realm_name=realm.name,
            realm_description=realm.description,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
