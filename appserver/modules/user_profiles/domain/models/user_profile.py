# 📄 File: appserver/modules/user_profiles/domain/models/user_profile.py
# 🧭 Purpose (Layman Explanation):
# Defines a user's profile (username, email, names, birthday) and which realm the user belongs to
# 🧪 Purpose (Technical Summary):
# Domain model for the UserProfile entity. Each profile references exactly one Realm
# through realm_id; many profiles may share a realm
# 🔗 Dependencies:
# pydantic, datetime, uuid
# 🔄 Connected Modules / Calls From:
# user_profile_repository.py, schema mappings, user profile processing service, seed data

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def generate_user_id() -> str:
    return uuid.uuid4().hex


class UserProfile(BaseModel):
    """
    UserProfile domain model.

    Fields mirror the user profile table of the application server:
    - user_id: unique identifier, immutable once assigned
    - realm_id: reference to the owning Realm
    - username, email, first_name, last_name: required profile fields
    - birthday: optional date of birth
    - version: concurrency token, 0 until the profile is first persisted
    - created_at / updated_at: assigned by the repository
    """

    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    user_id: str = Field(default_factory=generate_user_id, min_length=1, max_length=64)
    realm_id: str = Field(..., min_length=1, max_length=64)

    username: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    birthday: Optional[date] = None

    version: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Minimal structural check, full verification is not this model's concern"""
        local, sep, domain = v.partition("@")
        if not sep or not local or not domain:
            raise ValueError("email must look like local@domain")
        return v.lower()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return f"UserProfile({self.user_id}, {self.username}@{self.realm_id})"
