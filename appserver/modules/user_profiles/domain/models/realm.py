# 📄 File: appserver/modules/user_profiles/domain/models/realm.py
# 🧭 Purpose (Layman Explanation):
# Defines a Realm, the named administrative domain (like EXAMPLE.COM) that every user profile belongs to
# 🧪 Purpose (Technical Summary):
# Domain model for the Realm entity with a stable identifier, validated name fields,
# an optimistic-concurrency version and store-assigned timestamps
# 🔗 Dependencies:
# pydantic, datetime, uuid
# 🔄 Connected Modules / Calls From:
# realm_repository.py, schema mappings, user profile processing service, seed data

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def generate_realm_id() -> str:
    return uuid.uuid4().hex


class Realm(BaseModel):
    """
    Realm domain model.

    - realm_id: unique identifier, immutable once assigned
    - name: realm name, unique across the store (e.g. EXAMPLE.COM)
    - description: optional free text
    - version: concurrency token, 0 until the realm is first persisted
    - created_at / updated_at: assigned by the repository
    """

    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    realm_id: str = Field(default_factory=generate_realm_id, min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)

    version: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"Realm({self.realm_id}, {self.name})"
