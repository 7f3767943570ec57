# 📄 File: appserver/modules/user_profiles/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how realms and user profiles are stored in the database tables,
# including which columns must be unique and how a profile points at its realm.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy table models for the user profiles module. Identifier uniqueness and the
# user_profiles.realm_id -> realms.realm_id reference are enforced by the schema;
# the version column backs optimistic concurrency checks.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM declarative models
# - appserver.shared.infrastructure.database.connection (shared Base)
#
# 🔄 Connected Modules / Calls From:
# - configurations.py (entity <-> table mappings)
# - migrations (schema generation)

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)

from appserver.shared.infrastructure.database.connection import Base


# =============================================================================
# REALM MODEL
# =============================================================================

class RealmModel(Base):
    """
    SQLAlchemy model for realms.
    """
    __tablename__ = "realms"

    realm_id = Column(
        String(64),
        primary_key=True,
        nullable=False,
        comment="Unique realm identifier"
    )
    name = Column(
        String(255),
        nullable=False,
        unique=True,
        comment="Realm name, e.g. EXAMPLE.COM"
    )
    description = Column(
        String(1000),
        nullable=True,
        comment="Free text description"
    )

    version = Column(
        Integer,
        nullable=False,
        default=1,
        comment="Optimistic concurrency token"
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<RealmModel(realm_id={self.realm_id}, name={self.name})>"


# =============================================================================
# USER PROFILE MODEL
# =============================================================================

class UserProfileModel(Base):
    """
    SQLAlchemy model for user profiles.

    Many profiles reference one realm. A username is unique within its realm.
    """
    __tablename__ = "user_profiles"
    __table_args__ = (
        UniqueConstraint("realm_id", "username", name="uq_user_profiles_realm_username"),
    )

    user_id = Column(
        String(64),
        primary_key=True,
        nullable=False,
        comment="Unique user identifier"
    )
    realm_id = Column(
        String(64),
        ForeignKey("realms.realm_id"),
        nullable=False,
        index=True,
        comment="Owning realm"
    )

    username = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    birthday = Column(Date, nullable=True)

    version = Column(
        Integer,
        nullable=False,
        default=1,
        comment="Optimistic concurrency token"
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<UserProfileModel(user_id={self.user_id}, username={self.username})>"
