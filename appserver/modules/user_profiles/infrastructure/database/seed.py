# 📄 File: appserver/modules/user_profiles/infrastructure/database/seed.py
# 🧭 Purpose (Layman Explanation):
# Fills an empty database with a starter realm and two starter accounts (admin and user)
# so a fresh server has something to answer with.
#
# 🧪 Purpose (Technical Summary):
# Idempotent bootstrap data written through the repositories and committed as one
# unit of work. Entries that already exist are left untouched.
#
# 🔄 Connected Modules / Calls From:
# - appserver.main (startup when DB_SEED_DATA is enabled)

import logging
from datetime import date

from appserver.modules.user_profiles.domain.models import Realm, UserProfile

from .app_db_context import AppDbContext
from .realm_repository_impl import RealmRepositoryImpl
from .user_profile_repository_impl import UserProfileRepositoryImpl

logger = logging.getLogger(__name__)

DEFAULT_REALM = Realm(
    realm_id="example-com",
    name="EXAMPLE.COM",
    description="Default realm",
)

DEFAULT_USER_PROFILES = (
    UserProfile(
        user_id="admin",
        realm_id=DEFAULT_REALM.realm_id,
        username="admin",
        email="admin@gmail.com",
        first_name="Admin",
        last_name="Admin",
        birthday=date(1990, 1, 1),
    ),
    UserProfile(
        user_id="user",
        realm_id=DEFAULT_REALM.realm_id,
        username="user",
        email="user@gmail.com",
        first_name="User",
        last_name="User",
        birthday=date(1990, 1, 2),
    ),
)


async def seed_default_data(context: AppDbContext) -> int:
    """
    Insert the default realm and profiles when missing.

    Returns:
        Number of rows inserted
    """
    realms = RealmRepositoryImpl(context)
    user_profiles = UserProfileRepositoryImpl(context)

    if not await realms.entities.contains(DEFAULT_REALM.realm_id):
        await realms.add(DEFAULT_REALM)

    for profile in DEFAULT_USER_PROFILES:
        if not await user_profiles.entities.contains(profile.user_id):
            await user_profiles.add(profile)

    inserted = await context.commit()
    logger.info(f"Seed data applied, {inserted} row(s) inserted")
    return inserted
