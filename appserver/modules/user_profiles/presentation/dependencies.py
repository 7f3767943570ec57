# 📄 File: appserver/modules/user_profiles/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Wires the pieces together for every request: one database conversation, the realm and
# profile storage built on it, and the profile service that uses both.
#
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers composing session -> AppDbContext -> repositories ->
# processing service. FastAPI caches dependencies per request, so both repositories
# share the same request-scoped context.
#
# 🔗 Dependencies:
# - FastAPI Depends
# - appserver.shared.infrastructure.database.session (get_db_session)
# - infrastructure.database (AppDbContext, repository implementations)
#
# 🔄 Connected Modules / Calls From:
# - presentation.api.v1.users
# - tests (dependency_overrides)

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from appserver.modules.user_profiles.application.processing import (
    UserProfileProcessingService,
    UserProfileProcessingServiceImpl,
)
from appserver.modules.user_profiles.domain.repositories import (
    RealmRepository,
    UserProfileRepository,
)
from appserver.modules.user_profiles.infrastructure.database import (
    AppDbContext,
    RealmRepositoryImpl,
    UserProfileRepositoryImpl,
)
from appserver.shared.infrastructure.database.session import get_db_session


async def get_app_db_context(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AppDbContext, None]:
    """
    Provide the request's persistence context.

    The context is closed when the request ends, dropping staged changes
    that were never committed.
    """
    context = AppDbContext(session)
    try:
        yield context
    finally:
        await context.close()


def get_user_profile_repository(
    context: AppDbContext = Depends(get_app_db_context),
) -> UserProfileRepository:
    return UserProfileRepositoryImpl(context)


def get_realm_repository(
    context: AppDbContext = Depends(get_app_db_context),
) -> RealmRepository:
    return RealmRepositoryImpl(context)


def get_user_profile_processing_service(
    user_profile_repository: UserProfileRepository = Depends(get_user_profile_repository),
    realm_repository: RealmRepository = Depends(get_realm_repository),
) -> UserProfileProcessingService:
    return UserProfileProcessingServiceImpl(
        user_profile_repository=user_profile_repository,
        realm_repository=realm_repository,
    )
