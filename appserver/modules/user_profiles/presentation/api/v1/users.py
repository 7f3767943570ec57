# 📄 File: appserver/modules/user_profiles/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# The web address a client calls to read a user's profile.
#
# 🧪 Purpose (Technical Summary):
# FastAPI users router. Delegates to UserProfileProcessingService and returns the DTO;
# failures are raised as application exceptions and mapped to responses by the
# application-level exception handler.
#
# 🔗 Dependencies:
# - FastAPI router, Depends
# - presentation.dependencies (processing service provider)
#
# 🔄 Connected Modules / Calls From:
# - appserver.api.v1.router (router inclusion)

import logging

from fastapi import APIRouter, Depends, Path

from appserver.modules.user_profiles.application.dto import UserProfileDTO
from appserver.modules.user_profiles.application.processing import UserProfileProcessingService
from appserver.modules.user_profiles.presentation.dependencies import (
    get_user_profile_processing_service,
)

logger = logging.getLogger(__name__)

users_router = APIRouter()


@users_router.get(
    "/{user_id}",
    response_model=UserProfileDTO,
    summary="Get user profile",
    description="Get a user's profile together with the realm the user belongs to",
    responses={
        200: {"description": "User profile"},
        404: {"description": "User profile not found"},
        500: {"description": "Stored profile references a missing realm"},
    },
)
async def get_user_profile(
    user_id: str = Path(..., min_length=1, max_length=64, description="User identifier"),
    processing_service: UserProfileProcessingService = Depends(get_user_profile_processing_service),
) -> UserProfileDTO:
    """
    Get a user's profile.

    Args:
        user_id: Identifier of the user profile
        processing_service: Injected user profile processing service

    Returns:
        UserProfileDTO: Profile joined with its realm
    """
    logger.debug(f"GET user profile {user_id}")
    return await processing_service.get_user_profile(user_id)
