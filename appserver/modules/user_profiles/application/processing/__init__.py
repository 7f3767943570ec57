from .user_profile_processing_service import (
    UserProfileProcessingService,
    UserProfileProcessingServiceImpl,
)

__all__ = ["UserProfileProcessingService", "UserProfileProcessingServiceImpl"]
