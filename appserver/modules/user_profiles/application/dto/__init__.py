from .user_profile_dto import UserProfileDTO

__all__ = ["UserProfileDTO"]
