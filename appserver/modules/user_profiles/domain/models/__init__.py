"""
Domain models for the user profiles module.

- Realm: named administrative domain
- UserProfile: a user's profile, bound to exactly one Realm
"""

from .realm import Realm
from .user_profile import UserProfile

__all__ = ["Realm", "UserProfile"]
