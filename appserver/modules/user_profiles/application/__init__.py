"""
User Profiles Application Layer

- dto: UserProfileDTO read projection
- processing: UserProfileProcessingService, the cross-repository use case
"""
