"""
User Profiles Domain Layer

Entities (Realm, UserProfile) and the repository contracts used to persist them.
Nothing in this package depends on the infrastructure layer.
"""
