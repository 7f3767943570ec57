# 📄 File: appserver/modules/user_profiles/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the part of the server that stores realms and user profiles and answers
# "show me this user's profile"
# 🧪 Purpose (Technical Summary):
# Module package following domain-driven layering
# 🔄 Connected Modules / Calls From:
# appserver.main, appserver.api.v1.router

"""
User Profiles Module

Architecture follows Domain-Driven Design:
- Domain: Realm and UserProfile entities, generic repository contract
- Application: UserProfileDTO and the profile processing service
- Infrastructure: SQLAlchemy persistence context and repositories
- Presentation: FastAPI dependency wiring and the users endpoint
"""
