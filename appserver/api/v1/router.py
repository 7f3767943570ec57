# 📄 File: appserver/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API, sending each request to the right handler.
# 🧪 Purpose (Technical Summary):
# API v1 router aggregation combining the health router and module routers.
# 🔗 Dependencies:
# FastAPI, appserver.api.v1.health, appserver.modules.user_profiles.presentation.api.v1
# 🔄 Connected Modules / Calls From:
# appserver.main

from fastapi import APIRouter

from appserver.modules.user_profiles.presentation.api.v1 import users_router

from .health import health_router

# Create main API v1 router
api_v1_router = APIRouter()

api_v1_router.include_router(
    health_router,
    tags=["Health Check"]
)

api_v1_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"]
)
