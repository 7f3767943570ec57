# 📄 File: appserver/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Simple "are you alive?" and "can you reach the database?" addresses used by monitoring.
# 🧪 Purpose (Technical Summary):
# Liveness and database readiness endpoints. The database probe runs SELECT 1 through
# the global engine and returns 503 when it fails.
# 🔗 Dependencies:
# FastAPI, appserver.shared.infrastructure.database.connection
# 🔄 Connected Modules / Calls From:
# appserver.api.v1.router

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from appserver.shared.config.settings import get_settings
from appserver.shared.infrastructure.database.connection import database_health_check

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/health",
                   summary="Basic Health Check",
                   description="Liveness check for load balancers and monitoring")
async def health_check() -> JSONResponse:
    """Return OK status without touching any dependency."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "appserver",
            "version": get_settings().APP_VERSION
        }
    )


@health_router.get("/health/database",
                   summary="Database Health Check",
                   description="Check connectivity to the backing store")
async def database_health() -> JSONResponse:
    """Run the database probe and report its status."""
    result = await database_health_check()
    if result["status"] != "healthy":
        logger.warning(f"Database health check failed: {result.get('error')}")
    return JSONResponse(
        status_code=200 if result["status"] == "healthy" else 503,
        content={"component": "database", **result}
    )
