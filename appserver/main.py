# 📄 File: appserver/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the application server, connects all the parts together,
# and makes sure everything is ready before requests are handled.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: logging setup, database engine and
# session initialization, optional schema bootstrap and seeding, middleware,
# router registration and the application exception handler.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - appserver.shared.config.settings
# - appserver.shared.infrastructure.database
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - tests (create_application)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from appserver.api.middleware.logging import RequestLoggingMiddleware
from appserver.api.v1.router import api_v1_router
from appserver.modules.user_profiles.infrastructure.database import (
    AppDbContext,
    seed_default_data,
)
from appserver.shared.config.settings import Settings, get_settings
from appserver.shared.core.exceptions import AppServerException
from appserver.shared.infrastructure.database.connection import (
    close_database,
    db_manager,
    init_database,
)
from appserver.shared.infrastructure.database.session import (
    database_session,
    initialize_sessions,
    session_manager,
)
from appserver.shared.utils.logging import get_request_id, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown: database engine, session factory,
    optional schema creation and seed data.
    """
    settings: Settings = app.state.settings
    logger.info(f"{settings.APP_NAME} starting up...")

    await init_database()
    initialize_sessions(db_manager.engine)
    logger.info("Database connection and session manager initialized")

    try:
        if settings.DB_CREATE_SCHEMA:
            await db_manager.create_schema()

        if settings.DB_SEED_DATA:
            async with database_session() as session:
                context = AppDbContext(session)
                try:
                    await seed_default_data(context)
                finally:
                    await context.close()

        logger.info(f"{settings.APP_NAME} startup complete")
        yield

    finally:
        logger.info(f"{settings.APP_NAME} shutting down...")
        session_manager.reset()
        await close_database()
        logger.info(f"{settings.APP_NAME} shutdown complete")


async def app_server_exception_handler(
    request: Request,
    exc: AppServerException
) -> JSONResponse:
    """Map application exceptions to JSON error responses."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

    content = exc.to_dict()
    request_id = get_request_id()
    if request_id:
        content["error"]["request_id"] = request_id

    return JSONResponse(status_code=exc.status_code, content=content)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Creates and configures the FastAPI application with middleware,
    routers and exception handlers.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.settings = settings

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_v1_router, prefix="/api/v1")

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    app.add_exception_handler(AppServerException, app_server_exception_handler)

    return app


app = create_application()


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        "appserver.main:app",
        host=_settings.HOST,
        port=_settings.PORT,
        reload=_settings.is_development,
        log_config=None,
    )
