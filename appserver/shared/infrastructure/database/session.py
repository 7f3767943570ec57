# 📄 File: appserver/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (like conversations with the database) ensuring each request
# gets its own clean session that is always closed when the request is done.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session factory with FastAPI dependency injection. Sessions are
# request-scoped and never shared across concurrent requests. Writes are committed
# explicitly by the AppDbContext unit of work; anything left uncommitted when the
# session closes is rolled back.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - appserver/shared/infrastructure/database/connection.py (database engine)
#
# 🔄 Connected Modules / Calls From:
# - appserver/modules/user_profiles/presentation/dependencies.py (per-request context)
# - appserver/main.py (startup)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from appserver.shared.core.exceptions import DatabaseError
from appserver.shared.infrastructure.database.connection import get_database_engine

logger = logging.getLogger(__name__)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to the given engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Keep objects accessible after commit
        autoflush=False,         # Writes are applied by the unit of work only
    )


class DatabaseSessionManager:
    """
    Manages database sessions with automatic cleanup.
    """

    def __init__(self):
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    def initialize(self, engine: Optional[AsyncEngine] = None) -> None:
        """Initialize the session factory with database engine."""
        self._session_factory = create_session_factory(engine or get_database_engine())
        logger.info("Database session factory initialized successfully")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session that is closed on exit.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If the session manager was not initialized
        """
        if self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()
        try:
            logger.debug("Database session created")
            yield session
        finally:
            await session.close()
            logger.debug("Database session closed")

    def reset(self) -> None:
        self._session_factory = None

    def is_initialized(self) -> bool:
        """Check if session manager is initialized."""
        return self._session_factory is not None


# Global session manager instance
session_manager = DatabaseSessionManager()


def initialize_sessions(engine: Optional[AsyncEngine] = None) -> None:
    """Initialize the global database session manager."""
    session_manager.initialize(engine)


# FastAPI dependency for getting database sessions
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides one database session per request.

    Usage:
        @router.get("/users/{user_id}")
        async def get_user(db: AsyncSession = Depends(get_db_session)):
            ...

    Yields:
        AsyncSession: Database session
    """
    async with session_manager.get_session() as session:
        yield session


@asynccontextmanager
async def database_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for manual database session management outside
    of FastAPI route handlers (startup seeding, scripts).

    Example:
        async with database_session() as session:
            context = AppDbContext(session)
    """
    async with session_manager.get_session() as session:
        yield session
