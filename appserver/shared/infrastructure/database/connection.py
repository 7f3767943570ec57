# 📄 File: appserver/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to our database, making sure we can talk to our data storage
# and share a pool of connections between requests without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine management with connection pooling, health checks and
# retry on the startup probe. Owns the declarative Base shared by all table models.
# The engine's pool is the only resource shared across request-scoped contexts.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine)
# - appserver/shared/config/settings.py (database configuration)
# - asyncpg / aiosqlite (async drivers)
#
# 🔄 Connected Modules / Calls From:
# - appserver/shared/infrastructure/database/session.py (session factory)
# - appserver/api/v1/health.py (database health endpoint)
# - appserver/main.py (startup and shutdown)

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from appserver.shared.config.settings import Settings, get_settings
from appserver.shared.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

# Constraint naming keeps Alembic revisions deterministic
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for every table model in the application."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def build_engine_kwargs(settings: Settings) -> Dict[str, Any]:
    """Build SQLAlchemy engine parameters for the configured backend."""
    engine_kwargs: Dict[str, Any] = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,  # Validate connections before use
    }

    if settings.is_sqlite:
        return engine_kwargs

    engine_kwargs.update({
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "connect_args": {
            "server_settings": {
                "application_name": f"appserver_{settings.ENVIRONMENT}",
                "jit": "off",
            },
            "command_timeout": 60,
        },
    })
    return engine_kwargs


def create_database_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create an async engine from settings without registering it globally."""
    settings = settings or get_settings()
    return create_async_engine(settings.database_url, **build_engine_kwargs(settings))


class DatabaseConnectionManager:
    """
    Manages database connections with connection pooling,
    health monitoring, and retry on the health probe.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")
        self._retry_attempts = 3
        self._retry_delay = 1.0

    async def initialize(self, engine: Optional[AsyncEngine] = None) -> None:
        """Initialize database engine with connection pooling."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        try:
            logger.info("Initializing database connection pool...")
            self._engine = engine or create_database_engine(self._settings)

            health = await self.health_check()
            if health["status"] != "healthy":
                raise DatabaseError(health["error"])

            logger.info("Database connection pool initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            if self._engine is not None:
                await self._engine.dispose()
                self._engine = None
            raise

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            logger.error("Database engine not initialized")
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        for attempt in range(self._retry_attempts):
            try:
                async with self._engine.connect() as conn:
                    result = await conn.execute(self._health_check_query)
                    result.scalar()

                logger.debug("Database health check passed")
                return {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }

            except Exception as e:
                logger.warning(
                    f"Database health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        logger.error("Database health check failed after all retry attempts")
        return {
            "status": "unhealthy",
            "error": "Database health check failed after all retry attempts",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    async def create_schema(self) -> None:
        """Create all registered tables that do not exist yet."""
        if self._engine is None:
            raise DatabaseError("Database engine not initialized")

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema created")

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        logger.info("Database connection pool closed successfully")

    @property
    def engine(self) -> Optional[AsyncEngine]:
        """Get the SQLAlchemy async engine."""
        return self._engine

    @property
    def is_initialized(self) -> bool:
        """Check if database engine is initialized."""
        return self._engine is not None


# Global database connection manager instance
db_manager = DatabaseConnectionManager()


async def init_database() -> None:
    """Initialize the global database connection manager."""
    try:
        logger.info("Starting database initialization...")
        await db_manager.initialize()
        logger.info("Database initialization completed successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}", exc_info=True)
        raise


async def close_database() -> None:
    """Close the global database connection manager."""
    await db_manager.close()


def get_database_engine() -> AsyncEngine:
    """
    Get the database engine instance.

    Raises:
        DatabaseError: If database is not initialized
    """
    if not db_manager.is_initialized:
        raise DatabaseError("Database not initialized. Call init_database() first.")

    return db_manager.engine


async def database_health_check() -> Dict[str, Any]:
    """Perform database health check on the global engine."""
    return await db_manager.health_check()
