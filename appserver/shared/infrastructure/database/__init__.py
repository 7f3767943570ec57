"""
Database infrastructure: async engine, declarative base and session management.
"""

from .connection import (
    Base,
    DatabaseConnectionManager,
    close_database,
    create_database_engine,
    database_health_check,
    db_manager,
    get_database_engine,
    init_database,
)
from .session import (
    DatabaseSessionManager,
    create_session_factory,
    database_session,
    get_db_session,
    initialize_sessions,
    session_manager,
)

__all__ = [
    "Base",
    "DatabaseConnectionManager",
    "DatabaseSessionManager",
    "close_database",
    "create_database_engine",
    "create_session_factory",
    "database_health_check",
    "database_session",
    "db_manager",
    "get_database_engine",
    "get_db_session",
    "init_database",
    "initialize_sessions",
    "session_manager",
]
