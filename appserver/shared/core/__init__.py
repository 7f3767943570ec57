"""
Shared core components: the exception hierarchy used across all modules.
"""

from .exceptions import (
    AppServerException,
    ConcurrencyError,
    DataIntegrityError,
    DatabaseError,
    DuplicateKeyError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

__all__ = [
    "AppServerException",
    "ConcurrencyError",
    "DataIntegrityError",
    "DatabaseError",
    "DuplicateKeyError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
