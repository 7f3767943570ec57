# 📄 File: appserver/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines the special error types the application server uses to say
# what went wrong (missing record, duplicate record, stale edit, broken data) in a clear way.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization for API responses. Repository and persistence
# errors are raised here and surfaced unmodified to callers.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Repositories, AppDbContext, processing service, appserver.main exception handler

from typing import Any, Dict, Optional

from fastapi import status


class AppServerException(Exception):
    """
    Base exception class for the application server.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(AppServerException):
    """
    Exception raised when an entity fails structural invariants
    before it is persisted.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        errors: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if errors:
            details["errors"] = errors

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(AppServerException):
    """
    Exception raised when a requested entity is absent.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DuplicateKeyError(AppServerException):
    """
    Exception raised when an insert collides with an existing identifier
    or another unique column.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="DUPLICATE_KEY"
        )


class ConcurrencyError(AppServerException):
    """
    Exception raised when a stale write is detected.
    The entity was modified by someone else since it was read.
    """

    def __init__(
        self,
        message: str = "Entity was modified concurrently",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        expected_version: Optional[int] = None,
        actual_version: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if expected_version is not None:
            details["expected_version"] = expected_version
        if actual_version is not None:
            details["actual_version"] = actual_version

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="CONCURRENCY_CONFLICT"
        )


class DataIntegrityError(AppServerException):
    """
    Exception raised when a stored foreign reference points to a missing entity.
    Indicates corrupted state on the server, not a bad request.
    """

    def __init__(
        self,
        message: str = "Stored data is inconsistent",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        reference_type: Optional[str] = None,
        reference_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if reference_type:
            details["reference_type"] = reference_type
        if reference_id:
            details["reference_id"] = reference_id

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATA_INTEGRITY_ERROR"
        )


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class PersistenceError(AppServerException):
    """
    Exception raised for backing-store failures that are not otherwise
    classified: connectivity loss, unexpected constraint violations, etc.
    """

    def __init__(
        self,
        message: str = "Persistence operation failed",
        operation: Optional[str] = None,
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if resource_type:
            details["resource_type"] = resource_type

        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            error_code="PERSISTENCE_ERROR"
        )


class DatabaseError(AppServerException):
    """
    Exception raised for engine and session lifecycle failures.
    """

    def __init__(
        self,
        message: str = "Database error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            error_code="DATABASE_ERROR"
        )
