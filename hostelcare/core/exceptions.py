"""
Custom Exceptions for the Hostel Upkeep Application

Every exception carries the HTTP status code it is reported with, so the
API boundary can turn any of them into the uniform error envelope.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication & Authorization
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Uniqueness / duplicate submissions
    CONFLICT = "CONFLICT"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the error envelope"""
        return {
            "statusCode": self.status_code,
            "message": self.message,
            "success": False,
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class ValidationError(BaseAppException):
    """Missing or malformed input"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details, 400)


class InvalidCredentialsError(BaseAppException):
    """Login failure. Reported as 400, not 401, for client compatibility."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, ErrorCode.INVALID_CREDENTIALS, None, 400)


class AuthenticationError(BaseAppException):
    """Missing, invalid or expired token"""

    def __init__(self, message: str = "Unauthorized request"):
        super().__init__(message, ErrorCode.AUTHENTICATION_FAILED, None, 401)


class AuthorizationError(BaseAppException):
    """Authenticated caller lacks the required role"""

    def __init__(self, message: str = "You do not have access to this resource"):
        super().__init__(message, ErrorCode.AUTHORIZATION_FAILED, None, 403)


class ResourceNotFoundError(BaseAppException):
    """
    Requested resource is absent or belongs to another hostel.

    Both cases produce the same message so existence never leaks across
    tenants.
    """

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class ConflictError(BaseAppException):
    """Uniqueness violation or duplicate submission"""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, ErrorCode.CONFLICT, None, 409)


class InternalServerError(BaseAppException):
    """Unexpected store or service failure"""

    def __init__(self, message: str = "Something went wrong"):
        super().__init__(message, ErrorCode.INTERNAL_ERROR, None, 500)


# ------------------------------------------------------------------------------
# Repository layer
# ------------------------------------------------------------------------------

class RepositoryError(BaseAppException):
    """Database operation failed"""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, ErrorCode.INTERNAL_ERROR, None, 500)


class EntityAlreadyExistsError(RepositoryError):
    """Insert rejected by a unique constraint"""

    def __init__(self, message: str = "Entity already exists"):
        super().__init__(message)
        self.error_code = ErrorCode.CONFLICT
        self.status_code = 409


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "InvalidCredentialsError",
    "AuthenticationError",
    "AuthorizationError",
    "ResourceNotFoundError",
    "ConflictError",
    "InternalServerError",
    "RepositoryError",
    "EntityAlreadyExistsError",
]
