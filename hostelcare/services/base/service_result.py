"""
Service result patterns for standardized response handling.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from hostelcare.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaseAppException,
    ConflictError,
    InternalServerError,
    InvalidCredentialsError,
    ResourceNotFoundError,
    ValidationError,
)


class ErrorCode(str, Enum):
    """Standard error codes for service operations."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Security errors
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """Represents a service operation error with context."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)

    def to_exception(self) -> BaseAppException:
        """Application exception carrying this error's HTTP status."""
        details = self.details or {}
        if self.code == ErrorCode.VALIDATION_ERROR:
            return ValidationError(self.message, details.get("field_errors"))
        if self.code == ErrorCode.NOT_FOUND:
            return ResourceNotFoundError(
                details.get("resource_type", "Resource"),
                details.get("resource_id"),
                message=self.message,
            )
        if self.code == ErrorCode.CONFLICT:
            return ConflictError(self.message)
        if self.code == ErrorCode.INVALID_CREDENTIALS:
            return InvalidCredentialsError(self.message)
        if self.code == ErrorCode.UNAUTHORIZED:
            return AuthenticationError(self.message)
        if self.code == ErrorCode.INSUFFICIENT_PERMISSIONS:
            return AuthorizationError(self.message)
        return InternalServerError(self.message)


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Standardized service operation result with success/failure pattern.

    Attributes:
        is_success: Operation success indicator
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
    ) -> "ServiceResult[TData]":
        """Create a successful result."""
        return cls(is_success=True, data=data, message=message)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        """Create a failed result."""
        return cls(is_success=False, error=error, message=error.message)

    @classmethod
    def validation_failure(
        cls,
        message: str,
        field_errors: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return cls.failure(
            ServiceError(
                code=ErrorCode.VALIDATION_ERROR,
                message=message,
                severity=ErrorSeverity.WARNING,
                details={"field_errors": field_errors} if field_errors else None,
            )
        )

    @classmethod
    def not_found(
        cls,
        resource_type: str,
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> "ServiceResult[TData]":
        """
        Not found failure.

        The message never includes the id, so a record in another hostel is
        reported exactly like a missing one.
        """
        return cls.failure(
            ServiceError(
                code=ErrorCode.NOT_FOUND,
                message=message or f"{resource_type} not found",
                severity=ErrorSeverity.WARNING,
                details={"resource_type": resource_type, "resource_id": resource_id},
            )
        )

    @classmethod
    def conflict(cls, message: str) -> "ServiceResult[TData]":
        return cls.failure(
            ServiceError(code=ErrorCode.CONFLICT, message=message, severity=ErrorSeverity.WARNING)
        )

    @classmethod
    def invalid_credentials(cls, message: str = "Invalid credentials") -> "ServiceResult[TData]":
        return cls.failure(
            ServiceError(
                code=ErrorCode.INVALID_CREDENTIALS,
                message=message,
                severity=ErrorSeverity.WARNING,
            )
        )

    @classmethod
    def unauthenticated(cls, message: str = "Unauthorized request") -> "ServiceResult[TData]":
        return cls.failure(
            ServiceError(code=ErrorCode.UNAUTHORIZED, message=message, severity=ErrorSeverity.WARNING)
        )

    @classmethod
    def forbidden(cls, action: Optional[str] = None) -> "ServiceResult[TData]":
        message = "You do not have access to this resource"
        if action:
            message = f"You are not allowed to {action}"
        return cls.failure(
            ServiceError(
                code=ErrorCode.INSUFFICIENT_PERMISSIONS,
                message=message,
                severity=ErrorSeverity.WARNING,
                details={"action": action},
            )
        )

    @classmethod
    def internal(cls, message: str = "Something went wrong") -> "ServiceResult[TData]":
        return cls.failure(
            ServiceError(code=ErrorCode.INTERNAL_ERROR, message=message, severity=ErrorSeverity.CRITICAL)
        )

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    def raise_for_error(self) -> "ServiceResult[TData]":
        """Raise the matching application exception if this result failed."""
        if not self.is_success:
            raise self.error.to_exception()
        return self

    def unwrap(self) -> TData:
        """Return ``data`` or raise the failure as an application exception."""
        self.raise_for_error()
        return self.data


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
