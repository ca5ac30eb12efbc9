"""
Base service class providing common functionality for all services.
"""

from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaseAppException,
    ConflictError,
    EntityAlreadyExistsError,
    InvalidCredentialsError,
    ResourceNotFoundError,
    ValidationError,
)
from hostelcare.core.logging import get_logger, user_id as user_id_ctx
from hostelcare.models.base.enums import UserRole
from hostelcare.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)
from hostelcare.utils.datetime_utils import Clock, as_utc, utc_now


def requires_role(*roles: UserRole) -> Callable:
    """
    Restrict a service method to callers holding one of ``roles``.

    The decorated method must receive the caller as ``caller`` (keyword or
    positional ``CallerContext``). A missing caller fails as unauthenticated,
    a wrong role as forbidden. The caller id is bound to the logging context
    while the method runs.
    """

    def decorator(func: Callable) -> Callable:
        action = func.__name__.replace("_", " ")

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            caller = kwargs.get("caller")
            if caller is None:
                caller = next((a for a in args if isinstance(a, CallerContext)), None)
            if caller is None:
                return ServiceResult.unauthenticated()
            if caller.role not in roles:
                self._logger.warning(
                    f"Role {caller.role.value} denied for {action}",
                    extra={"user_id": caller.id, "hostel_name": caller.hostel_name},
                )
                return ServiceResult.forbidden(action)

            token = user_id_ctx.set(caller.id)
            try:
                return func(self, *args, **kwargs)
            finally:
                user_id_ctx.reset(token)

        return wrapper

    return decorator


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger, db session and clock
    - Consistent error handling via ServiceResult
    - Transaction management utilities
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
            clock: Callable returning the current time; defaults to UTC now
        """
        self.db: Session = db_session
        self.clock: Clock = clock or utc_now
        self._logger = get_logger(self.__class__.__name__)

    def now(self) -> datetime:
        return as_utc(self.clock())

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Domain exceptions keep their meaning; store and driver failures
        collapse to an internal error whose message carries no internals.
        """
        context: Dict[str, Any] = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }

        error_code = self._map_exception_to_error_code(exception)

        if error_code == ErrorCode.INTERNAL_ERROR:
            self._logger.error(
                f"Error during {operation}: {exception}",
                exc_info=True,
                extra=context,
            )
            message = f"Failed to {operation}"
        else:
            self._logger.warning(f"{operation} rejected: {exception}", extra=context)
            message = getattr(exception, "message", str(exception))
            severity = ErrorSeverity.WARNING

        details = getattr(exception, "details", None) if isinstance(exception, BaseAppException) else None
        return ServiceResult.failure(
            ServiceError(
                code=error_code,
                message=message,
                details=details or None,
                severity=severity,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        """
        Map exception types to appropriate error codes.
        """
        exception_mapping = (
            (EntityAlreadyExistsError, ErrorCode.CONFLICT),
            (ConflictError, ErrorCode.CONFLICT),
            (ValidationError, ErrorCode.VALIDATION_ERROR),
            (ResourceNotFoundError, ErrorCode.NOT_FOUND),
            (InvalidCredentialsError, ErrorCode.INVALID_CREDENTIALS),
            (AuthenticationError, ErrorCode.UNAUTHORIZED),
            (AuthorizationError, ErrorCode.INSUFFICIENT_PERMISSIONS),
            (SQLAlchemyError, ErrorCode.INTERNAL_ERROR),
        )

        for exc_type, error_code in exception_mapping:
            if isinstance(exception, exc_type):
                return error_code

        return ErrorCode.INTERNAL_ERROR

