from hostelcare.services.base.base_service import BaseService, requires_role
from hostelcare.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

__all__ = [
    "BaseService",
    "requires_role",
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
]
