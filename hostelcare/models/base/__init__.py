from hostelcare.models.base.base_model import Base, BaseModel
from hostelcare.models.base.enums import CleaningStatus, IssueStatus, UserRole, WorkerStatus
from hostelcare.models.base.mixins import TenantMixin, TimestampMixin

__all__ = [
    "Base",
    "BaseModel",
    "TenantMixin",
    "TimestampMixin",
    "UserRole",
    "WorkerStatus",
    "CleaningStatus",
    "IssueStatus",
]
