from hostelcare.models.base import Base, BaseModel
from hostelcare.models.cleaning_log import CleaningLog, CleaningLogTask
from hostelcare.models.issue import Issue
from hostelcare.models.user import User
from hostelcare.models.worker import Worker

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Worker",
    "CleaningLog",
    "CleaningLogTask",
    "Issue",
]
