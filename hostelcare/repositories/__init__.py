from hostelcare.repositories.base import BaseRepository, TenantRepository
from hostelcare.repositories.cleaning_log_repository import CleaningLogRepository
from hostelcare.repositories.issue_repository import IssueRepository
from hostelcare.repositories.user_repository import UserRepository
from hostelcare.repositories.worker_repository import WorkerRepository

__all__ = [
    "BaseRepository",
    "TenantRepository",
    "UserRepository",
    "WorkerRepository",
    "CleaningLogRepository",
    "IssueRepository",
]
