from hostelcare.services.auth import AuthService
from hostelcare.services.cleaning_log_service import CleaningLogService
from hostelcare.services.dashboard_service import DashboardService
from hostelcare.services.issue_service import IssueService
from hostelcare.services.room_service import RoomService
from hostelcare.services.worker_service import WorkerService

__all__ = [
    "AuthService",
    "RoomService",
    "WorkerService",
    "CleaningLogService",
    "IssueService",
    "DashboardService",
]
