"""
Dashboard aggregation for admins and students.

Every figure is computed inside one hostel. "Today" and "this month" follow
the hostel's local calendar; the weekly window is the trailing seven days.
"""

from collections import Counter
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import BaseAppException
from hostelcare.models.base.enums import UserRole
from hostelcare.repositories.cleaning_log_repository import CleaningLogRepository
from hostelcare.repositories.issue_repository import IssueRepository
from hostelcare.repositories.worker_repository import WorkerRepository
from hostelcare.schemas.cleaning_log import CleaningLogResponse
from hostelcare.schemas.dashboard import (
    AdminCharts,
    AdminDashboard,
    AdminStats,
    StudentDashboard,
    StudentStats,
    TaskSlice,
    TrendPoint,
    WorkerPerformance,
)
from hostelcare.schemas.issue import IssueSummary
from hostelcare.services.base import BaseService, ServiceResult, requires_role
from hostelcare.utils.datetime_utils import (
    day_bounds,
    local_date,
    start_of_month,
    trailing_window_start,
)

TOP_WORKERS = 5
RECENT_ISSUES = 5
RECENT_ACTIVITY = 3
TREND_DAYS = 7


class DashboardService(BaseService):

    @requires_role(UserRole.ADMIN)
    def admin_dashboard(self, *, caller: CallerContext) -> ServiceResult[AdminDashboard]:
        hostel = caller.hostel_name
        now = self.now()
        today_start, _ = day_bounds(now)
        week_start = trailing_window_start(now, TREND_DAYS)

        workers = WorkerRepository(self.db, hostel)
        logs = CleaningLogRepository(self.db, hostel)
        issues = IssueRepository(self.db, hostel)

        try:
            stats = AdminStats(
                total_workers=workers.count(),
                cleanings_today=logs.count_since(today_start),
                weekly_submissions=logs.count_since(week_start),
                pending_issues=issues.count_pending(),
            )
            charts = AdminCharts(
                worker_performance=[
                    WorkerPerformance(**row) for row in workers.top_by_log_count(TOP_WORKERS)
                ],
                task_distribution=[TaskSlice(**row) for row in logs.task_distribution()],
                weekly_trend=self._daily_trend(logs.created_at_since(week_start)),
            )
            recent = [IssueSummary.model_validate(i) for i in issues.recent_pending(RECENT_ISSUES)]

            return ServiceResult.success(
                AdminDashboard(
                    stats=stats,
                    charts=charts,
                    recent_issues=recent,
                    hostel_name=hostel,
                ),
                message=f"Admin Dashboard data for {hostel} fetched successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "build admin dashboard", hostel)

    @staticmethod
    def _daily_trend(timestamps) -> List[TrendPoint]:
        """Submissions per local calendar day, oldest day first."""
        per_day = Counter(local_date(ts).isoformat() for ts in timestamps)
        return [TrendPoint(date=day, count=count) for day, count in sorted(per_day.items())]

    @requires_role(UserRole.STUDENT)
    def student_dashboard(self, *, caller: CallerContext) -> ServiceResult[StudentDashboard]:
        hostel = caller.hostel_name
        room_no = caller.room_no
        now = self.now()

        logs = CleaningLogRepository(self.db, hostel)
        issues = IssueRepository(self.db, hostel)

        try:
            recent = logs.history_for_room(room_no, limit=RECENT_ACTIVITY)
            stats = StudentStats(
                last_cleaning_date=recent[0].created_at if recent else None,
                month_count=logs.count_since(start_of_month(now), room_no=room_no),
                open_issues=issues.count_pending(room_no=room_no),
            )
            return ServiceResult.success(
                StudentDashboard(
                    room_no=room_no,
                    hostel_name=hostel,
                    stats=stats,
                    recent_activity=[CleaningLogResponse.model_validate(log) for log in recent],
                ),
                message="Student dashboard data fetched successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "build student dashboard", room_no)
