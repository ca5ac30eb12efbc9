"""
Dashboard aggregate schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_serializer

from hostelcare.schemas.cleaning_log import CleaningLogResponse
from hostelcare.schemas.common.base import BaseSchema
from hostelcare.schemas.issue import IssueSummary
from hostelcare.utils.datetime_utils import as_utc


class AdminStats(BaseSchema):
    total_workers: int = Field(..., alias="totalWorkers")
    cleanings_today: int = Field(..., alias="cleaningsToday")
    weekly_submissions: int = Field(..., alias="weeklySubmissions")
    pending_issues: int = Field(..., alias="pendingIssues")


class WorkerPerformance(BaseSchema):
    name: str
    count: int


class TaskSlice(BaseSchema):
    name: str
    value: int


class TrendPoint(BaseSchema):
    date: str = Field(..., description="Local calendar day, YYYY-MM-DD")
    count: int


class AdminCharts(BaseSchema):
    worker_performance: List[WorkerPerformance] = Field(default_factory=list, alias="workerPerformance")
    task_distribution: List[TaskSlice] = Field(default_factory=list, alias="taskDistribution")
    weekly_trend: List[TrendPoint] = Field(default_factory=list, alias="weeklyTrend")


class AdminDashboard(BaseSchema):
    stats: AdminStats
    charts: AdminCharts
    recent_issues: List[IssueSummary] = Field(default_factory=list, alias="recentIssues")
    hostel_name: str = Field(..., alias="hostelName")


class StudentStats(BaseSchema):
    last_cleaning_date: Optional[datetime] = Field(default=None, alias="lastCleaningDate")
    month_count: int = Field(..., alias="monthCount")
    open_issues: int = Field(..., alias="openIssues")

    @field_serializer("last_cleaning_date")
    def _serialize_last(self, value: Optional[datetime]) -> Optional[str]:
        return as_utc(value).isoformat() if value is not None else None


class StudentDashboard(BaseSchema):
    room_no: str
    hostel_name: str = Field(..., alias="hostelName")
    stats: StudentStats
    recent_activity: List[CleaningLogResponse] = Field(default_factory=list, alias="recentActivity")
