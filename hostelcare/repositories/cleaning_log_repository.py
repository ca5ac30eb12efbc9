"""
Cleaning log repository: submissions, room history and dashboard aggregates.
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelcare.core.exceptions import RepositoryError
from hostelcare.models.cleaning_log import CleaningLog, CleaningLogTask
from hostelcare.repositories.base import TenantRepository


class CleaningLogRepository(TenantRepository[CleaningLog]):

    def __init__(self, db: Session, hostel_name: str):
        super().__init__(CleaningLog, db, hostel_name)

    def create_with_tasks(self, log: CleaningLog, labels: Iterable[str]) -> CleaningLog:
        log.tasks = [CleaningLogTask(label=label) for label in labels]
        return self.create(log)

    def find_for_room_on(self, room_no: str, submission_date: date) -> Optional[CleaningLog]:
        return self.find_one_by_criteria(
            {"room_no": room_no, "submission_date": submission_date}
        )

    def history_for_room(self, room_no: str, limit: Optional[int] = None) -> List[CleaningLog]:
        return self.find_by_criteria(
            {"room_no": room_no}, limit=limit, order_by=["-created_at"]
        )

    def find_all_newest_first(self) -> List[CleaningLog]:
        return self.find_by_criteria({}, order_by=["-created_at"])

    def count_since(self, start: datetime, room_no: Optional[str] = None) -> int:
        try:
            query = self.db.query(func.count(CleaningLog.id)).filter(
                CleaningLog.hostel_name == self.hostel_name,
                CleaningLog.created_at >= start,
            )
            if room_no is not None:
                query = query.filter(CleaningLog.room_no == room_no)
            return int(query.scalar() or 0)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Count failed: {str(e)}") from e

    def created_at_since(self, start: datetime) -> List[datetime]:
        """Creation timestamps of logs at or after ``start``."""
        try:
            rows = (
                self.db.query(CleaningLog.created_at)
                .filter(
                    CleaningLog.hostel_name == self.hostel_name,
                    CleaningLog.created_at >= start,
                )
                .all()
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Trend query failed: {str(e)}") from e
        return [created_at for (created_at,) in rows]

    def task_distribution(self) -> List[Dict[str, Any]]:
        """Number of logs containing each task label, as ``{name, value}``."""
        label_count = func.count(CleaningLogTask.id)
        try:
            rows = (
                self.db.query(CleaningLogTask.label, label_count)
                .join(CleaningLog, CleaningLogTask.log_id == CleaningLog.id)
                .filter(CleaningLog.hostel_name == self.hostel_name)
                .group_by(CleaningLogTask.label)
                .order_by(label_count.desc(), CleaningLogTask.label)
                .all()
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Task distribution failed: {str(e)}") from e
        return [{"name": label, "value": int(value)} for label, value in rows]
