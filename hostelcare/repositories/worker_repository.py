"""
Worker repository with per-worker job statistics.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import and_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelcare.core.exceptions import RepositoryError
from hostelcare.models.base.enums import WorkerStatus
from hostelcare.models.cleaning_log import CleaningLog
from hostelcare.models.worker import Worker
from hostelcare.repositories.base import TenantRepository


class WorkerRepository(TenantRepository[Worker]):

    def __init__(self, db: Session, hostel_name: str):
        super().__init__(Worker, db, hostel_name)

    def find_by_phone(self, phone: str, exclude_id: Optional[str] = None) -> Optional[Worker]:
        query = self.query().filter(Worker.phone == phone)
        if exclude_id:
            query = query.filter(Worker.id != exclude_id)
        return query.first()

    def find_active(self) -> List[Worker]:
        return self.find_by_criteria({"status": WorkerStatus.ACTIVE}, order_by=["name"])

    def find_with_stats(self) -> List[Dict[str, Any]]:
        """
        Every worker with ``total_jobs`` (log count) and ``rating`` (mean of
        rated logs, None if none), newest worker first.
        """
        try:
            rows = (
                self.db.query(
                    Worker,
                    func.count(CleaningLog.id).label("total_jobs"),
                    func.avg(CleaningLog.rating).label("rating"),
                )
                .outerjoin(
                    CleaningLog,
                    and_(
                        CleaningLog.worker_id == Worker.id,
                        CleaningLog.hostel_name == self.hostel_name,
                    ),
                )
                .filter(Worker.hostel_name == self.hostel_name)
                .group_by(Worker.id)
                .order_by(Worker.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Worker stats failed: {str(e)}") from e

        return [
            {
                "worker": worker,
                "total_jobs": int(total_jobs or 0),
                "rating": float(rating) if rating is not None else None,
            }
            for worker, total_jobs, rating in rows
        ]

    def top_by_log_count(self, limit: int = 5) -> List[Dict[str, Any]]:
        """Workers with the most cleaning logs, as ``{name, count}``."""
        job_count = func.count(CleaningLog.id)
        try:
            rows = (
                self.db.query(Worker.name, job_count.label("count"))
                .join(CleaningLog, CleaningLog.worker_id == Worker.id)
                .filter(
                    Worker.hostel_name == self.hostel_name,
                    CleaningLog.hostel_name == self.hostel_name,
                )
                .group_by(Worker.id, Worker.name)
                .order_by(job_count.desc(), Worker.name)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Top workers query failed: {str(e)}") from e
        return [{"name": name, "count": int(count)} for name, count in rows]
