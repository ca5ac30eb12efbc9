"""
Worker management for hostel admins.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import BaseAppException
from hostelcare.models.base.enums import UserRole, WorkerStatus
from hostelcare.models.worker import DEFAULT_BLOCK, Worker
from hostelcare.repositories.worker_repository import WorkerRepository
from hostelcare.schemas.worker import (
    WorkerResponse,
    WorkerSummary,
    WorkerUpdate,
    WorkerWithStats,
)
from hostelcare.services.base import BaseService, ServiceResult, requires_role

PHONE_CONFLICT = "Worker with this phone number already exists in this hostel"
WORKER_NOT_FOUND = "Worker not found in your hostel"


class WorkerService(BaseService):
    """
    Add, edit and toggle workers, and list them with job statistics.

    Phone numbers are unique per hostel; the same number may be registered
    in several hostels.
    """

    @requires_role(UserRole.ADMIN)
    def add_worker(
        self,
        name: str,
        phone: str,
        assigned_block: Optional[str] = None,
        *,
        caller: CallerContext,
    ) -> ServiceResult[WorkerResponse]:
        if not name or not phone:
            return ServiceResult.validation_failure("Name and Phone are required")

        workers = WorkerRepository(self.db, caller.hostel_name)
        try:
            if workers.find_by_phone(phone) is not None:
                return ServiceResult.conflict(PHONE_CONFLICT)

            now = self.now()
            worker = workers.create(
                Worker(
                    name=name,
                    phone=phone,
                    assigned_block=assigned_block or DEFAULT_BLOCK,
                    status=WorkerStatus.ACTIVE,
                    created_at=now,
                    updated_at=now,
                )
            )
            self._logger.info(f"Worker {worker.id} added to {caller.hostel_name}")
            return ServiceResult.success(
                WorkerResponse.model_validate(worker),
                message="Worker added successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "add worker")

    @requires_role(UserRole.ADMIN)
    def edit_worker(
        self,
        worker_id: str,
        patch: WorkerUpdate,
        *,
        caller: CallerContext,
    ) -> ServiceResult[WorkerResponse]:
        """
        Apply a partial update. Empty values leave the field unchanged.
        """
        workers = WorkerRepository(self.db, caller.hostel_name)
        try:
            worker = workers.find_by_id(worker_id)
            if worker is None:
                return ServiceResult.not_found("Worker", worker_id, message=WORKER_NOT_FOUND)

            changes: Dict[str, Any] = {}
            if patch.phone and patch.phone != worker.phone:
                if workers.find_by_phone(patch.phone, exclude_id=worker.id) is not None:
                    return ServiceResult.conflict(PHONE_CONFLICT)
                changes["phone"] = patch.phone
            if patch.name:
                changes["name"] = patch.name
            if patch.assigned_block:
                changes["assigned_block"] = patch.assigned_block

            if changes:
                changes["updated_at"] = self.now()
                worker = workers.update(worker.id, changes)

            return ServiceResult.success(
                WorkerResponse.model_validate(worker),
                message="Worker updated successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "edit worker", worker_id)

    @requires_role(UserRole.ADMIN)
    def toggle_worker_status(self, worker_id: str, *, caller: CallerContext) -> ServiceResult[WorkerResponse]:
        """Active becomes Inactive; any other status becomes Active."""
        workers = WorkerRepository(self.db, caller.hostel_name)
        try:
            worker = workers.find_by_id(worker_id)
            if worker is None:
                return ServiceResult.not_found("Worker", worker_id, message=WORKER_NOT_FOUND)

            new_status = (
                WorkerStatus.INACTIVE if worker.status == WorkerStatus.ACTIVE else WorkerStatus.ACTIVE
            )
            worker = workers.update(worker.id, {"status": new_status, "updated_at": self.now()})
            self._logger.info(f"Worker {worker.id} status changed to {new_status.value}")
            return ServiceResult.success(
                WorkerResponse.model_validate(worker),
                message=f"Worker status changed to {new_status.value}",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "toggle worker status", worker_id)

    @requires_role(UserRole.STUDENT, UserRole.ADMIN)
    def list_active_workers(self, *, caller: CallerContext) -> ServiceResult[List[WorkerSummary]]:
        try:
            workers = WorkerRepository(self.db, caller.hostel_name).find_active()
            return ServiceResult.success(
                [WorkerSummary.model_validate(w) for w in workers],
                message="Active workers fetched successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "list active workers")

    @requires_role(UserRole.ADMIN)
    def list_workers_with_stats(self, *, caller: CallerContext) -> ServiceResult[List[WorkerWithStats]]:
        try:
            rows = WorkerRepository(self.db, caller.hostel_name).find_with_stats()
            result = []
            for row in rows:
                item = WorkerWithStats.model_validate(row["worker"])
                item.total_jobs = row["total_jobs"]
                item.rating = row["rating"]
                result.append(item)
            return ServiceResult.success(
                result,
                message=f"Workers for {caller.hostel_name} fetched successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "list workers")
