"""
Cleaning log submission and history.
"""

from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import BaseAppException, EntityAlreadyExistsError, ValidationError
from hostelcare.models.base.enums import CleaningStatus, UserRole
from hostelcare.models.cleaning_log import CleaningLog
from hostelcare.repositories.cleaning_log_repository import CleaningLogRepository
from hostelcare.repositories.worker_repository import WorkerRepository
from hostelcare.schemas.cleaning_log import CleaningLogResponse, normalize_labels
from hostelcare.services.base import BaseService, ServiceResult, requires_role
from hostelcare.services.integrations.blob_store import BlobStore, get_blob_store
from hostelcare.utils.datetime_utils import Clock, local_date

ALREADY_SUBMITTED = "You have already submitted a cleaning log for today!"


class CleaningLogService(BaseService):
    """
    Students confirm that their room was cleaned, at most once per local
    calendar day. Room and hostel always come from the caller.
    """

    def __init__(
        self,
        db_session: Session,
        clock: Optional[Clock] = None,
        blob_store: Optional[BlobStore] = None,
    ):
        super().__init__(db_session, clock)
        self.blob_store = blob_store or get_blob_store()

    @requires_role(UserRole.STUDENT)
    def submit_log(
        self,
        worker_id: str,
        cleaning_type: Any,
        feedback: Optional[str] = None,
        rating: Optional[int] = None,
        image_path: Optional[str] = None,
        *,
        caller: CallerContext,
    ) -> ServiceResult[CleaningLogResponse]:
        """
        Record a cleaning confirmation for the caller's room.

        ``cleaning_type`` may be a single label or several. An image that
        fails to upload is dropped and the log is still created.
        """
        if not worker_id:
            return ServiceResult.validation_failure("Worker selection is required")
        try:
            labels = normalize_labels(cleaning_type)
        except ValidationError as e:
            return ServiceResult.validation_failure(e.message)
        if rating is not None and not 1 <= rating <= 5:
            return ServiceResult.validation_failure("Rating must be between 1 and 5")

        image_url = self.blob_store.upload(image_path) if image_path else None

        logs = CleaningLogRepository(self.db, caller.hostel_name)
        try:
            if WorkerRepository(self.db, caller.hostel_name).find_by_id(worker_id) is None:
                return ServiceResult.not_found("Worker", worker_id, message="Worker not found in your hostel")

            now = self.now()
            today = local_date(now)
            if logs.find_for_room_on(caller.room_no, today) is not None:
                return ServiceResult.conflict(ALREADY_SUBMITTED)

            log = logs.create_with_tasks(
                CleaningLog(
                    room_id=caller.id,
                    room_no=caller.room_no,
                    worker_id=worker_id,
                    status=CleaningStatus.VERIFIED,
                    feedback=feedback or "",
                    rating=rating,
                    image_url=image_url or "",
                    submission_date=today,
                    created_at=now,
                    updated_at=now,
                ),
                labels,
            )
            self._logger.info(
                f"Cleaning log {log.id} submitted for room {caller.room_no}",
                extra={"hostel_name": caller.hostel_name, "tasks": labels},
            )
            return ServiceResult.success(
                CleaningLogResponse.model_validate(log),
                message="Cleaning confirmed successfully",
            )
        except EntityAlreadyExistsError:
            return ServiceResult.conflict(ALREADY_SUBMITTED)
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "submit cleaning log", caller.room_no)

    @requires_role(UserRole.STUDENT)
    def get_my_room_history(self, *, caller: CallerContext) -> ServiceResult[List[CleaningLogResponse]]:
        try:
            logs = CleaningLogRepository(self.db, caller.hostel_name).history_for_room(caller.room_no)
            return ServiceResult.success(
                [CleaningLogResponse.model_validate(log) for log in logs],
                message="Cleaning history fetched successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "fetch room history", caller.room_no)

    @requires_role(UserRole.ADMIN)
    def get_all_logs(self, *, caller: CallerContext) -> ServiceResult[List[CleaningLogResponse]]:
        try:
            logs = CleaningLogRepository(self.db, caller.hostel_name).find_all_newest_first()
            return ServiceResult.success(
                [CleaningLogResponse.model_validate(log) for log in logs],
                message=f"All cleaning logs for {caller.hostel_name} fetched",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "fetch cleaning logs")
