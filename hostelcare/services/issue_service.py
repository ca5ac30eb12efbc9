"""
Maintenance issues raised by rooms and resolved by hostel admins.
"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import BaseAppException
from hostelcare.models.base.enums import IssueStatus, UserRole
from hostelcare.models.issue import Issue
from hostelcare.repositories.issue_repository import IssueRepository
from hostelcare.schemas.issue import IssueResponse
from hostelcare.services.base import BaseService, ServiceResult, requires_role
from hostelcare.services.integrations.blob_store import BlobStore, get_blob_store
from hostelcare.utils.datetime_utils import Clock


class IssueService(BaseService):

    def __init__(
        self,
        db_session: Session,
        clock: Optional[Clock] = None,
        blob_store: Optional[BlobStore] = None,
    ):
        super().__init__(db_session, clock)
        self.blob_store = blob_store or get_blob_store()

    @requires_role(UserRole.STUDENT)
    def raise_issue(
        self,
        issue_type: str,
        description: str,
        image_path: Optional[str] = None,
        *,
        caller: CallerContext,
    ) -> ServiceResult[IssueResponse]:
        if not issue_type or not description:
            return ServiceResult.validation_failure("Issue Type and Description are required")

        image_url = self.blob_store.upload(image_path) if image_path else None

        try:
            now = self.now()
            issue = IssueRepository(self.db, caller.hostel_name).create(
                Issue(
                    room_id=caller.id,
                    room_no=caller.room_no,
                    issue_type=issue_type,
                    description=description,
                    image_url=image_url or "",
                    status=IssueStatus.OPEN,
                    created_at=now,
                    updated_at=now,
                )
            )
            self._logger.info(f"Issue {issue.id} raised by room {caller.room_no}")
            return ServiceResult.success(
                IssueResponse.model_validate(issue),
                message="Issue raised successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "raise issue", caller.room_no)

    @requires_role(UserRole.STUDENT)
    def get_my_issues(self, *, caller: CallerContext) -> ServiceResult[List[IssueResponse]]:
        try:
            issues = IssueRepository(self.db, caller.hostel_name).find_for_room(caller.room_no)
            return ServiceResult.success(
                [IssueResponse.model_validate(i) for i in issues],
                message="My issues fetched successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "fetch my issues")

    @requires_role(UserRole.ADMIN)
    def get_issues_by_room(self, room_no: str, *, caller: CallerContext) -> ServiceResult[List[IssueResponse]]:
        if not room_no:
            return ServiceResult.validation_failure("Room number is required")
        room_no = room_no.strip().upper()
        try:
            issues = IssueRepository(self.db, caller.hostel_name).find_for_room(room_no)
            return ServiceResult.success(
                [IssueResponse.model_validate(i) for i in issues],
                message=f"Issues for room {room_no} in {caller.hostel_name} fetched",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "fetch room issues", room_no)

    @requires_role(UserRole.ADMIN)
    def get_all_issues(self, *, caller: CallerContext) -> ServiceResult[List[IssueResponse]]:
        try:
            issues = IssueRepository(self.db, caller.hostel_name).find_all_newest_first()
            return ServiceResult.success(
                [IssueResponse.model_validate(i) for i in issues],
                message=f"All issues for {caller.hostel_name} fetched successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "fetch issues")

    @requires_role(UserRole.ADMIN)
    def resolve_issue(
        self,
        issue_id: str,
        status: IssueStatus,
        admin_response: Optional[str] = None,
        *,
        caller: CallerContext,
    ) -> ServiceResult[IssueResponse]:
        """
        Set status and admin response of an issue in the caller's hostel.
        An issue of another hostel is reported as not found.
        """
        if not issue_id or not status:
            return ServiceResult.validation_failure("Issue ID and Status are required")
        try:
            status = IssueStatus(status)
        except ValueError:
            return ServiceResult.validation_failure(f"Invalid issue status: {status}")

        try:
            issue = IssueRepository(self.db, caller.hostel_name).update(
                issue_id,
                {
                    "status": status,
                    "admin_response": admin_response or "",
                    "updated_at": self.now(),
                },
            )
            if issue is None:
                return ServiceResult.not_found(
                    "Issue", issue_id, message="Issue not found or unauthorized to update"
                )
            self._logger.info(f"Issue {issue.id} set to {status.value}")
            return ServiceResult.success(
                IssueResponse.model_validate(issue),
                message="Issue updated successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "resolve issue", issue_id)
