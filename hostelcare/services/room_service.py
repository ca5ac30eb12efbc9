"""
Student room provisioning.
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelcare.core.context import CallerContext
from hostelcare.core.exceptions import BaseAppException
from hostelcare.core.security import PasswordHasher, get_password_hasher
from hostelcare.models.base.enums import UserRole
from hostelcare.models.user import User
from hostelcare.repositories.user_repository import UserRepository
from hostelcare.schemas.auth import UserPublic
from hostelcare.schemas.room import RoomCreated
from hostelcare.services.base import BaseService, ServiceResult, requires_role
from hostelcare.utils.datetime_utils import Clock


class RoomService(BaseService):

    def __init__(
        self,
        db_session: Session,
        clock: Optional[Clock] = None,
        password_hasher: Optional[PasswordHasher] = None,
    ):
        super().__init__(db_session, clock)
        self.password_hasher = password_hasher or get_password_hasher()

    @requires_role(UserRole.ADMIN)
    def create_student_room(self, room_no: str, password: str, caller: CallerContext) -> ServiceResult[RoomCreated]:
        """
        Create STUDENT credentials for a room in the admin's hostel.

        Room numbers are stored uppercase and are unique per hostel only.
        """
        if not room_no or not room_no.strip() or not password:
            return ServiceResult.validation_failure("room_no and password are required")

        room_no = room_no.strip().upper()
        users = UserRepository(self.db, caller.hostel_name)

        try:
            if users.find_student(room_no) is not None:
                return ServiceResult.conflict(
                    f"Room {room_no} already exists in {caller.hostel_name}"
                )

            now = self.now()
            user = users.create(
                User(
                    room_no=room_no,
                    password_hash=self.password_hasher.hash(password),
                    role=UserRole.STUDENT,
                    created_at=now,
                    updated_at=now,
                )
            )
            self._logger.info(
                f"Room {room_no} created in {caller.hostel_name}",
                extra={"user_id": caller.id},
            )
            return ServiceResult.success(
                RoomCreated(user=UserPublic.model_validate(user)),
                message="Student room credentials created successfully",
            )
        except (SQLAlchemyError, BaseAppException) as e:
            return self._handle_exception(e, "create student room", room_no)
