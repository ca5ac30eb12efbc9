"""
User repository: room and admin lookups within one hostel.
"""

from typing import Optional

from sqlalchemy.orm import Session

from hostelcare.models.base.enums import UserRole
from hostelcare.models.user import User
from hostelcare.repositories.base import TenantRepository


class UserRepository(TenantRepository[User]):

    def __init__(self, db: Session, hostel_name: str):
        super().__init__(User, db, hostel_name)

    def find_student(self, room_no: str) -> Optional[User]:
        return self.find_one_by_criteria({"room_no": room_no, "role": UserRole.STUDENT})

    def find_admin(self, username: str) -> Optional[User]:
        return self.find_one_by_criteria({"username": username, "role": UserRole.ADMIN})
