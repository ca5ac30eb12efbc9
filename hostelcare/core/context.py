"""
Caller identity resolved once per request at the API boundary.
"""

from dataclasses import dataclass
from typing import Optional

from hostelcare.models.base.enums import UserRole


@dataclass(frozen=True)
class CallerContext:
    """
    Immutable identity passed into every service call.

    ``hostel_name`` is always taken from the stored user record, never from
    client input, and is the tenant filter for every data operation.
    """

    id: str
    role: UserRole
    hostel_name: str
    room_no: Optional[str] = None
    username: Optional[str] = None

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    @classmethod
    def from_user(cls, user) -> "CallerContext":
        return cls(
            id=user.id,
            role=UserRole(user.role),
            hostel_name=user.hostel_name,
            room_no=user.room_no,
            username=user.username,
        )
