"""
User model: student rooms and hostel admins.
"""
from sqlalchemy import Column, String, Text, UniqueConstraint

from hostelcare.models.base.base_model import BaseModel
from hostelcare.models.base.enums import UserRole, values_enum
from hostelcare.models.base.mixins import TenantMixin, TimestampMixin


class User(BaseModel, TenantMixin, TimestampMixin):
    """
    Authentication identity for one hostel.

    A STUDENT user represents a room and logs in by room number; an ADMIN
    logs in by username. Both are unique only within their hostel.
    """
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("room_no", "hostel_name", name="uq_users_room_hostel"),
        UniqueConstraint("username", "hostel_name", name="uq_users_username_hostel"),
        {"comment": "Student rooms and hostel admins"},
    )

    room_no = Column(
        String(50),
        nullable=True,
        index=True,
        comment="Room number (students only, stored uppercase)"
    )
    username = Column(
        String(100),
        nullable=True,
        comment="Admin login name (admins only)"
    )
    password_hash = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )
    role = Column(
        values_enum(UserRole, "user_role"),
        nullable=False,
        default=UserRole.STUDENT,
        index=True,
    )
    refresh_token = Column(
        Text,
        nullable=True,
        comment="Currently valid refresh token, cleared on logout"
    )

    def __repr__(self) -> str:
        label = self.room_no or self.username
        return f"<User(id={self.id}, role={self.role}, login={label}, hostel={self.hostel_name})>"
