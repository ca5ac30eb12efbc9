"""
Maintenance issue model.
"""
from sqlalchemy import Column, ForeignKey, String, Text

from hostelcare.models.base.base_model import BaseModel
from hostelcare.models.base.enums import IssueStatus, values_enum
from hostelcare.models.base.mixins import TenantMixin, TimestampMixin


class Issue(BaseModel, TenantMixin, TimestampMixin):
    """
    Maintenance issue raised by a room.

    Only an admin of the same hostel changes ``status`` and
    ``admin_response``. Issues are never deleted.
    """
    __tablename__ = "issues"
    __table_args__ = (
        {"comment": "Room maintenance issues"},
    )

    room_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    room_no = Column(String(50), nullable=False, index=True)
    issue_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    status = Column(
        values_enum(IssueStatus, "issue_status"),
        nullable=False,
        default=IssueStatus.OPEN,
        index=True,
    )
    admin_response = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Issue(id={self.id}, room={self.room_no}, status={self.status})>"
