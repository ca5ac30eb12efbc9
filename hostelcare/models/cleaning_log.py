"""
Cleaning log models.

A cleaning log is a student's confirmation that their room was cleaned.
Logs are immutable once written.
"""
from typing import List

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from hostelcare.models.base.base_model import BaseModel
from hostelcare.models.base.enums import CleaningStatus, values_enum
from hostelcare.models.base.mixins import TenantMixin, TimestampMixin


class CleaningLog(BaseModel, TenantMixin, TimestampMixin):
    """
    One cleaning confirmation per room per local calendar day.

    ``submission_date`` is the local date of ``created_at`` and backs the
    one-per-day rule at the store level.
    """
    __tablename__ = "cleaning_logs"
    __table_args__ = (
        UniqueConstraint(
            "room_no", "hostel_name", "submission_date",
            name="uq_cleaning_logs_room_day",
        ),
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_cleaning_logs_rating"),
        {"comment": "Room cleaning confirmations"},
    )

    room_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    room_no = Column(String(50), nullable=False, index=True)
    worker_id = Column(String(36), ForeignKey("workers.id"), nullable=False, index=True)
    status = Column(
        values_enum(CleaningStatus, "cleaning_status"),
        nullable=False,
        default=CleaningStatus.VERIFIED,
    )
    feedback = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True)
    image_url = Column(String(500), nullable=True)
    submission_date = Column(Date, nullable=False, index=True)

    worker = relationship("Worker", lazy="joined")
    tasks = relationship(
        "CleaningLogTask",
        back_populates="log",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CleaningLogTask.label",
    )

    @property
    def cleaning_type(self) -> List[str]:
        return [task.label for task in self.tasks]

    @property
    def worker_name(self):
        return self.worker.name if self.worker is not None else None


class CleaningLogTask(BaseModel):
    """Single task label of a cleaning log (e.g. ``Sweeping``)."""
    __tablename__ = "cleaning_log_tasks"
    __table_args__ = (
        UniqueConstraint("log_id", "label", name="uq_cleaning_log_tasks_label"),
    )

    log_id = Column(
        String(36),
        ForeignKey("cleaning_logs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label = Column(String(100), nullable=False, index=True)

    log = relationship("CleaningLog", back_populates="tasks")
