"""
Worker model.
"""
from sqlalchemy import Column, Float, String, UniqueConstraint

from hostelcare.models.base.base_model import BaseModel
from hostelcare.models.base.enums import WorkerStatus, values_enum
from hostelcare.models.base.mixins import TenantMixin, TimestampMixin

DEFAULT_BLOCK = "General"


class Worker(BaseModel, TenantMixin, TimestampMixin):
    """Cleaning staff member of one hostel. Never hard-deleted."""
    __tablename__ = "workers"
    __table_args__ = (
        UniqueConstraint("phone", "hostel_name", name="uq_workers_phone_hostel"),
        {"comment": "Hostel cleaning staff"},
    )

    name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False, index=True)
    assigned_block = Column(String(100), nullable=False, default=DEFAULT_BLOCK)
    status = Column(
        values_enum(WorkerStatus, "worker_status"),
        nullable=False,
        default=WorkerStatus.ACTIVE,
        index=True,
    )
    rating = Column(
        Float,
        nullable=True,
        comment="Reserved; dashboards compute ratings from cleaning logs"
    )

    def __repr__(self) -> str:
        return f"<Worker(id={self.id}, name={self.name}, status={self.status})>"
