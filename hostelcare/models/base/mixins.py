"""
SQLAlchemy model mixins for reusable functionality.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from hostelcare.config.settings import settings
from hostelcare.core.exceptions import ValidationError
from hostelcare.utils.datetime_utils import utc_now


class TimestampMixin:
    """
    Mixin for automatic timestamp tracking (UTC).

    Timestamps are assigned application-side so services can stamp records
    with their own clock.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        index=True,
        comment="Record creation timestamp (UTC)"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        comment="Record last update timestamp (UTC)"
    )


class TenantMixin:
    """
    Mixin binding a record to exactly one hostel.

    The value must belong to the configured hostel roster and is never
    changed after creation.
    """

    hostel_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Owning hostel (tenant)"
    )

    @validates("hostel_name")
    def validate_hostel_name(self, key, value):
        if not settings.is_known_hostel(value):
            raise ValidationError(f"Unknown hostel: {value}")
        current = getattr(self, "hostel_name", None)
        if current is not None and current != value:
            raise ValidationError("Hostel of an existing record cannot be changed")
        return value
