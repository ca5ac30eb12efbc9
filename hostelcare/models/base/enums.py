"""
Database enums mirroring schema enums.

Values are the strings stored in the database and returned to clients.
"""

import enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "STUDENT"
    ADMIN = "ADMIN"


class WorkerStatus(str, enum.Enum):
    """Worker availability. DISABLED is reserved for manual offboarding."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DISABLED = "Disabled"


class CleaningStatus(str, enum.Enum):
    """Cleaning log status. Student confirmations are verified on submit."""
    VERIFIED = "Verified"


class IssueStatus(str, enum.Enum):
    """Maintenance issue lifecycle."""
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @classmethod
    def pending(cls):
        """Statuses counted as outstanding on dashboards."""
        return [cls.OPEN, cls.IN_PROGRESS]


def values_enum(enum_cls, name: str) -> SAEnum:
    """Column type storing enum values (e.g. ``"In Progress"``) rather than member names."""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        validate_strings=True,
        length=32,
    )
