"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from hostelcare.utils.datetime_utils import as_utc

__all__ = [
    "BaseSchema",
    "BaseDBSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Field names are snake_case in Python; wire names are set with aliases
    and both are accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready dict using wire names."""
        return self.model_dump(mode="json", by_alias=True)


class BaseDBSchema(BaseSchema):
    """Base schema for stored records with ID and timestamps."""

    id: str = Field(..., description="Unique identifier")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return as_utc(value).isoformat() if value is not None else None
