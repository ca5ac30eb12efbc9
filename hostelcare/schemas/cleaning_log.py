"""
Cleaning log schemas.
"""

from datetime import date
from typing import Any, List, Optional

from pydantic import Field, field_validator

from hostelcare.core.exceptions import ValidationError
from hostelcare.models.base.enums import CleaningStatus
from hostelcare.schemas.common.base import BaseDBSchema, BaseSchema
from hostelcare.schemas.worker import WorkerSummary


def normalize_labels(value: Any) -> List[str]:
    """
    Accept one label or a collection of labels and return the distinct,
    non-blank labels in first-seen order.

    Raises:
        ValidationError: If no label remains
    """
    if value is None:
        items = []
    elif isinstance(value, str):
        items = [value]
    else:
        items = list(value)

    labels: List[str] = []
    for item in items:
        label = str(item).strip()
        if label and label not in labels:
            labels.append(label)

    if not labels:
        raise ValidationError("At least one task must be selected")
    return labels


class CleaningLogCreate(BaseSchema):
    worker_id: str = Field(..., min_length=1, alias="worker")
    cleaning_type: List[str] = Field(..., alias="cleaningType")
    feedback: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)

    @field_validator("cleaning_type", mode="before")
    @classmethod
    def _one_or_more(cls, v: Any) -> List[str]:
        try:
            return normalize_labels(v)
        except ValidationError as e:
            raise ValueError(e.message) from e


class CleaningLogResponse(BaseDBSchema):
    room_id: str
    room_no: str
    hostel_name: str = Field(..., alias="hostelName")
    worker: Optional[WorkerSummary] = None
    cleaning_type: List[str] = Field(default_factory=list, alias="cleaningType")
    status: CleaningStatus
    feedback: Optional[str] = None
    rating: Optional[int] = None
    image_url: Optional[str] = Field(default=None, alias="image")
    submission_date: date
