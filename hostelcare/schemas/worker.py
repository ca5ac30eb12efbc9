"""
Worker schemas.
"""

from typing import Optional

from pydantic import Field

from hostelcare.models.base.enums import WorkerStatus
from hostelcare.schemas.common.base import BaseDBSchema, BaseSchema


class WorkerCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=20)
    assigned_block: Optional[str] = Field(default=None, max_length=100)


class WorkerUpdate(BaseSchema):
    """Partial update; omitted or empty fields are left unchanged."""

    name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    assigned_block: Optional[str] = Field(default=None, max_length=100)


class WorkerResponse(BaseDBSchema):
    name: str
    phone: str
    hostel_name: str = Field(..., alias="hostelName")
    assigned_block: str
    status: WorkerStatus


class WorkerSummary(BaseSchema):
    """Minimal worker projection for pickers and joined listings."""

    id: str
    name: str


class WorkerWithStats(WorkerResponse):
    total_jobs: int = Field(default=0, alias="totalJobs")
    rating: Optional[float] = None
