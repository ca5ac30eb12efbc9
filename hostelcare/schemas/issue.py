"""
Maintenance issue schemas.
"""

from typing import Optional

from pydantic import Field

from hostelcare.models.base.enums import IssueStatus
from hostelcare.schemas.common.base import BaseDBSchema, BaseSchema


class IssueCreate(BaseSchema):
    issue_type: str = Field(..., min_length=1, max_length=100, alias="issueType")
    description: str = Field(..., min_length=1)


class IssueResolve(BaseSchema):
    status: IssueStatus
    admin_response: Optional[str] = Field(default=None, alias="adminResponse")


class IssueResponse(BaseDBSchema):
    room_id: str
    room_no: str
    hostel_name: str = Field(..., alias="hostelName")
    issue_type: str = Field(..., alias="issueType")
    description: str
    image_url: Optional[str] = Field(default=None, alias="image")
    status: IssueStatus
    admin_response: Optional[str] = Field(default=None, alias="adminResponse")


class IssueSummary(BaseDBSchema):
    """Projection used in the admin dashboard's recent issues list."""

    room_no: str
    issue_type: str = Field(..., alias="issueType")
    description: str
    status: IssueStatus
