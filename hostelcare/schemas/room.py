"""
Student room provisioning schemas.
"""

from pydantic import Field

from hostelcare.schemas.auth import UserPublic
from hostelcare.schemas.common.base import BaseSchema


class RoomCreateRequest(BaseSchema):
    room_no: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class RoomCreated(BaseSchema):
    user: UserPublic
