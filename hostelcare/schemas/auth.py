"""
Login, refresh and user projection schemas.
"""

from typing import Optional

from pydantic import Field

from hostelcare.models.base.enums import UserRole
from hostelcare.schemas.common.base import BaseDBSchema, BaseSchema


class AdminLoginRequest(BaseSchema):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    hostel_name: str = Field(..., min_length=1, alias="hostelName")


class StudentLoginRequest(BaseSchema):
    room_no: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    hostel_name: str = Field(..., min_length=1, alias="hostelName")


class RefreshRequest(BaseSchema):
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")


class UserPublic(BaseDBSchema):
    """User record without password hash or refresh token."""

    room_no: Optional[str] = None
    username: Optional[str] = None
    role: UserRole
    hostel_name: str = Field(..., alias="hostelName")


class TokenPair(BaseSchema):
    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")


class LoginResponse(TokenPair):
    user: UserPublic
