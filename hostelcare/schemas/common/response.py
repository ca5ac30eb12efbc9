"""
Standard API response envelopes.
"""

from typing import Any, Generic, TypeVar, Union

from pydantic import Field

from hostelcare.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "ApiResponse",
    "ErrorResponse",
]


class ApiResponse(BaseSchema, Generic[T]):
    """Success envelope: ``{statusCode, data, message, success}``."""

    status_code: int = Field(default=200, alias="statusCode")
    data: Union[T, None] = Field(default=None, description="Response data")
    message: str = Field(default="Success", description="Response message")
    success: bool = Field(default=True, description="Success flag")

    @classmethod
    def create(cls, data: Any = None, message: str = "Success", status_code: int = 200):
        """Create success response; ``success`` follows the status code."""
        if isinstance(data, BaseSchema):
            data = data.to_response()
        elif isinstance(data, list):
            data = [item.to_response() if isinstance(item, BaseSchema) else item for item in data]
        return cls(
            status_code=status_code,
            data=data,
            message=message,
            success=status_code < 400,
        )


class ErrorResponse(BaseSchema):
    """Error envelope: ``{statusCode, message, success}``."""

    status_code: int = Field(..., alias="statusCode")
    message: str = Field(..., description="Error message")
    success: bool = Field(default=False, description="Success flag")
