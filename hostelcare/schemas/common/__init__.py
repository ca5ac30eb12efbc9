from hostelcare.schemas.common.base import BaseDBSchema, BaseSchema
from hostelcare.schemas.common.response import ApiResponse, ErrorResponse

__all__ = ["BaseSchema", "BaseDBSchema", "ApiResponse", "ErrorResponse"]
