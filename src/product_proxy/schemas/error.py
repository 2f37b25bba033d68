"""Error response schemas."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    field: str
    message: str
    code: str


class ValidationErrorResponse(BaseModel):
    error: str = "Validation failed"
    details: list[ErrorDetail]
