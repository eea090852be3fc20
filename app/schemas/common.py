"""
Shared schema primitives used across the API.

Documents the `{code, message, details}` envelope produced by the
handlers in app.core.errors.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """A single field-level validation error (inside details.errors)."""
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    code: str = Field(examples=["CHECKIN_NOT_FOUND"])
    message: str
    details: Optional[dict[str, Any]] = None


class ValidationErrorDetails(BaseModel):
    errors: list[ErrorDetail]


class ValidationErrorResponse(ErrorResponse):
    """422 body for request validation failures (code VALIDATION_ERROR)."""
    details: ValidationErrorDetails
