"""
Custom exception hierarchy for the Smarty check-in service.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from app.schemas.common import ErrorDetail

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class SmartyException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class CheckinFetchError(SmartyException):
    """The record store could not return a user's check-ins."""
    http_status = status.HTTP_502_BAD_GATEWAY
    code = "CHECKIN_FETCH_FAILED"

    def __init__(self, user_id: str, reason: str | None = None):
        super().__init__(
            message=f"Could not fetch check-ins for user {user_id}.",
            details={"user_id": user_id, "reason": reason} if reason else {"user_id": user_id},
        )
        self.user_id = user_id
        self.reason = reason


class UnknownTimezoneError(SmartyException):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "UNKNOWN_TIMEZONE"

    def __init__(self, tz_name: str):
        super().__init__(
            message=f"Unknown civil timezone '{tz_name}'.",
            details={"timezone": tz_name},
        )


class CheckinNotFoundError(SmartyException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "CHECKIN_NOT_FOUND"

    def __init__(self, user_id: str, day: date | str):
        super().__init__(
            message=f"No check-in for user {user_id} on {day}.",
            details={"user_id": user_id, "day": str(day)},
        )


class InvalidScheduleRangeError(SmartyException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_SCHEDULE_RANGE"

    def __init__(self, max_days: int, received: int):
        super().__init__(
            message=f"Schedule range must be between 1 and {max_days} days. Received {received}.",
            details={"max_days": max_days, "received": received},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def smarty_exception_handler(request: Request, exc: SmartyException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            message=error["msg"],
            type=error["type"],
        ).model_dump()
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
