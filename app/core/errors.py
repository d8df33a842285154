"""
Custom exception hierarchy for the habit tracker API.

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

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class HabitTrackerException(Exception):
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


class InvalidArgumentError(HabitTrackerException):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "INVALID_ARGUMENT"

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message=message, details=details)


class UserNotFoundError(HabitTrackerException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: int):
        super().__init__(
            message=f"User {user_id} does not exist.",
            details={"user_id": user_id},
        )


class HabitNotFoundError(HabitTrackerException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "HABIT_NOT_FOUND"

    def __init__(self, habit_id: int):
        super().__init__(
            message=f"Habit {habit_id} does not exist.",
            details={"habit_id": habit_id},
        )


class TacticNotFoundError(HabitTrackerException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "TACTIC_NOT_FOUND"

    def __init__(self, tactic_ids: list[int]):
        super().__init__(
            message=f"Unknown tactic id(s): {', '.join(str(t) for t in tactic_ids)}.",
            details={"tactic_ids": tactic_ids},
        )


class EmailAlreadyExistsError(HabitTrackerException):
    http_status = status.HTTP_409_CONFLICT
    code = "EMAIL_ALREADY_EXISTS"

    def __init__(self, email: str):
        super().__init__(
            message="Email already exists.",
            details={"email": email},
        )


class HabitLimitReachedError(HabitTrackerException):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "HABIT_LIMIT_REACHED"

    def __init__(self, max_habits: int):
        super().__init__(
            message=f"You've reached the maximum number of habits ({max_habits}).",
            details={"max_habits": max_habits},
        )


class HabitAlreadyCompletedError(HabitTrackerException):
    http_status = status.HTTP_409_CONFLICT
    code = "HABIT_ALREADY_COMPLETED"

    def __init__(self, habit_id: int, day: date):
        super().__init__(
            message=f"Habit {habit_id} is already completed on {day}.",
            details={"habit_id": habit_id, "day": str(day)},
        )


class HabitNotCompletedTodayError(HabitTrackerException):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "HABIT_NOT_COMPLETED_TODAY"

    def __init__(self, habit_id: int, day: date):
        super().__init__(
            message="Habit has not been completed today.",
            details={"habit_id": habit_id, "day": str(day)},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def habit_tracker_exception_handler(
    request: Request, exc: HabitTrackerException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
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
