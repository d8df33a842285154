"""
Users router.

POST  /users
GET   /users/{user_id}
PATCH /users/{user_id}/onboarding
GET   /users/{user_id}/dashboard
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.clock import now_in, parse_day, resolve_timezone
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.routers.serializers import evaluation_to_response, user_to_response
from app.schemas.dashboard import DashboardHabitResponse
from app.schemas.user import UserCreateRequest, UserResponse
from app.services.dashboard import build_dashboard
from app.services.users import complete_onboarding, get_user, register_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={
        409: {"model": ErrorResponse, "description": "Email already exists."},
        422: {"model": ErrorResponse, "description": "Invalid email format."},
    },
)
def create_user(payload: UserCreateRequest, db: Session = Depends(get_db)):
    return user_to_response(register_user(db=db, email=payload.email))


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Fetch a user",
    responses={404: {"model": ErrorResponse, "description": "Unknown user."}},
)
def read_user(user_id: int, db: Session = Depends(get_db)):
    return user_to_response(get_user(db=db, user_id=user_id))


@router.patch(
    "/{user_id}/onboarding",
    response_model=UserResponse,
    summary="Mark onboarding as completed",
    responses={404: {"model": ErrorResponse, "description": "Unknown user."}},
)
def finish_onboarding(user_id: int, db: Session = Depends(get_db)):
    return user_to_response(complete_onboarding(db=db, user_id=user_id))


@router.get(
    "/{user_id}/dashboard",
    response_model=list[DashboardHabitResponse],
    summary="Habits with today's completion and reflection status",
    responses={
        200: {"description": "One item per habit that existed on the requested day."},
        400: {"model": ErrorResponse, "description": "Malformed `day` or unknown `tz`."},
        404: {"model": ErrorResponse, "description": "Unknown user."},
    },
)
def dashboard(
    user_id: int,
    day: Optional[str] = Query(
        default=None,
        description="ISO date (YYYY-MM-DD) to evaluate. Defaults to now.",
        examples=["2026-02-20"],
    ),
    tz: Optional[str] = Query(
        default=None,
        description="IANA timezone for calendar days. Defaults to the server setting.",
        examples=["Europe/Madrid"],
    ),
    db: Session = Depends(get_db),
):
    """
    Return the user's habits, in display order, each annotated with:

    - `completed_today`: a completion exists on the requested calendar day.
    - `required_reflection`: the habit went longer than its
      `fail_reflection_limit` without a completion, counted from its latest
      reflection, or from its creation if it was never reflected on.
      Any completion within the limit clears it.

    Only habits created on or before `day` are listed.
    """
    zone = resolve_timezone(tz)
    target_day = parse_day(day)
    results = build_dashboard(
        db=db, user_id=user_id, tz=zone, now=now_in(zone), day=target_day,
    )
    return [evaluation_to_response(r) for r in results]
