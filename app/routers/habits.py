"""
Habits router.

POST   /users/{user_id}/habits
GET    /users/{user_id}/habits
PUT    /users/{user_id}/habits/order
GET    /habits/{habit_id}
PATCH  /habits/{habit_id}
DELETE /habits/{habit_id}
POST   /habits/{habit_id}/complete
DELETE /habits/{habit_id}/complete
GET    /habits/{habit_id}/completions
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.clock import resolve_timezone, today_in
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.routers.serializers import completion_to_response, habit_to_response
from app.schemas.habit import (
    CompleteHabitRequest,
    CompletionResponse,
    HabitCreateRequest,
    HabitOrderRequest,
    HabitResponse,
    HabitUpdateRequest,
)
from app.services import completions as completion_service
from app.services import habits as habit_service

router = APIRouter(tags=["habits"])

_TZ_QUERY = Query(
    default=None,
    description="IANA timezone deciding what 'today' is. Defaults to the server setting.",
    examples=["Europe/Madrid"],
)


# ---------------------------------------------------------------------------
# Per-user collection
# ---------------------------------------------------------------------------

@router.post(
    "/users/{user_id}/habits",
    response_model=HabitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a habit",
    responses={
        400: {"model": ErrorResponse, "description": "User already has the maximum number of habits."},
        404: {"model": ErrorResponse, "description": "Unknown user."},
    },
)
def create_habit(user_id: int, payload: HabitCreateRequest, db: Session = Depends(get_db)):
    """Create a habit at the end of the user's list."""
    habit = habit_service.create_habit(db=db, user_id=user_id, fields=payload.model_dump())
    return habit_to_response(habit)


@router.get(
    "/users/{user_id}/habits",
    response_model=list[HabitResponse],
    summary="List a user's habits in display order",
)
def list_habits(user_id: int, db: Session = Depends(get_db)):
    return [habit_to_response(h) for h in habit_service.list_habits(db=db, user_id=user_id)]


@router.put(
    "/users/{user_id}/habits/order",
    response_model=list[HabitResponse],
    summary="Reorder a user's habits",
    responses={
        400: {"model": ErrorResponse, "description": "habit_ids is not a permutation of the user's habits."},
    },
)
def reorder_habits(user_id: int, payload: HabitOrderRequest, db: Session = Depends(get_db)):
    habits = habit_service.reorder_habits(db=db, user_id=user_id, habit_ids=payload.habit_ids)
    return [habit_to_response(h) for h in habits]


# ---------------------------------------------------------------------------
# Single habit
# ---------------------------------------------------------------------------

@router.get("/habits/{habit_id}", response_model=HabitResponse, summary="Fetch a habit")
def read_habit(habit_id: int, db: Session = Depends(get_db)):
    return habit_to_response(habit_service.get_habit(db=db, habit_id=habit_id))


@router.patch("/habits/{habit_id}", response_model=HabitResponse, summary="Update a habit")
def update_habit(habit_id: int, payload: HabitUpdateRequest, db: Session = Depends(get_db)):
    habit = habit_service.update_habit(
        db=db, habit_id=habit_id, changes=payload.model_dump(exclude_unset=True),
    )
    return habit_to_response(habit)


@router.delete(
    "/habits/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a habit with its history",
)
def delete_habit(habit_id: int, db: Session = Depends(get_db)):
    habit_service.delete_habit(db=db, habit_id=habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Completions
# ---------------------------------------------------------------------------

@router.post(
    "/habits/{habit_id}/complete",
    response_model=CompletionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Mark a habit as done",
    responses={
        400: {"model": ErrorResponse, "description": "The day is after today in `tz`."},
        409: {"model": ErrorResponse, "description": "Already completed on that day."},
    },
)
def complete_habit(
    habit_id: int,
    payload: Optional[CompleteHabitRequest] = None,
    tz: Optional[str] = _TZ_QUERY,
    db: Session = Depends(get_db),
):
    today = today_in(resolve_timezone(tz))
    day = payload.day if payload and payload.day else today
    completion = completion_service.complete_habit(db=db, habit_id=habit_id, day=day, today=today)
    return completion_to_response(completion)


@router.delete(
    "/habits/{habit_id}/complete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Undo today's completion",
    responses={400: {"model": ErrorResponse, "description": "The habit has no completion today."}},
)
def undo_completion(
    habit_id: int,
    tz: Optional[str] = _TZ_QUERY,
    db: Session = Depends(get_db),
):
    """Only today's completion can be undone; earlier days are history."""
    completion_service.undo_completion(
        db=db, habit_id=habit_id, today=today_in(resolve_timezone(tz)),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/habits/{habit_id}/completions",
    response_model=list[CompletionResponse],
    summary="Completion history, newest first",
)
def list_completions(habit_id: int, db: Session = Depends(get_db)):
    return [
        completion_to_response(c)
        for c in completion_service.list_completions(db=db, habit_id=habit_id)
    ]
