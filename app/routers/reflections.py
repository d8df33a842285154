"""
Reflections and tactics router.

POST /habits/{habit_id}/reflections
GET  /habits/{habit_id}/reflections
GET  /tactics
POST /tactics
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.clock import resolve_timezone, today_in
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.models.stage import HabitStage
from app.routers.serializers import reflection_to_response, tactic_to_response
from app.schemas.reflection import (
    ReflectionCreateRequest,
    ReflectionResponse,
    TacticCreateRequest,
    TacticResponse,
)
from app.services import reflections as reflection_service
from app.services import tactics as tactic_service

router = APIRouter(tags=["reflections"])


@router.post(
    "/habits/{habit_id}/reflections",
    response_model=ReflectionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a reflection on a missed habit",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown habit or tactic."},
    },
)
def create_reflection(
    habit_id: int,
    payload: ReflectionCreateRequest,
    tz: Optional[str] = Query(
        default=None,
        description="IANA timezone deciding the default day. Defaults to the server setting.",
    ),
    db: Session = Depends(get_db),
):
    """
    Record why the habit slipped and what to try next.
    A reflection restarts the habit's grace period on the dashboard.
    """
    day = payload.day or today_in(resolve_timezone(tz))
    record = reflection_service.create_reflection(
        db=db,
        habit_id=habit_id,
        bottleneck=payload.bottleneck,
        experience=payload.experience,
        reflection=payload.reflection,
        experiment=payload.experiment,
        day=day,
        tactic_ids=payload.tactic_ids,
    )
    tactics = reflection_service.tactic_ids_by_reflection(db, [record.id])
    return reflection_to_response(record, tactics[record.id])


@router.get(
    "/habits/{habit_id}/reflections",
    response_model=list[ReflectionResponse],
    summary="Reflections of a habit, newest first",
)
def list_reflections(habit_id: int, db: Session = Depends(get_db)):
    records = reflection_service.list_reflections(db=db, habit_id=habit_id)
    tactics = reflection_service.tactic_ids_by_reflection(db, [r.id for r in records])
    return [reflection_to_response(r, tactics[r.id]) for r in records]


@router.get(
    "/tactics",
    response_model=list[TacticResponse],
    summary="Tactic catalogue",
)
def list_tactics(
    part_of_habit: Optional[HabitStage] = Query(
        default=None, description="Only tactics targeting this stage."
    ),
    build: Optional[bool] = Query(
        default=None, description="true: building habits, false: breaking habits."
    ),
    db: Session = Depends(get_db),
):
    return [
        tactic_to_response(t)
        for t in tactic_service.list_tactics(db=db, part_of_habit=part_of_habit, build=build)
    ]


@router.post(
    "/tactics",
    response_model=TacticResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a tactic to the catalogue",
)
def create_tactic(payload: TacticCreateRequest, db: Session = Depends(get_db)):
    return tactic_to_response(tactic_service.create_tactic(db=db, fields=payload.model_dump()))
