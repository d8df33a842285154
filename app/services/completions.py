"""
Completion service: mark a habit done for a day, undo today's mark, history.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from app.core.errors import (
    HabitAlreadyCompletedError,
    HabitNotCompletedTodayError,
    InvalidArgumentError,
)
from app.models.completion import Completion
from app.services.habits import get_habit

logger = logging.getLogger(__name__)


def get_completions(db: Session, habit_ids: Iterable[int]) -> list[Completion]:
    ids = list(habit_ids)
    if not ids:
        return []
    return db.query(Completion).filter(Completion.habit_id.in_(ids)).all()


def list_completions(db: Session, habit_id: int) -> list[Completion]:
    get_habit(db, habit_id)
    return (
        db.query(Completion)
        .filter(Completion.habit_id == habit_id)
        .order_by(Completion.date.desc())
        .all()
    )


def _completion_on(db: Session, habit_id: int, day: date) -> Completion | None:
    return (
        db.query(Completion)
        .filter(Completion.habit_id == habit_id, Completion.date == day)
        .first()
    )


def complete_habit(db: Session, habit_id: int, day: date, today: date) -> Completion:
    """Record a completion on `day`. One per habit per calendar day, never after `today`."""
    get_habit(db, habit_id)
    if day > today:
        raise InvalidArgumentError("Completion day is in the future", field="day", value=day)
    if _completion_on(db, habit_id, day) is not None:
        raise HabitAlreadyCompletedError(habit_id, day)

    completion = Completion(habit_id=habit_id, date=day)
    db.add(completion)
    db.commit()
    db.refresh(completion)
    logger.info("Habit %s completed on %s", habit_id, day)
    return completion


def undo_completion(db: Session, habit_id: int, today: date) -> None:
    """Remove today's completion. Past days are history and stay untouched."""
    get_habit(db, habit_id)
    completion = _completion_on(db, habit_id, today)
    if completion is None:
        raise HabitNotCompletedTodayError(habit_id, today)
    db.delete(completion)
    db.commit()
    logger.info("Habit %s completion on %s undone", habit_id, today)
