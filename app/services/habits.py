"""
Habit service: CRUD, ordering, and the habit read contract used by the
dashboard.

Ordering: `sort_order` is 1-based and contiguous per user. Create appends,
delete compacts, reorder rewrites the whole sequence.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import HabitLimitReachedError, HabitNotFoundError, InvalidArgumentError
from app.models.completion import Completion
from app.models.habit import Habit
from app.models.reflection import Reflection, ReflectionTactic
from app.services.reflection_requirement import calendar_day
from app.services.users import get_user

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = (
    "name", "icon_url", "fail_reflection_limit",
    "cue", "craving", "response", "reward", "build",
)


def _user_habits(db: Session, user_id: int) -> list[Habit]:
    return (
        db.query(Habit)
        .filter(Habit.user_id == user_id)
        .order_by(Habit.sort_order, Habit.id)
        .all()
    )


def get_habit(db: Session, habit_id: int) -> Habit:
    habit = db.get(Habit, habit_id)
    if habit is None:
        raise HabitNotFoundError(habit_id)
    return habit


def list_habits(db: Session, user_id: int) -> list[Habit]:
    get_user(db, user_id)
    return _user_habits(db, user_id)


def get_habits(
    db: Session,
    user_id: int,
    created_on_or_before: date,
    tz: ZoneInfo,
) -> list[Habit]:
    """
    Habits of `user_id` that existed on `created_on_or_before`, by sort order.
    The creation day is taken in `tz`, the same zone the dashboard evaluates in.
    A user owns at most MAX_HABITS_PER_USER rows, so the filter runs in Python.
    """
    return [
        h for h in _user_habits(db, user_id)
        if calendar_day(h.created_at, tz) <= created_on_or_before
    ]


def create_habit(db: Session, user_id: int, fields: dict[str, Any]) -> Habit:
    get_user(db, user_id)
    existing = db.query(Habit.id).filter(Habit.user_id == user_id).count()
    next_sort_order = existing + 1
    if next_sort_order > settings.MAX_HABITS_PER_USER:
        raise HabitLimitReachedError(settings.MAX_HABITS_PER_USER)

    habit = Habit(user_id=user_id, sort_order=next_sort_order, **fields)
    db.add(habit)
    db.commit()
    db.refresh(habit)
    logger.info("User %s created habit %s (%s)", user_id, habit.id, habit.name)
    return habit


def update_habit(db: Session, habit_id: int, changes: dict[str, Any]) -> Habit:
    habit = get_habit(db, habit_id)
    for name in _UPDATABLE_FIELDS:
        if name in changes:
            setattr(habit, name, changes[name])
    db.commit()
    db.refresh(habit)
    return habit


def delete_habit(db: Session, habit_id: int) -> None:
    """Delete a habit with its completions and reflections, then close the gap."""
    habit = get_habit(db, habit_id)
    user_id = habit.user_id

    reflection_ids = [
        rid for (rid,) in db.query(Reflection.id).filter(Reflection.habit_id == habit_id)
    ]
    if reflection_ids:
        db.query(ReflectionTactic).filter(
            ReflectionTactic.reflection_id.in_(reflection_ids)
        ).delete(synchronize_session=False)
    db.query(Reflection).filter(Reflection.habit_id == habit_id).delete(synchronize_session=False)
    db.query(Completion).filter(Completion.habit_id == habit_id).delete(synchronize_session=False)
    db.delete(habit)
    db.flush()

    for position, remaining in enumerate(_user_habits(db, user_id), start=1):
        remaining.sort_order = position
    db.commit()
    logger.info("Deleted habit %s of user %s", habit_id, user_id)


def reorder_habits(db: Session, user_id: int, habit_ids: list[int]) -> list[Habit]:
    """Apply a full permutation of the user's habit ids as the new order."""
    habits = list_habits(db, user_id)
    by_id = {h.id: h for h in habits}
    if len(habit_ids) != len(set(habit_ids)) or set(habit_ids) != set(by_id):
        raise InvalidArgumentError(
            "habit_ids must list every habit of the user exactly once.",
            field="habit_ids",
            value=habit_ids,
        )
    for position, habit_id in enumerate(habit_ids, start=1):
        by_id[habit_id].sort_order = position
    db.commit()
    return _user_habits(db, user_id)
