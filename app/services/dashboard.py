"""
Dashboard service: per-habit status for one user on one day.

Reads the three collaborators (habits, completions, reflections) and hands
the snapshot to the Reflection Requirement Evaluator. Read-only.

Target instant
--------------
  day omitted → today, the calendar day of `now` (the caller's clock) in `tz`
  day given   → `day`
Either way the evaluation runs at midnight of that day in `tz`, so the
time of the request never shifts a day distance.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from app.services.completions import get_completions
from app.services.habits import get_habits
from app.services.reflection_requirement import HabitEvaluation, evaluate_habits
from app.services.reflections import get_reflections
from app.services.users import get_user

logger = logging.getLogger(__name__)


def build_dashboard(
    db: Session,
    user_id: int,
    tz: ZoneInfo,
    now: datetime,
    day: Optional[date] = None,
) -> list[HabitEvaluation]:
    get_user(db, user_id)

    if day is None:
        day = now.astimezone(tz).date()
    target = datetime.combine(day, time.min, tzinfo=tz)

    habits = get_habits(db, user_id, created_on_or_before=day, tz=tz)
    habit_ids = {h.id for h in habits}
    completions = get_completions(db, habit_ids)
    reflections = get_reflections(db, habit_ids)

    results = evaluate_habits(habits, completions, reflections, target=target, tz=tz)
    logger.debug(
        "Dashboard user=%s day=%s tz=%s habits=%d reflections_required=%d",
        user_id, day, tz.key, len(results),
        sum(1 for r in results if r.required_reflection),
    )
    return results
