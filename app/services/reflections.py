"""
Reflection service.

A reflection is logged when a habit slips: which stage of the loop broke
(the bottleneck), what happened, and the experiment to try next, optionally
backed by catalogue tactics.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from app.core.errors import TacticNotFoundError
from app.models.reflection import Reflection, ReflectionTactic
from app.models.stage import HabitStage
from app.models.tactic import Tactic
from app.services.habits import get_habit

logger = logging.getLogger(__name__)


def get_reflections(db: Session, habit_ids: Iterable[int]) -> list[Reflection]:
    ids = list(habit_ids)
    if not ids:
        return []
    return db.query(Reflection).filter(Reflection.habit_id.in_(ids)).all()


def list_reflections(db: Session, habit_id: int) -> list[Reflection]:
    get_habit(db, habit_id)
    return (
        db.query(Reflection)
        .filter(Reflection.habit_id == habit_id)
        .order_by(Reflection.date.desc(), Reflection.id.desc())
        .all()
    )


def tactic_ids_by_reflection(db: Session, reflection_ids: Iterable[int]) -> dict[int, list[int]]:
    ids = list(reflection_ids)
    result: dict[int, list[int]] = {rid: [] for rid in ids}
    if not ids:
        return result
    rows = (
        db.query(ReflectionTactic)
        .filter(ReflectionTactic.reflection_id.in_(ids))
        .order_by(ReflectionTactic.tactic_id)
        .all()
    )
    for row in rows:
        result[row.reflection_id].append(row.tactic_id)
    return result


def create_reflection(
    db: Session,
    habit_id: int,
    *,
    bottleneck: HabitStage,
    experience: str,
    reflection: str,
    experiment: str,
    day: date,
    tactic_ids: list[int] | None = None,
) -> Reflection:
    get_habit(db, habit_id)

    wanted = sorted(set(tactic_ids or []))
    if wanted:
        found = {tid for (tid,) in db.query(Tactic.id).filter(Tactic.id.in_(wanted))}
        missing = [tid for tid in wanted if tid not in found]
        if missing:
            raise TacticNotFoundError(missing)

    record = Reflection(
        habit_id=habit_id,
        bottleneck=bottleneck,
        experience=experience,
        reflection=reflection,
        experiment=experiment,
        date=day,
    )
    db.add(record)
    db.flush()  # get record.id
    for tid in wanted:
        db.add(ReflectionTactic(reflection_id=record.id, tactic_id=tid))
    db.commit()
    db.refresh(record)
    logger.info("Reflection %s logged for habit %s on %s", record.id, habit_id, day)
    return record
