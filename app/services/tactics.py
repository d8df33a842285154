"""
Tactic catalogue: techniques that target one stage of the habit loop.
"""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.orm import Session

from app.models.stage import HabitStage
from app.models.tactic import Tactic


def list_tactics(
    db: Session,
    part_of_habit: Optional[HabitStage] = None,
    build: Optional[bool] = None,
) -> list[Tactic]:
    q = db.query(Tactic)
    if part_of_habit is not None:
        q = q.filter(Tactic.part_of_habit == part_of_habit)
    if build is not None:
        q = q.filter(Tactic.build == build)
    return q.order_by(Tactic.id).all()


def create_tactic(db: Session, fields: dict[str, Any]) -> Tactic:
    tactic = Tactic(**fields)
    db.add(tactic)
    db.commit()
    db.refresh(tactic)
    return tactic
