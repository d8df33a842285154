"""
Reflection: the user's analysis of a missed habit.

Logging one restarts the grace period of its habit on the dashboard.
Tactics picked as the next experiment live in `reflection_tactics`.
"""
from datetime import date
from sqlalchemy import Integer, Text, Date, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.stage import HabitStage


class Reflection(Base):
    __tablename__ = "reflections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    habit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    experience: Mapped[str] = mapped_column(Text, nullable=False)
    reflection: Mapped[str] = mapped_column(Text, nullable=False)
    bottleneck: Mapped[str] = mapped_column(
        Enum(HabitStage, name="habit_stage"), nullable=False
    )
    experiment: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)


class ReflectionTactic(Base):
    __tablename__ = "reflection_tactics"

    reflection_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("reflections.id", ondelete="CASCADE"), primary_key=True
    )
    tactic_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tactics.id", ondelete="CASCADE"), primary_key=True
    )
