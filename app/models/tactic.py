from sqlalchemy import Integer, String, Text, Boolean, Enum
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.stage import HabitStage


class Tactic(Base):
    __tablename__ = "tactics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    icon_url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    part_of_habit: Mapped[str] = mapped_column(
        Enum(HabitStage, name="habit_stage"), nullable=False, index=True
    )
    build: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
