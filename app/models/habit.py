"""
Habit: one tracked behaviour owned by a user.

fail_reflection_limit is the grace period in days: how long the habit may go
without a completion before the dashboard asks for a reflection.
"""
from datetime import datetime
from sqlalchemy import Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Habit(Base):
    __tablename__ = "habits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    icon_url: Mapped[str] = mapped_column(Text, nullable=False)
    fail_reflection_limit: Mapped[int] = mapped_column(Integer, nullable=False)
    cue: Mapped[str] = mapped_column(Text, nullable=False)
    craving: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    reward: Mapped[str] = mapped_column(Text, nullable=False)
    build: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
