"""
ORM → response model mapping shared by the routers.
"""
from __future__ import annotations

from typing import Any, Optional

from app.models.completion import Completion
from app.models.habit import Habit
from app.models.reflection import Reflection
from app.models.tactic import Tactic
from app.models.user import User
from app.schemas.dashboard import DashboardHabitResponse
from app.schemas.habit import CompletionResponse, HabitResponse
from app.schemas.reflection import ReflectionResponse, TacticResponse
from app.schemas.user import UserResponse
from app.services.reflection_requirement import HabitEvaluation


def _ev(v) -> str:
    """Extract bare string value from a str-enum or plain str."""
    return v.value if hasattr(v, "value") else str(v)


def habit_to_dict(habit: Habit, extra: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    d = {
        "id": habit.id,
        "user_id": habit.user_id,
        "name": habit.name,
        "icon_url": habit.icon_url,
        "fail_reflection_limit": habit.fail_reflection_limit,
        "cue": habit.cue,
        "craving": habit.craving,
        "response": habit.response,
        "reward": habit.reward,
        "build": habit.build,
        "sort_order": habit.sort_order,
        "created_at": habit.created_at.isoformat() if habit.created_at else "",
    }
    if extra:
        d.update(extra)
    return d


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        completed_onboarding=bool(user.completed_onboarding),
        created_at=user.created_at.isoformat() if user.created_at else "",
    )


def habit_to_response(habit: Habit) -> HabitResponse:
    return HabitResponse(**habit_to_dict(habit))


def evaluation_to_response(ev: HabitEvaluation) -> DashboardHabitResponse:
    return DashboardHabitResponse(**habit_to_dict(ev.habit, extra={
        "completed_today": ev.completed_on_date,
        "required_reflection": ev.required_reflection,
    }))


def completion_to_response(c: Completion) -> CompletionResponse:
    return CompletionResponse(id=c.id, habit_id=c.habit_id, date=str(c.date))


def reflection_to_response(r: Reflection, tactic_ids: list[int]) -> ReflectionResponse:
    return ReflectionResponse(
        id=r.id,
        habit_id=r.habit_id,
        bottleneck=_ev(r.bottleneck),
        experience=r.experience,
        reflection=r.reflection,
        experiment=r.experiment,
        date=str(r.date),
        tactic_ids=tactic_ids,
    )


def tactic_to_response(t: Tactic) -> TacticResponse:
    return TacticResponse(
        id=t.id,
        name=t.name,
        icon_url=t.icon_url,
        description=t.description,
        part_of_habit=_ev(t.part_of_habit),
        build=bool(t.build),
    )
