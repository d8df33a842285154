"""
Reflection and tactic schemas.

POST /habits/{id}/reflections     → ReflectionCreateRequest → ReflectionResponse
GET  /habits/{id}/reflections     → list[ReflectionResponse]
GET  /tactics, POST /tactics      → TacticResponse / TacticCreateRequest
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.stage import HabitStage

_Text = Annotated[str, Field(min_length=1, max_length=5_000)]


class ReflectionCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    bottleneck: HabitStage = Field(
        description="Stage of the habit loop where it broke down.",
        examples=["cue"],
    )
    experience: _Text
    reflection: _Text
    experiment: _Text
    day: Optional[date] = Field(
        default=None,
        description="Day of the reflection. Defaults to today in the request timezone.",
    )
    tactic_ids: list[int] = Field(
        default_factory=list,
        description="Catalogue tactics chosen for the next experiment.",
    )


class ReflectionResponse(BaseModel):
    id: int
    habit_id: int
    bottleneck: str
    experience: str
    reflection: str
    experiment: str
    date: str
    tactic_ids: list[int]


class TacticCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: Annotated[str, Field(min_length=1, max_length=256)]
    icon_url: Annotated[str, Field(min_length=1, max_length=2_000)]
    description: _Text
    part_of_habit: HabitStage
    build: bool = True


class TacticResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    icon_url: str
    description: str
    part_of_habit: str
    build: bool
