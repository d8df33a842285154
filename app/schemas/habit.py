"""
Habit schemas.

POST  /users/{id}/habits          → HabitCreateRequest  → HabitResponse
PATCH /habits/{id}                → HabitUpdateRequest  → HabitResponse
PUT   /users/{id}/habits/order    → HabitOrderRequest   → list[HabitResponse]
POST  /habits/{id}/complete       → CompleteHabitRequest → CompletionResponse
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_Text = Annotated[str, Field(min_length=1, max_length=2_000)]


class HabitCreateRequest(BaseModel):
    """A new habit, described through the four stages of the habit loop."""
    name: Annotated[str, Field(min_length=1, max_length=256, examples=["Read 10 pages"])]
    icon_url: Annotated[str, Field(min_length=1, max_length=2_000)]
    fail_reflection_limit: Annotated[int, Field(
        ge=0,
        le=365,
        description=(
            "Grace period in days. Once a habit goes longer than this without "
            "a completion, the dashboard asks for a reflection."
        ),
        examples=[3],
    )]
    cue: _Text
    craving: _Text
    response: _Text
    reward: _Text
    build: bool = Field(default=True, description="False for a habit being broken.")

    @field_validator("name", "cue", "craving", "response", "reward", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("must not be empty after stripping whitespace")
        return stripped


class HabitUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""
    name: Optional[Annotated[str, Field(min_length=1, max_length=256)]] = None
    icon_url: Optional[Annotated[str, Field(min_length=1, max_length=2_000)]] = None
    fail_reflection_limit: Optional[Annotated[int, Field(ge=0, le=365)]] = None
    cue: Optional[_Text] = None
    craving: Optional[_Text] = None
    response: Optional[_Text] = None
    reward: Optional[_Text] = None
    build: Optional[bool] = None


class HabitOrderRequest(BaseModel):
    habit_ids: list[int] = Field(
        description="Every habit id of the user, in the desired display order.",
        examples=[[3, 1, 2]],
    )


class HabitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    icon_url: str
    fail_reflection_limit: int
    cue: str
    craving: str
    response: str
    reward: str
    build: bool
    sort_order: int
    created_at: str


class CompleteHabitRequest(BaseModel):
    day: Optional[date] = Field(
        default=None,
        description="Day being completed. Defaults to today in the request timezone.",
        examples=["2026-02-20"],
    )


class CompletionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    habit_id: int
    date: str
