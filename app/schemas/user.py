"""
User schemas.

POST  /users                      → UserCreateRequest → UserResponse
GET   /users/{id}                 → UserResponse
PATCH /users/{id}/onboarding      → UserResponse
"""
from __future__ import annotations

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserCreateRequest(BaseModel):
    email: Annotated[str, Field(
        min_length=3,
        max_length=320,
        description="Login email. Stored lower-case.",
        examples=["ada@example.com"],
    )]

    @field_validator("email", mode="before")
    @classmethod
    def check_email_format(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not isinstance(stripped, str) or not EMAIL_PATTERN.match(stripped):
            raise ValueError("invalid email format")
        return stripped


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    completed_onboarding: bool
    created_at: str
