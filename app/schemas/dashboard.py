"""
Dashboard schemas.

GET /users/{id}/dashboard → list[DashboardHabitResponse]
"""
from pydantic import Field

from app.schemas.habit import HabitResponse


class DashboardHabitResponse(HabitResponse):
    """A habit plus the two flags derived for the requested day."""
    completed_today: bool = Field(
        description="True if the habit has a completion on the requested calendar day."
    )
    required_reflection: bool = Field(
        description=(
            "True if the habit went longer than its fail_reflection_limit without "
            "a completion since it was created or last reflected on."
        )
    )
