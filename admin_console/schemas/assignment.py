"""Assignment schemas."""

from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator


class AssignmentRow(BaseModel):
    """Row of user_meal_plans: the (user, plan) link."""

    COLUMNS: ClassVar[tuple[str, ...]] = ("user_id", "plan_id")

    user_id: str
    plan_id: str

    @field_validator("user_id", "plan_id", mode="before")
    @classmethod
    def stringify_keys(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class AssignmentRequest(BaseModel):
    """Assign a plan to a user, replacing any current assignment."""

    user_id: str = Field(..., min_length=1, max_length=64)
    plan_id: str = Field(..., min_length=1, max_length=64)
