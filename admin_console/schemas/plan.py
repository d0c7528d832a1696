"""Meal plan schemas."""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from admin_console.schemas.logs import coerce_number


class PlanRow(BaseModel):
    """Row of meal_plans as returned by the store.

    Wire columns are ``calories``, ``protein`` and ``meals``; the model exposes
    them under descriptive names.
    """

    model_config = ConfigDict(populate_by_name=True)

    COLUMNS: ClassVar[tuple[str, ...]] = (
        "id",
        "name",
        "calories",
        "protein",
        "meals",
        "created_at",
    )

    id: str
    name: str
    daily_calorie_target: int = Field(0, validation_alias="calories")
    protein_target_grams: int = Field(0, validation_alias="protein")
    meal_count: int = Field(0, validation_alias="meals")
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("daily_calorie_target", "protein_target_grams", "meal_count", mode="before")
    @classmethod
    def default_targets(cls, value: Any) -> int:
        return int(coerce_number(value))


class PlanView(PlanRow):
    """Plan annotated with its live member count."""

    member_count: int = 0

    @property
    def short_id(self) -> str:
        return self.id[:8]


class PlanDraft(BaseModel):
    """Raw operator input for a new plan.

    Numeric fields accept form text; non-digit characters are stripped during validation.
    """

    name: str = ""
    daily_calorie_target: str | int | float | None = None
    protein_target_grams: str | int | float | None = None
    meal_count: str | int | float | None = 0


class PlanResponse(BaseModel):
    """Plan card in the dashboard response."""

    id: str
    short_id: str
    name: str
    daily_calorie_target: int
    protein_target_grams: int
    meal_count: int
    member_count: int
    created_at: datetime | None

    @classmethod
    def from_view(cls, plan: PlanView) -> "PlanResponse":
        return cls(short_id=plan.short_id, **plan.model_dump())
