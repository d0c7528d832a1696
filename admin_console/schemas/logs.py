"""Log row schemas and numeric coercion for loosely-typed store rows."""

import math
from typing import Any

from pydantic import BaseModel, field_validator


def coerce_number(value: Any) -> float:
    """Return value as a finite float, treating null, absent and non-numeric values as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0.0
    if not isinstance(value, int | float) or not math.isfinite(value):
        return 0.0
    return float(value)


class NutritionLogRow(BaseModel):
    """Row of nutrition_logs. Only calories are read."""

    calories: float = 0.0

    @field_validator("calories", mode="before")
    @classmethod
    def default_calories(cls, value: Any) -> float:
        return coerce_number(value)


class WaterLogRow(BaseModel):
    """Row of water_intake. Only the amount is read."""

    amount_ml: float = 0.0

    @field_validator("amount_ml", mode="before")
    @classmethod
    def default_amount(cls, value: Any) -> float:
        return coerce_number(value)
