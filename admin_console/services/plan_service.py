"""Meal plan creation and deletion."""

import logging
import re
from dataclasses import dataclass
from typing import Any

from admin_console.config import Settings, get_settings
from admin_console.errors import (
    ConfirmationRequiredError,
    MutationError,
    StoreError,
    ValidationError,
)
from admin_console.schemas.plan import PlanDraft
from admin_console.services.store import MEAL_PLANS, RemoteStore

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class PlanLimits:
    """Bounds a new plan must respect."""

    name_max_length: int
    max_calories: int
    max_protein: int
    max_meals: int

    @classmethod
    def from_settings(cls, settings: Settings) -> "PlanLimits":
        return cls(
            name_max_length=settings.plan_name_max_length,
            max_calories=settings.plan_max_calories,
            max_protein=settings.plan_max_protein,
            max_meals=settings.plan_max_meals,
        )


def sanitize_digits(value: str) -> str:
    """Strip everything except digits from form input ("2,000 kcal" -> "2000")."""
    return _NON_DIGITS.sub("", value)


def _coerce_whole_number(
    value: str | int | float | None,
    field: str,
    maximum: int,
    errors: dict[str, str],
    default: int | None = None,
) -> int | None:
    """Coerce one numeric input and check it lies in [0, maximum].

    Problems are recorded in errors rather than raised, so every field is reported at once.
    """
    if value is None or value == "":
        if default is None:
            errors[field] = "is required"
        return default

    if isinstance(value, bool):
        errors[field] = "must be a number"
        return None
    if isinstance(value, str):
        digits = sanitize_digits(value)
        if not digits:
            errors[field] = "must be a number"
            return None
        digits = digits.lstrip("0") or "0"
        # More digits than the bound is always out of range
        if len(digits) > len(str(maximum)):
            errors[field] = f"must be between 0 and {maximum}"
            return None
        number = int(digits)
    elif isinstance(value, float):
        if not value.is_integer():
            errors[field] = "must be a whole number"
            return None
        number = int(value)
    else:
        number = value

    if not 0 <= number <= maximum:
        errors[field] = f"must be between 0 and {maximum}"
        return None
    return number


class PlanService:
    """Validates and performs plan creation and deletion."""

    def __init__(self, store: RemoteStore, limits: PlanLimits | None = None):
        self.store = store
        self.limits = limits or PlanLimits.from_settings(get_settings())

    def validate(self, draft: PlanDraft) -> dict[str, Any]:
        """Check a draft locally and return the row to insert.

        Raises:
            ValidationError: with one message per offending field.
        """
        errors: dict[str, str] = {}

        name = draft.name.strip()
        if not name:
            errors["name"] = "is required"
        elif len(name) > self.limits.name_max_length:
            errors["name"] = f"must be at most {self.limits.name_max_length} characters"

        calories = _coerce_whole_number(
            draft.daily_calorie_target, "daily_calorie_target", self.limits.max_calories, errors
        )
        protein = _coerce_whole_number(
            draft.protein_target_grams, "protein_target_grams", self.limits.max_protein, errors
        )
        meals = _coerce_whole_number(
            draft.meal_count, "meal_count", self.limits.max_meals, errors, default=0
        )

        if errors:
            raise ValidationError(errors)

        return {"name": name, "calories": calories, "protein": protein, "meals": meals}

    async def create_plan(self, draft: PlanDraft) -> str | None:
        """Validate a draft and insert it. Nothing is sent when validation fails.

        Returns the new plan id, when the store reports one.
        """
        try:
            row = self.validate(draft)
        except ValidationError as e:
            logger.warning(f"Rejected plan draft: {e.message}")
            raise

        try:
            created = await self.store.insert(MEAL_PLANS, row)
        except StoreError as e:
            logger.warning(f"Creating plan {row['name']!r} failed: {e.message}")
            raise MutationError.from_store_error(e) from e

        plan_id = created.get("id")
        logger.info(f"Created plan {plan_id} ({row['name']})")
        return str(plan_id) if plan_id is not None else None

    async def delete_plan(self, plan_id: str, confirmed: bool = False) -> int:
        """Delete a plan once the operator has confirmed.

        Assignments are not cleaned up here. Whether the store rejects the
        delete or leaves them dangling is its own referential policy; a
        rejection surfaces as MutationError and the plan stays in place.
        """
        if not confirmed:
            raise ConfirmationRequiredError(f"Deleting plan {plan_id} must be confirmed")

        try:
            removed = await self.store.delete(MEAL_PLANS, {"id": plan_id})
        except StoreError as e:
            logger.warning(f"Deleting plan {plan_id} failed: {e.message}")
            raise MutationError.from_store_error(e) from e

        logger.info(f"Deleted plan {plan_id} ({removed} row(s))")
        return removed
