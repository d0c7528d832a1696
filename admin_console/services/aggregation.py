"""Global dashboard statistics derived from raw log rows."""

import math
from collections.abc import Sequence

from admin_console.schemas.dashboard import DashboardMetrics
from admin_console.schemas.logs import NutritionLogRow, WaterLogRow

DEFAULT_HYDRATION_TARGET_ML = 3000


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def average_calories(logs: Sequence[NutritionLogRow]) -> int:
    """Mean calories per nutrition log row, or 0 when there are no rows."""
    if not logs:
        return 0
    return round_half_up(sum(log.calories for log in logs) / len(logs))


def hydration_percent(
    logs: Sequence[WaterLogRow], target_ml: int = DEFAULT_HYDRATION_TARGET_ML
) -> int:
    """Mean water intake as a percentage of the daily target, capped at 100."""
    if not logs or target_ml <= 0:
        return 0
    average_ml = sum(log.amount_ml for log in logs) / len(logs)
    return min(100, round_half_up(average_ml / target_ml * 100))


def build_metrics(
    plan_count: int,
    recipe_count: int,
    nutrition_logs: Sequence[NutritionLogRow],
    water_logs: Sequence[WaterLogRow],
    hydration_target_ml: int = DEFAULT_HYDRATION_TARGET_ML,
) -> DashboardMetrics:
    return DashboardMetrics(
        plan_count=plan_count,
        recipe_count=recipe_count,
        avg_calories=average_calories(nutrition_logs),
        hydration_percent=hydration_percent(water_logs, hydration_target_ml),
    )
