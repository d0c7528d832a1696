"""Fan-out fetch of everything one dashboard refresh needs."""

import asyncio
import logging
from dataclasses import dataclass

from pydantic import BaseModel

from admin_console.errors import RemoteQueryError
from admin_console.schemas.assignment import AssignmentRow
from admin_console.schemas.logs import NutritionLogRow, WaterLogRow
from admin_console.schemas.plan import PlanRow
from admin_console.schemas.profile import ProfileRow
from admin_console.services.store import (
    MEAL_PLANS,
    NUTRITION_LOGS,
    PROFILES,
    RECIPES,
    USER_MEAL_PLANS,
    WATER_INTAKE,
    RemoteStore,
)

logger = logging.getLogger(__name__)

SYNC_ERROR_MESSAGE = "Database connection unstable."

ROW_SCHEMAS: dict[str, type[BaseModel]] = {
    MEAL_PLANS: PlanRow,
    PROFILES: ProfileRow,
    USER_MEAL_PLANS: AssignmentRow,
    NUTRITION_LOGS: NutritionLogRow,
    WATER_INTAKE: WaterLogRow,
}


@dataclass(frozen=True)
class DashboardSources:
    """Raw results of one refresh, handed on as a single unit."""

    plans: tuple[PlanRow, ...]
    profiles: tuple[ProfileRow, ...]
    assignments: tuple[AssignmentRow, ...]
    nutrition_logs: tuple[NutritionLogRow, ...]
    water_logs: tuple[WaterLogRow, ...]
    recipe_count: int


async def fetch_dashboard_sources(store: RemoteStore) -> DashboardSources:
    """Issue the six dashboard reads together and wait for all of them.

    Raises:
        RemoteQueryError: if any read fails or returns rows that do not fit
            their schema. Nothing is returned in that case, so callers never
            see a partial result.
    """
    reads = {
        MEAL_PLANS: store.select(
            MEAL_PLANS, PlanRow.COLUMNS, order_by="created_at", descending=True
        ),
        PROFILES: store.select(PROFILES, ProfileRow.COLUMNS),
        USER_MEAL_PLANS: store.select(USER_MEAL_PLANS, AssignmentRow.COLUMNS),
        NUTRITION_LOGS: store.select(NUTRITION_LOGS, ("calories",)),
        WATER_INTAKE: store.select(WATER_INTAKE, ("amount_ml",)),
        RECIPES: store.count(RECIPES),
    }
    results = await asyncio.gather(*reads.values(), return_exceptions=True)

    parsed: dict[str, object] = {}
    failures: dict[str, Exception] = {}
    for relation, result in zip(reads, results, strict=True):
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
        if isinstance(result, Exception):
            failures[relation] = result
            continue
        try:
            parsed[relation] = _parse(relation, result)
        except (TypeError, ValueError) as e:  # pydantic.ValidationError is a ValueError
            failures[relation] = e

    if failures:
        for relation, error in failures.items():
            logger.error(f"Dashboard read of {relation} failed: {error}")
        raise RemoteQueryError(
            SYNC_ERROR_MESSAGE, relations=list(failures)
        ) from next(iter(failures.values()))

    return DashboardSources(
        plans=parsed[MEAL_PLANS],
        profiles=parsed[PROFILES],
        assignments=parsed[USER_MEAL_PLANS],
        nutrition_logs=parsed[NUTRITION_LOGS],
        water_logs=parsed[WATER_INTAKE],
        recipe_count=parsed[RECIPES],
    )


def _parse(relation: str, result):
    if relation == RECIPES:
        return int(result or 0)
    schema = ROW_SCHEMAS[relation]
    return tuple(schema.model_validate(row) for row in result or [])
