"""Owner of the dashboard state and the boundary of every console operation."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from admin_console.config import Settings, get_settings
from admin_console.errors import (
    ConfirmationRequiredError,
    MutationError,
    RemoteQueryError,
    ValidationError,
)
from admin_console.schemas.dashboard import DashboardMetrics
from admin_console.schemas.plan import PlanDraft, PlanView
from admin_console.schemas.profile import UserView
from admin_console.services.aggregation import build_metrics
from admin_console.services.assignment_service import AssignmentService
from admin_console.services.denormalize import build_plan_views, build_user_views
from admin_console.services.fetch import DashboardSources, fetch_dashboard_sources
from admin_console.services.plan_service import PlanLimits, PlanService
from admin_console.services.projection import PlanSort, project_plans
from admin_console.services.store import RemoteStore

logger = logging.getLogger(__name__)

ASSIGN_SUCCESS_MESSAGE = "Assignment refreshed successfully."


class OperationOutcome(StrEnum):
    """How a console operation ended."""

    SUCCESS = "success"
    DISCARDED = "discarded"
    VALIDATION_FAILED = "validation_failed"
    CONFIRMATION_REQUIRED = "confirmation_required"
    QUERY_FAILED = "query_failed"
    MUTATION_FAILED = "mutation_failed"


@dataclass(frozen=True)
class OperationResult:
    """Structured result returned instead of raising to the presentation layer."""

    outcome: OperationOutcome
    message: str = ""
    errors: dict[str, str] = field(default_factory=dict)
    resource_id: str | None = None
    refreshed: bool = False
    constraint_violation: bool = False

    @property
    def ok(self) -> bool:
        return self.outcome == OperationOutcome.SUCCESS


@dataclass(frozen=True)
class DashboardState:
    """One consistent snapshot of the dashboard. Replaced whole, never edited."""

    plans: tuple[PlanView, ...] = ()
    users: tuple[UserView, ...] = ()
    metrics: DashboardMetrics = field(default_factory=DashboardMetrics)
    refreshed_at: datetime | None = None
    generation: int = 0


EMPTY_STATE = DashboardState()


def build_state(
    sources: DashboardSources, generation: int, hydration_target_ml: int
) -> DashboardState:
    """Join and aggregate one fetch result into a new snapshot."""
    plans = build_plan_views(sources.plans, sources.assignments)
    users = build_user_views(sources.profiles, sources.assignments, sources.plans)
    metrics = build_metrics(
        plan_count=len(plans),
        recipe_count=sources.recipe_count,
        nutrition_logs=sources.nutrition_logs,
        water_logs=sources.water_logs,
        hydration_target_ml=hydration_target_ml,
    )
    return DashboardState(
        plans=tuple(plans),
        users=tuple(users),
        metrics=metrics,
        refreshed_at=datetime.now(UTC),
        generation=generation,
    )


class DashboardController:
    """Refreshes, mutates and projects the dashboard.

    Every refresh takes a new generation number. A refresh only publishes its
    snapshot if no newer refresh has started in the meantime and the
    controller has not been closed; anything else is discarded. Mutations
    never touch the snapshot directly: they write to the store and then run
    a full refresh.
    """

    def __init__(
        self,
        store: RemoteStore,
        settings: Settings | None = None,
        plan_service: PlanService | None = None,
        assignment_service: AssignmentService | None = None,
    ):
        settings = settings or get_settings()
        self.store = store
        self.hydration_target_ml = settings.hydration_target_ml
        self.plan_service = plan_service or PlanService(store, PlanLimits.from_settings(settings))
        self.assignment_service = assignment_service or AssignmentService(store)
        self.sync_error: str | None = None
        self._state = EMPTY_STATE
        self._generation = 0
        self._in_flight = 0
        self._closed = False

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def has_refreshed(self) -> bool:
        return self._state.refreshed_at is not None

    def close(self) -> None:
        """Stop accepting results. Refreshes still in flight will be discarded."""
        self._closed = True

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def visible_plans(self, search_text: str = "", sort: PlanSort | None = None) -> list[PlanView]:
        """Plans of the current snapshot after search and sort."""
        return project_plans(self._state.plans, search_text, sort)

    async def refresh(self) -> OperationResult:
        """Re-read everything and publish a new snapshot.

        On failure the previous snapshot stays in place and sync_error is set.
        """
        if self._closed:
            return OperationResult(OperationOutcome.DISCARDED, "Dashboard is closed")

        self._generation += 1
        generation = self._generation
        self._in_flight += 1
        try:
            sources = await fetch_dashboard_sources(self.store)
        except RemoteQueryError as e:
            if not self._is_current(generation):
                return self._discard(generation)
            self.sync_error = e.message
            return OperationResult(
                OperationOutcome.QUERY_FAILED,
                e.message,
                errors={relation: "read failed" for relation in e.relations},
            )
        finally:
            self._in_flight -= 1

        if not self._is_current(generation):
            return self._discard(generation)

        self._state = build_state(sources, generation, self.hydration_target_ml)
        self.sync_error = None
        logger.info(
            f"Dashboard refreshed (generation {generation}): "
            f"{len(self._state.plans)} plans, {len(self._state.users)} users"
        )
        return OperationResult(OperationOutcome.SUCCESS, "Dashboard refreshed")

    def _discard(self, generation: int) -> OperationResult:
        logger.warning(
            f"Discarding dashboard refresh {generation} "
            f"(latest {self._generation}, closed={self._closed})"
        )
        return OperationResult(OperationOutcome.DISCARDED, "A newer refresh superseded this one")

    async def _mutate(
        self,
        action: Callable[[], Awaitable[Any]],
        success_message: str,
        resource_id: str | None = None,
    ) -> OperationResult:
        """Run a write, convert its errors, and refresh after success."""
        try:
            result = await action()
        except ValidationError as e:
            return OperationResult(OperationOutcome.VALIDATION_FAILED, e.message, errors=e.errors)
        except ConfirmationRequiredError as e:
            return OperationResult(OperationOutcome.CONFIRMATION_REQUIRED, e.message)
        except MutationError as e:
            return OperationResult(
                OperationOutcome.MUTATION_FAILED,
                e.message,
                constraint_violation=e.is_constraint_violation,
            )

        refresh = await self.refresh()
        return OperationResult(
            OperationOutcome.SUCCESS,
            success_message,
            resource_id=resource_id or (result if isinstance(result, str) else None),
            refreshed=refresh.ok,
        )

    async def assign(self, user_id: str, plan_id: str) -> OperationResult:
        return await self._mutate(
            lambda: self.assignment_service.assign(user_id, plan_id),
            ASSIGN_SUCCESS_MESSAGE,
            resource_id=user_id,
        )

    async def revoke(self, user_id: str, plan_id: str) -> OperationResult:
        return await self._mutate(
            lambda: self.assignment_service.revoke(user_id, plan_id),
            "Assignment removed.",
            resource_id=user_id,
        )

    async def create_plan(self, draft: PlanDraft) -> OperationResult:
        return await self._mutate(lambda: self.plan_service.create_plan(draft), "Plan created.")

    async def delete_plan(self, plan_id: str, confirmed: bool = False) -> OperationResult:
        return await self._mutate(
            lambda: self.plan_service.delete_plan(plan_id, confirmed),
            "Plan deleted.",
            resource_id=plan_id,
        )
