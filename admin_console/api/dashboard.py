"""Dashboard API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from admin_console.api.dependencies import get_controller, raise_for_result
from admin_console.schemas.dashboard import DashboardResponse
from admin_console.schemas.plan import PlanResponse
from admin_console.services.dashboard_controller import DashboardController
from admin_console.services.projection import PlanSort

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


def build_dashboard_response(
    controller: DashboardController, search: str = "", sort: PlanSort | None = None
) -> DashboardResponse:
    """Project the controller's current snapshot for display."""
    state = controller.state
    return DashboardResponse(
        plans=[PlanResponse.from_view(plan) for plan in controller.visible_plans(search, sort)],
        users=list(state.users),
        metrics=state.metrics,
        is_loading=controller.is_loading,
        refreshed_at=state.refreshed_at,
        sync_error=controller.sync_error,
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    controller: Annotated[DashboardController, Depends(get_controller)],
    search: Annotated[str, Query(max_length=100)] = "",
    sort: PlanSort | None = None,
):
    """Get the dashboard, loading it first if it has never been loaded."""
    if not controller.has_refreshed:
        await controller.refresh()
    return build_dashboard_response(controller, search, sort)


@router.post("/refresh", response_model=DashboardResponse)
async def refresh_dashboard(
    controller: Annotated[DashboardController, Depends(get_controller)],
    search: Annotated[str, Query(max_length=100)] = "",
    sort: PlanSort | None = None,
):
    """Re-read every relation and rebuild the dashboard."""
    result = await controller.refresh()
    raise_for_result(result)
    return build_dashboard_response(controller, search, sort)
