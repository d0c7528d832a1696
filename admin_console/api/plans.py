"""Meal plan API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from admin_console.api.dependencies import get_controller, to_response
from admin_console.schemas.dashboard import OperationResponse
from admin_console.schemas.plan import PlanDraft
from admin_console.services.dashboard_controller import DashboardController

router = APIRouter(prefix="/api/v1/plans", tags=["plans"])


@router.post("", response_model=OperationResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    draft: PlanDraft,
    controller: Annotated[DashboardController, Depends(get_controller)],
):
    """Create a meal plan."""
    return to_response(await controller.create_plan(draft))


@router.delete("/{plan_id}", response_model=OperationResponse)
async def delete_plan(
    plan_id: str,
    controller: Annotated[DashboardController, Depends(get_controller)],
    confirm: bool = False,
):
    """Delete a meal plan. Requires ?confirm=true."""
    return to_response(await controller.delete_plan(plan_id, confirmed=confirm))
