"""Plan assignment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from admin_console.api.dependencies import get_controller, to_response
from admin_console.schemas.assignment import AssignmentRequest
from admin_console.schemas.dashboard import OperationResponse
from admin_console.services.dashboard_controller import DashboardController

router = APIRouter(prefix="/api/v1/assignments", tags=["assignments"])


@router.put("", response_model=OperationResponse)
async def assign_plan(
    assignment: AssignmentRequest,
    controller: Annotated[DashboardController, Depends(get_controller)],
):
    """Make a plan the user's active plan, replacing any current one."""
    return to_response(await controller.assign(assignment.user_id, assignment.plan_id))


@router.delete("/{user_id}/{plan_id}", response_model=OperationResponse)
async def revoke_plan(
    user_id: str,
    plan_id: str,
    controller: Annotated[DashboardController, Depends(get_controller)],
):
    """Remove a user's assignment to a plan."""
    return to_response(await controller.revoke(user_id, plan_id))
