"""FastAPI dependencies and result mapping for the console API."""

from fastapi import HTTPException, Request, status

from admin_console.schemas.dashboard import OperationResponse
from admin_console.services.dashboard_controller import (
    DashboardController,
    OperationOutcome,
    OperationResult,
)


def get_controller(request: Request) -> DashboardController:
    """Get the dashboard controller created at startup."""
    return request.app.state.controller


def raise_for_result(result: OperationResult) -> None:
    """Turn a failed operation into the matching HTTP error."""
    if result.outcome == OperationOutcome.VALIDATION_FAILED:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": result.message, "errors": result.errors},
        )
    if result.outcome == OperationOutcome.CONFIRMATION_REQUIRED:
        raise HTTPException(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail=result.message
        )
    if result.outcome == OperationOutcome.QUERY_FAILED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.message
        )
    if result.outcome == OperationOutcome.MUTATION_FAILED:
        raise HTTPException(
            status_code=(
                status.HTTP_409_CONFLICT
                if result.constraint_violation
                else status.HTTP_502_BAD_GATEWAY
            ),
            detail=result.message,
        )


def to_response(result: OperationResult) -> OperationResponse:
    """Raise for failures, otherwise describe the successful operation."""
    raise_for_result(result)
    return OperationResponse(
        outcome=result.outcome,
        message=result.message,
        errors=result.errors,
        resource_id=result.resource_id,
        refreshed=result.refreshed,
    )
