"""Dashboard and operation result schemas."""

from datetime import datetime

from pydantic import BaseModel

from admin_console.schemas.plan import PlanResponse
from admin_console.schemas.profile import UserView


class DashboardMetrics(BaseModel):
    """Global statistics shown above the plan list."""

    plan_count: int = 0
    recipe_count: int = 0
    avg_calories: int = 0
    hydration_percent: int = 0


class DashboardResponse(BaseModel):
    """Current dashboard after search and sort have been applied."""

    plans: list[PlanResponse]
    users: list[UserView]
    metrics: DashboardMetrics
    is_loading: bool = False
    refreshed_at: datetime | None = None
    sync_error: str | None = None


class OperationResponse(BaseModel):
    """Outcome of a refresh or mutation."""

    outcome: str
    message: str = ""
    errors: dict[str, str] = {}
    resource_id: str | None = None
    refreshed: bool = False
