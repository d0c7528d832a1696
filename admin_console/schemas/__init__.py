"""Pydantic schemas for store rows, view models and API payloads."""

from admin_console.schemas.assignment import AssignmentRequest, AssignmentRow
from admin_console.schemas.dashboard import DashboardMetrics, DashboardResponse, OperationResponse
from admin_console.schemas.logs import NutritionLogRow, WaterLogRow
from admin_console.schemas.plan import PlanDraft, PlanResponse, PlanRow, PlanView
from admin_console.schemas.profile import ProfileRow, UserView

__all__ = [
    "PlanRow",
    "PlanView",
    "PlanDraft",
    "PlanResponse",
    "ProfileRow",
    "UserView",
    "AssignmentRow",
    "AssignmentRequest",
    "NutritionLogRow",
    "WaterLogRow",
    "DashboardMetrics",
    "DashboardResponse",
    "OperationResponse",
]
