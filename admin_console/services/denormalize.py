"""Client-side join of plans, profiles and assignments into view models."""

from collections import Counter
from collections.abc import Iterable

from admin_console.schemas.assignment import AssignmentRow
from admin_console.schemas.plan import PlanRow, PlanView
from admin_console.schemas.profile import ProfileRow, UserView


def build_plan_views(
    plans: Iterable[PlanRow], assignments: Iterable[AssignmentRow]
) -> list[PlanView]:
    """Annotate each plan with the number of assignments pointing at it."""
    member_counts = Counter(assignment.plan_id for assignment in assignments)
    return [
        PlanView(**plan.model_dump(), member_count=member_counts.get(plan.id, 0))
        for plan in plans
    ]


def index_assignments_by_user(assignments: Iterable[AssignmentRow]) -> dict[str, AssignmentRow]:
    """Map user id to assignment.

    A user should never have more than one row. If the store returns several
    anyway, the first one in store order wins.
    """
    by_user: dict[str, AssignmentRow] = {}
    for assignment in assignments:
        by_user.setdefault(assignment.user_id, assignment)
    return by_user


def build_user_views(
    profiles: Iterable[ProfileRow],
    assignments: Iterable[AssignmentRow],
    plans: Iterable[PlanRow],
) -> list[UserView]:
    """Annotate each profile with the name of its active plan.

    The name is None when the user has no assignment, or when the assignment
    points at a plan that no longer exists.
    """
    by_user = index_assignments_by_user(assignments)
    plan_names = {plan.id: plan.name for plan in plans}

    users = []
    for profile in profiles:
        assignment = by_user.get(profile.id)
        active_plan_name = plan_names.get(assignment.plan_id) if assignment else None
        users.append(UserView(**profile.model_dump(), active_plan_name=active_plan_name))
    return users
