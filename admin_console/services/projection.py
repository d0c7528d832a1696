"""Search and sort over the plan list before display."""

from collections.abc import Callable, Sequence
from enum import StrEnum

from admin_console.schemas.plan import PlanView


class PlanSort(StrEnum):
    """Orderings offered by the plan list."""

    NEWEST = "newest"
    CALORIES_HIGH = "calories-high"
    PROTEIN_HIGH = "protein-high"
    MEMBERS = "members"


_SORT_KEYS: dict[PlanSort, Callable[[PlanView], int]] = {
    PlanSort.CALORIES_HIGH: lambda plan: plan.daily_calorie_target,
    PlanSort.PROTEIN_HIGH: lambda plan: plan.protein_target_grams,
    PlanSort.MEMBERS: lambda plan: plan.member_count,
}


def filter_plans(plans: Sequence[PlanView], search_text: str = "") -> list[PlanView]:
    """Keep plans whose name contains search_text, ignoring case."""
    needle = search_text.casefold()
    if not needle:
        return list(plans)
    return [plan for plan in plans if needle in plan.name.casefold()]


def sort_plans(plans: Sequence[PlanView], sort: PlanSort = PlanSort.NEWEST) -> list[PlanView]:
    """Sort plans descending by the chosen key. NEWEST keeps store order."""
    key = _SORT_KEYS.get(sort)
    if key is None:
        return list(plans)
    return sorted(plans, key=key, reverse=True)


def project_plans(
    plans: Sequence[PlanView],
    search_text: str = "",
    sort: PlanSort | None = None,
) -> list[PlanView]:
    """Apply the search filter, then the optional sort."""
    visible = filter_plans(plans, search_text)
    if sort is not None:
        visible = sort_plans(visible, sort)
    return visible
