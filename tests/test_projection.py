"""Tests for plan search and sort."""

import pytest

from admin_console.schemas.plan import PlanView
from admin_console.services.projection import PlanSort, filter_plans, project_plans, sort_plans

PLANS = [
    PlanView(id="p1", name="Vegan Shred", calories=2000, protein=150, member_count=1),
    PlanView(id="p2", name="Lean Bulk", calories=3200, protein=220, member_count=4),
    PlanView(id="p3", name="Vegan Bulk", calories=2800, protein=140, member_count=4),
]


def names(plans):
    return [plan.name for plan in plans]


class TestFilterPlans:
    def test_empty_search_keeps_everything(self):
        assert names(filter_plans(PLANS, "")) == ["Vegan Shred", "Lean Bulk", "Vegan Bulk"]

    def test_case_insensitive_substring(self):
        assert names(filter_plans(PLANS, "vEgAn")) == ["Vegan Shred", "Vegan Bulk"]
        assert names(filter_plans(PLANS, "BULK")) == ["Lean Bulk", "Vegan Bulk"]

    def test_no_match(self):
        assert filter_plans(PLANS, "paleo") == []


class TestSortPlans:
    def test_newest_keeps_store_order(self):
        assert names(sort_plans(PLANS, PlanSort.NEWEST)) == names(PLANS)

    @pytest.mark.parametrize(
        ("sort", "expected"),
        [
            (PlanSort.CALORIES_HIGH, ["Lean Bulk", "Vegan Bulk", "Vegan Shred"]),
            (PlanSort.PROTEIN_HIGH, ["Lean Bulk", "Vegan Shred", "Vegan Bulk"]),
            # Ties keep store order
            (PlanSort.MEMBERS, ["Lean Bulk", "Vegan Bulk", "Vegan Shred"]),
        ],
    )
    def test_descending_sorts(self, sort, expected):
        assert names(sort_plans(PLANS, sort)) == expected


def test_project_filters_then_sorts():
    visible = project_plans(PLANS, "vegan", PlanSort.CALORIES_HIGH)

    assert names(visible) == ["Vegan Bulk", "Vegan Shred"]


def test_project_without_sort_is_filter_only():
    assert names(project_plans(PLANS, "bulk")) == ["Lean Bulk", "Vegan Bulk"]


def test_plan_sort_values():
    assert PlanSort("calories-high") is PlanSort.CALORIES_HIGH
    assert PlanSort.NEWEST == "newest"
