"""Tests for the console HTTP API."""

import pytest
from fastapi.testclient import TestClient

from admin_console.api.dependencies import get_controller
from admin_console.main import app
from admin_console.services.dashboard_controller import DashboardController


@pytest.fixture
def flaky_client(flaky_store, settings):
    """Client whose controller reads through the flaky store."""
    controller = DashboardController(flaky_store, settings)
    app.dependency_overrides[get_controller] = lambda: controller
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestDashboard:
    """Tests for reading the dashboard."""

    def test_first_read_loads_dashboard(self, client, make_plan, make_profile, make_assignment):
        plan = make_plan("Vegan Shred", calories=2000)
        user = make_profile("Ada", None)
        make_assignment(user, plan)

        response = client.get("/api/v1/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["plans"][0]["name"] == "Vegan Shred"
        assert data["plans"][0]["member_count"] == 1
        assert data["plans"][0]["short_id"] == plan.id[:8]
        assert data["users"][0]["email"] == "No Email"
        assert data["users"][0]["active_plan_name"] == "Vegan Shred"
        assert data["metrics"]["plan_count"] == 1
        assert data["refreshed_at"] is not None
        assert data["sync_error"] is None
        assert data["is_loading"] is False

    def test_search_and_sort(self, client, make_plan):
        make_plan("Vegan Shred", protein=120)
        make_plan("Lean Bulk", protein=220)
        make_plan("Vegan Bulk", protein=160)

        response = client.get(
            "/api/v1/dashboard", params={"search": "VEGAN", "sort": "protein-high"}
        )

        assert response.status_code == 200
        assert [plan["name"] for plan in response.json()["plans"]] == ["Vegan Bulk", "Vegan Shred"]

    def test_default_order_is_newest_first(self, client, make_plan):
        make_plan("Keto Reset")
        make_plan("Lean Bulk")

        response = client.get("/api/v1/dashboard")

        assert [plan["name"] for plan in response.json()["plans"]] == ["Lean Bulk", "Keto Reset"]

    def test_unknown_sort_is_rejected(self, client):
        response = client.get("/api/v1/dashboard", params={"sort": "alphabetical"})

        assert response.status_code == 422

    def test_refresh_picks_up_new_rows(self, client, make_plan):
        client.get("/api/v1/dashboard")
        make_plan("Lean Bulk")

        response = client.post("/api/v1/dashboard/refresh")

        assert response.status_code == 200
        assert [plan["name"] for plan in response.json()["plans"]] == ["Lean Bulk"]

    def test_failed_refresh_keeps_last_dashboard(self, flaky_client, flaky_store, make_plan):
        make_plan("Vegan Shred")
        assert flaky_client.post("/api/v1/dashboard/refresh").status_code == 200

        flaky_store.failing_reads.add("nutrition_logs")
        response = flaky_client.post("/api/v1/dashboard/refresh")

        assert response.status_code == 503
        assert response.json()["detail"] == "Database connection unstable."

        data = flaky_client.get("/api/v1/dashboard").json()
        assert [plan["name"] for plan in data["plans"]] == ["Vegan Shred"]
        assert data["sync_error"] == "Database connection unstable."


class TestPlans:
    """Tests for creating and deleting plans."""

    def test_create_plan(self, client):
        response = client.post(
            "/api/v1/plans",
            json={
                "name": "Vegan Shred",
                "daily_calorie_target": "2,000 kcal",
                "protein_target_grams": 150,
                "meal_count": "4",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["outcome"] == "success"
        assert data["refreshed"] is True

        plans = client.get("/api/v1/dashboard").json()["plans"]
        assert plans[0]["id"] == data["resource_id"]
        assert plans[0]["daily_calorie_target"] == 2000
        assert plans[0]["meal_count"] == 4

    def test_create_invalid_plan(self, client):
        response = client.post(
            "/api/v1/plans",
            json={"name": "", "daily_calorie_target": 9000, "protein_target_grams": 150},
        )

        assert response.status_code == 422
        errors = response.json()["detail"]["errors"]
        assert set(errors) == {"name", "daily_calorie_target"}

    def test_create_plan_with_oversized_number(self, client):
        response = client.post(
            "/api/v1/plans",
            json={
                "name": "Vegan Shred",
                "daily_calorie_target": "9" * 5000,
                "protein_target_grams": 150,
            },
        )

        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == {
            "daily_calorie_target": "must be between 0 and 5000"
        }

    def test_delete_requires_confirmation(self, client, make_plan):
        plan = make_plan("Vegan Shred")

        response = client.delete(f"/api/v1/plans/{plan.id}")

        assert response.status_code == 428
        assert len(client.get("/api/v1/dashboard").json()["plans"]) == 1

    def test_delete_plan(self, client, make_plan):
        plan = make_plan("Vegan Shred")

        response = client.delete(f"/api/v1/plans/{plan.id}", params={"confirm": "true"})

        assert response.status_code == 200
        assert response.json()["resource_id"] == plan.id
        assert client.get("/api/v1/dashboard").json()["plans"] == []

    def test_delete_assigned_plan_conflicts(self, client, make_plan, make_profile, make_assignment):
        plan = make_plan("Vegan Shred")
        make_assignment(make_profile(), plan)

        response = client.delete(f"/api/v1/plans/{plan.id}", params={"confirm": "true"})

        assert response.status_code == 409


class TestAssignments:
    """Tests for assigning and revoking plans."""

    def test_assign_and_reassign(self, client, make_plan, make_profile):
        first = make_plan("Vegan Shred")
        second = make_plan("Lean Bulk")
        user = make_profile("Ada", "ada@example.com")

        response = client.put(
            "/api/v1/assignments", json={"user_id": user.id, "plan_id": first.id}
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Assignment refreshed successfully."

        client.put("/api/v1/assignments", json={"user_id": user.id, "plan_id": second.id})

        data = client.get("/api/v1/dashboard").json()
        assert data["users"][0]["active_plan_name"] == "Lean Bulk"
        counts = {plan["name"]: plan["member_count"] for plan in data["plans"]}
        assert counts == {"Vegan Shred": 0, "Lean Bulk": 1}

    def test_assign_requires_both_ids(self, client):
        response = client.put("/api/v1/assignments", json={"user_id": "", "plan_id": "p1"})

        assert response.status_code == 422

    def test_revoke(self, client, make_plan, make_profile, make_assignment):
        plan = make_plan("Vegan Shred")
        user = make_profile()
        make_assignment(user, plan)

        response = client.delete(f"/api/v1/assignments/{user.id}/{plan.id}")

        assert response.status_code == 200
        data = client.get("/api/v1/dashboard").json()
        assert data["users"][0]["active_plan_name"] is None
        assert data["plans"][0]["member_count"] == 0
