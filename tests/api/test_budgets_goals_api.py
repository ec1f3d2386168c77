"""
API tests for budget and savings goal endpoints.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def setup(client: TestClient) -> dict:
    """An account, an expense category and an income category."""
    account = client.post("/accounts", json={"name": "Checking", "opening_balance": "1000"}).json()
    food = client.post("/categories", json={"name": "Food", "category_type": "EXPENSE"}).json()
    pay = client.post("/categories", json={"name": "Pay", "category_type": "INCOME"}).json()
    return {"account": account["account_id"], "food": food["category_id"], "pay": pay["category_id"]}


# =============================================================================
# BUDGET TESTS
# =============================================================================


class TestBudgetsAPI:
    """Tests for /budgets."""

    def test_create_and_progress(self, client: TestClient, setup: dict):
        """
        GIVEN a monthly food budget of 200.00 for this month
        WHEN 250.00 is spent on food this month
        THEN progress is capped at 100% and the budget is exceeded
        """
        today = date.today()
        created = client.post("/budgets", json={
            "category_id": setup["food"],
            "amount": "200.00",
            "period": "monthly",
            "start_date": today.replace(day=1).isoformat(),
        })
        assert created.status_code == 201
        budget = created.json()
        assert budget["end_date"] is not None

        client.post("/transactions", json={
            "type": "EXPENSE",
            "account_id": setup["account"],
            "category_id": setup["food"],
            "amount": "250.00",
            "description": "Feast",
            "txn_date": today.isoformat(),
        })

        progress = client.get(f"/budgets/{budget['budget_id']}/progress").json()

        assert Decimal(progress["spent"]) == Decimal("250.00")
        assert Decimal(progress["percentage"]) == Decimal("100.00")
        assert Decimal(progress["remaining"]) == Decimal("0")
        assert progress["is_exceeded"] is True
        assert progress["days_remaining"] >= 0

    def test_income_category_is_400(self, client: TestClient, setup: dict):
        response = client.post("/budgets", json={
            "category_id": setup["pay"],
            "amount": "100.00",
            "period": "weekly",
            "start_date": "2024-06-03",
        })

        assert response.status_code == 400

    def test_unknown_period_is_422(self, client: TestClient, setup: dict):
        response = client.post("/budgets", json={
            "category_id": setup["food"],
            "amount": "100.00",
            "period": "daily",
            "start_date": "2024-06-03",
        })

        assert response.status_code == 422

    def test_list_with_progress(self, client: TestClient, setup: dict):
        client.post("/budgets", json={
            "category_id": setup["food"],
            "amount": "100.00",
            "period": "yearly",
            "start_date": "2024-01-01",
        })

        data = client.get("/budgets").json()

        assert data["count"] == 1
        assert data["budgets"][0]["window_end"] == "2024-12-31"

    def test_unknown_budget_is_404(self, client: TestClient):
        assert client.get("/budgets/missing/progress").status_code == 404

    def test_update_budget(self, client: TestClient, setup: dict):
        """
        GIVEN a monthly June budget
        WHEN I PATCH its period to weekly and its amount
        THEN the end date is re-derived to the Saturday of the start week
        """
        budget = client.post("/budgets", json={
            "category_id": setup["food"],
            "amount": "100.00",
            "period": "monthly",
            "start_date": "2024-06-05",
        }).json()

        response = client.patch(f"/budgets/{budget['budget_id']}", json={"period": "weekly", "amount": "40.00"})

        assert response.status_code == 200
        data = response.json()
        assert data["end_date"] == "2024-06-08"
        assert Decimal(data["amount"]) == Decimal("40.00")

    def test_update_to_income_category_is_400(self, client: TestClient, setup: dict):
        budget = client.post("/budgets", json={
            "category_id": setup["food"],
            "amount": "100.00",
            "period": "monthly",
            "start_date": "2024-06-01",
        }).json()

        response = client.patch(f"/budgets/{budget['budget_id']}", json={"category_id": setup["pay"]})

        assert response.status_code == 400

    def test_null_end_date_clears_it(self, client: TestClient, setup: dict):
        budget = client.post("/budgets", json={
            "category_id": setup["food"],
            "amount": "100.00",
            "period": "monthly",
            "start_date": "2024-06-01",
        }).json()

        data = client.patch(f"/budgets/{budget['budget_id']}", json={"end_date": None}).json()
        progress = client.get(f"/budgets/{budget['budget_id']}/progress").json()

        assert data["end_date"] is None
        assert progress["window_end"] == "2024-06-30"

    def test_delete_budget(self, client: TestClient, setup: dict):
        budget = client.post("/budgets", json={
            "category_id": setup["food"],
            "amount": "100.00",
            "period": "yearly",
            "start_date": "2024-01-01",
        }).json()

        assert client.delete(f"/budgets/{budget['budget_id']}").status_code == 204
        assert client.get(f"/budgets/{budget['budget_id']}/progress").status_code == 404
        assert client.delete(f"/budgets/{budget['budget_id']}").status_code == 404


# =============================================================================
# SAVINGS GOAL TESTS
# =============================================================================


class TestSavingsGoalsAPI:
    """Tests for /savings-goals."""

    @pytest.fixture
    def goal(self, client: TestClient) -> dict:
        return client.post("/savings-goals", json={
            "name": "Bike",
            "target_amount": "500.00",
            "deadline": (date.today() + timedelta(days=90)).isoformat(),
        }).json()

    def test_contribute_until_completed(self, client: TestClient, goal: dict):
        """
        GIVEN a 500.00 goal
        WHEN I contribute 300.00 and then 250.00
        THEN the goal completes at 550.00 and a further contribution is rejected
        """
        first = client.post(f"/savings-goals/{goal['goal_id']}/contribute", json={"amount": "300.00"}).json()
        assert Decimal(first["remaining_amount"]) == Decimal("200.00")
        assert first["is_completed"] is False

        second = client.post(f"/savings-goals/{goal['goal_id']}/contribute", json={"amount": "250.00"}).json()
        assert Decimal(second["current_amount"]) == Decimal("550.00")
        assert second["is_completed"] is True

        third = client.post(f"/savings-goals/{goal['goal_id']}/contribute", json={"amount": "1.00"})
        assert third.status_code == 400
        assert third.json()["error"] == "GOAL_COMPLETED"

    def test_zero_contribution_is_422(self, client: TestClient, goal: dict):
        response = client.post(f"/savings-goals/{goal['goal_id']}/contribute", json={"amount": "0"})

        assert response.status_code == 422

    def test_list_by_status(self, client: TestClient, goal: dict):
        client.post("/savings-goals", json={"name": "Done", "target_amount": "10", "current_amount": "10"})

        active = client.get("/savings-goals", params={"status": "active"}).json()
        completed = client.get("/savings-goals", params={"status": "completed"}).json()

        assert [g["name"] for g in active["goals"]] == ["Bike"]
        assert [g["name"] for g in completed["goals"]] == ["Done"]

    def test_other_owner_is_404(self, client: TestClient, goal: dict):
        response = client.get(f"/savings-goals/{goal['goal_id']}", headers={"X-Owner-Id": "other"})

        assert response.status_code == 404

    def test_raise_target_reopens_goal(self, client: TestClient, goal: dict):
        """
        GIVEN a completed 500.00 goal
        WHEN I PATCH its target to 800.00
        THEN it is no longer completed and takes contributions again
        """
        client.post(f"/savings-goals/{goal['goal_id']}/contribute", json={"amount": "500.00"})

        edited = client.patch(f"/savings-goals/{goal['goal_id']}", json={"target_amount": "800.00"})

        assert edited.status_code == 200
        assert edited.json()["is_completed"] is False
        assert Decimal(edited.json()["remaining_amount"]) == Decimal("300.00")
        again = client.post(f"/savings-goals/{goal['goal_id']}/contribute", json={"amount": "50.00"})
        assert again.status_code == 200
        assert Decimal(again.json()["current_amount"]) == Decimal("550.00")

    def test_null_deadline_clears_it(self, client: TestClient, goal: dict):
        data = client.patch(f"/savings-goals/{goal['goal_id']}", json={"deadline": None}).json()

        assert data["deadline"] is None
        assert data["name"] == "Bike"

    def test_invalid_edit_is_422(self, client: TestClient, goal: dict):
        response = client.patch(f"/savings-goals/{goal['goal_id']}", json={"target_amount": "0"})

        assert response.status_code == 422

    def test_delete_goal(self, client: TestClient, goal: dict):
        assert client.delete(f"/savings-goals/{goal['goal_id']}").status_code == 204
        assert client.get(f"/savings-goals/{goal['goal_id']}").status_code == 404
