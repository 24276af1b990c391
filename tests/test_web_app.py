"""Mini README: Tests for the FastAPI JSON interface.

A real ``BudgetStore`` sits behind the application so these tests exercise
request parsing, error translation and response shapes end to end.
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from budgetbuddy.interface import create_application
from budgetbuddy.ledger import BudgetStore, color_for_index


@pytest.fixture()
def client(clock) -> Iterator[TestClient]:
    store = BudgetStore(initial_budget=500.0, clock=clock)
    with TestClient(create_application(store)) as test_client:
        yield test_client


def _add_category(client: TestClient, name: str) -> str:
    response = client.post("/categories", json={"name": name})
    assert response.status_code == 201
    return response.json()["category_id"]


def test_summary_reflects_spending(client: TestClient) -> None:
    food = _add_category(client, "Food")
    rent = _add_category(client, "Rent")
    for payload in (
        {"title": "Lunch", "amount": -20, "category_id": food, "occurred_on": "2024-05-01"},
        {"title": "Rent", "amount": -300, "category_id": rent, "occurred_on": "2024-05-01"},
        {"title": "Salary", "amount": 1000, "category_id": rent, "occurred_on": "2024-05-02"},
    ):
        assert client.post("/transactions", json=payload).status_code == 201

    body = client.get("/summary").json()

    assert body["monthly_budget"] == pytest.approx(500.0)
    assert body["total_spent"] == pytest.approx(320.0)
    assert body["remaining"] == pytest.approx(180.0)
    assert [entry["category"]["name"] for entry in body["breakdown"]] == ["Rent", "Food"]


def test_duplicate_category_returns_reason(client: TestClient) -> None:
    _add_category(client, "Food")

    response = client.post("/categories", json={"name": "FOOD"})

    assert response.status_code == 422
    assert response.json()["detail"]["reason"] == "duplicate_name"


def test_palette_reports_next_color(client: TestClient) -> None:
    _add_category(client, "Food")

    body = client.get("/palette").json()

    assert len(body["colors"]) == 30
    assert body["next_color"] == color_for_index(1)


def test_category_delete_warns_then_cascades(client: TestClient) -> None:
    food = _add_category(client, "Food")
    client.post(
        "/transactions",
        json={"title": "Lunch", "amount": -20, "category_id": food, "occurred_on": "2024-05-01"},
    )

    assert client.get(f"/categories/{food}/transaction-count").json()["transaction_count"] == 1
    deleted = client.delete(f"/categories/{food}")

    assert deleted.json() == {"category_id": food, "transactions_removed": 1}
    assert client.get("/transactions").json()["transactions"] == []
    assert client.get(f"/categories/{food}").status_code == 404
    assert client.delete(f"/categories/{food}").status_code == 404


def test_transaction_patch_and_grouping(client: TestClient) -> None:
    food = _add_category(client, "Food")
    created = client.post(
        "/transactions",
        json={"title": "Lunch", "amount": -20, "category_id": food, "occurred_on": "2024-05-01"},
    ).json()

    patched = client.patch(
        f"/transactions/{created['transaction_id']}",
        json={"amount": -25.5, "occurred_on": "2024-05-03"},
    )

    assert patched.status_code == 200
    assert patched.json()["amount"] == pytest.approx(-25.5)
    assert patched.json()["created_at"] == created["created_at"]
    groups = client.get("/transactions/grouped").json()["groups"]
    assert [group["occurred_on"] for group in groups] == ["2024-05-03"]
    by_date = client.get("/transactions", params={"occurred_on": "2024-05-01"}).json()
    assert by_date["transactions"] == []


def test_unknown_category_and_bad_title_are_rejected(client: TestClient) -> None:
    missing = client.post(
        "/transactions",
        json={"title": "Lunch", "amount": -5, "category_id": "cat_9999", "occurred_on": "2024-05-01"},
    )
    food = _add_category(client, "Food")
    blank = client.post(
        "/transactions",
        json={"title": "   ", "amount": -5, "category_id": food, "occurred_on": "2024-05-01"},
    )

    assert missing.status_code == 404
    assert blank.status_code == 422
    assert blank.json()["detail"]["reason"] == "empty_title"


def test_set_budget(client: TestClient) -> None:
    response = client.put("/budget", json={"amount": 1234.5})

    assert response.json() == {"monthly_budget": 1234.5}
    assert client.get("/summary").json()["monthly_budget"] == pytest.approx(1234.5)


def test_null_category_patch_returns_422(client: TestClient) -> None:
    food = _add_category(client, "Food")
    created = client.post(
        "/transactions",
        json={"title": "Lunch", "amount": -20, "category_id": food, "occurred_on": "2024-05-01"},
    ).json()

    response = client.patch(f"/transactions/{created['transaction_id']}", json={"category_id": None})

    assert response.status_code == 422
    assert response.json()["detail"]["reason"] == "invalid_category"
