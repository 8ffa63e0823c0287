"""
Tests for expense endpoints.
"""
from decimal import Decimal

import pytest


@pytest.fixture
def roster(client):
    for name in ["Alice", "Bob", "Charlie"]:
        client.post("/api/people", json={"name": name})
    return ["Alice", "Bob", "Charlie"]


def test_create_equal_expense(client, roster):
    """Test expense creation with an equal split."""
    response = client.post(
        "/api/expenses",
        json={
            "description": "  Dinner   out ",
            "amount": "60",
            "date": "2024-05-01",
            "paid_by": "Alice",
            "split_between": roster
        }
    )
    assert response.status_code == 201
    data = response.json()
    assert data["description"] == "Dinner out"
    assert data["split_mode"] == "equal"
    assert data["split_between"] == roster
    assert data["custom_amounts"] is None
    assert [(s["person"], Decimal(s["amount"])) for s in data["split"]] == [
        ("Alice", Decimal("20")), ("Bob", Decimal("20")), ("Charlie", Decimal("20"))
    ]


def test_create_custom_expense(client, roster):
    """Custom amounts for non-sharers are dropped."""
    response = client.post(
        "/api/expenses",
        json={
            "description": "Groceries",
            "amount": "100",
            "paid_by": "Bob",
            "split_mode": "custom",
            "split_between": ["Alice", "Bob"],
            "custom_amounts": {"Alice": "40", "Bob": "60", "Charlie": "5"}
        }
    )
    assert response.status_code == 201
    data = response.json()
    assert set(data["custom_amounts"]) == {"Alice", "Bob"}
    assert [(s["person"], Decimal(s["amount"])) for s in data["split"]] == [
        ("Alice", Decimal("40")), ("Bob", Decimal("60"))
    ]


@pytest.mark.parametrize("payload", [
    {"description": " ", "amount": "10", "paid_by": "Alice", "split_between": ["Alice"]},
    {"description": "Taxi", "amount": "0", "paid_by": "Alice", "split_between": ["Alice"]},
    {"description": "Taxi", "amount": "-5", "paid_by": "Alice", "split_between": ["Alice"]},
    {"description": "Taxi", "amount": "10", "paid_by": "", "split_between": ["Alice"]},
    {"description": "Taxi", "amount": "10", "paid_by": "Alice", "split_between": []},
    {"description": "Taxi", "amount": "10", "paid_by": "Alice", "split_between": ["Bob", "Bob"]},
])
def test_create_expense_invalid_form(client, roster, payload):
    response = client.post("/api/expenses", json=payload)
    assert response.status_code == 422


def test_custom_amounts_must_match_total(client, roster):
    response = client.post(
        "/api/expenses",
        json={
            "description": "Tickets",
            "amount": "50",
            "paid_by": "Alice",
            "split_mode": "custom",
            "split_between": ["Alice", "Bob"],
            "custom_amounts": {"Alice": "20", "Bob": "20"}
        }
    )
    assert response.status_code == 422
    assert "Custom amounts must total 50.00" in response.text


def test_custom_amounts_within_a_cent_are_accepted(client, roster):
    response = client.post(
        "/api/expenses",
        json={
            "description": "Tickets",
            "amount": "10",
            "paid_by": "Alice",
            "split_mode": "custom",
            "split_between": ["Alice", "Bob", "Charlie"],
            "custom_amounts": {"Alice": "3.33", "Bob": "3.33", "Charlie": "3.33"}
        }
    )
    assert response.status_code == 201


def test_create_expense_unknown_person(client, roster):
    response = client.post(
        "/api/expenses",
        json={"description": "Taxi", "amount": "10", "paid_by": "Mallory", "split_between": ["Alice"]}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown payer: Mallory"

    response = client.post(
        "/api/expenses",
        json={"description": "Taxi", "amount": "10", "paid_by": "Alice", "split_between": ["Alice", "Zed"]}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown participants: Zed"


def test_list_and_get_expenses(client, roster):
    for description in ["First", "Second"]:
        client.post(
            "/api/expenses",
            json={"description": description, "amount": "9", "paid_by": "Alice", "split_between": roster}
        )

    response = client.get("/api/expenses")
    assert response.status_code == 200
    expenses = response.json()
    assert [e["description"] for e in expenses] == ["First", "Second"]

    response = client.get(f"/api/expenses/{expenses[1]['id']}")
    assert response.status_code == 200
    assert response.json()["description"] == "Second"


def test_get_missing_expense(client):
    assert client.get("/api/expenses/999").status_code == 404


def test_delete_expense(client, roster):
    """Test expense deletion."""
    created = client.post(
        "/api/expenses",
        json={"description": "Taxi", "amount": "10", "paid_by": "Alice", "split_between": roster}
    ).json()

    response = client.delete(f"/api/expenses/{created['id']}")
    assert response.status_code == 204
    assert client.get("/api/expenses").json() == []
    assert client.delete(f"/api/expenses/{created['id']}").status_code == 404


def test_custom_amounts_finer_than_cents_are_rejected(client):
    """Shares that storage would round must not pass validation."""
    people = [f"P{i}" for i in range(10)]
    for name in people:
        client.post("/api/people", json={"name": name})

    response = client.post(
        "/api/expenses",
        json={
            "description": "Snacks",
            "amount": "10.05",
            "paid_by": "P0",
            "split_mode": "custom",
            "split_between": people,
            "custom_amounts": {name: "1.0049" for name in people}
        }
    )
    assert response.status_code == 422
    assert "at most 2 decimal places" in response.text

    response = client.post(
        "/api/expenses",
        json={"description": "Snacks", "amount": "10.005", "paid_by": "P0", "split_between": people}
    )
    assert response.status_code == 422

    assert client.get("/api/expenses").json() == []


def test_stored_custom_expense_keeps_group_balanced(client, roster):
    response = client.post(
        "/api/expenses",
        json={
            "description": "Hotel",
            "amount": "10.05",
            "paid_by": "Alice",
            "split_mode": "custom",
            "split_between": roster,
            "custom_amounts": {"Alice": "3.35", "Bob": "3.35", "Charlie": "3.35"}
        }
    )
    assert response.status_code == 201

    balances = client.get("/api/balances").json()["balances"]
    assert sum(Decimal(b["net"]) for b in balances) == 0


def test_names_are_normalized_like_the_roster(client):
    """Payer, sharer and custom amount names match the roster's spelling."""
    client.post("/api/people", json={"name": "Alice  Smith"})
    client.post("/api/people", json={"name": "Bob"})

    response = client.post(
        "/api/expenses",
        json={
            "description": "Taxi",
            "amount": "10",
            "paid_by": "Alice  Smith",
            "split_mode": "custom",
            "split_between": [" Alice   Smith", "Bob "],
            "custom_amounts": {"Alice  Smith ": "4", " Bob": "6"}
        }
    )
    assert response.status_code == 201
    data = response.json()
    assert data["paid_by"] == "Alice Smith"
    assert data["split_between"] == ["Alice Smith", "Bob"]
    assert {name: Decimal(value) for name, value in data["custom_amounts"].items()} == {
        "Alice Smith": Decimal("4"), "Bob": Decimal("6")
    }


def test_duplicate_sharers_after_normalizing(client, roster):
    response = client.post(
        "/api/expenses",
        json={"description": "Taxi", "amount": "10", "paid_by": "Alice", "split_between": ["Bob", "Bob "]}
    )
    assert response.status_code == 422
    assert "only be selected once" in response.text
