"""
Tests for expense endpoints.
"""
import pytest


@pytest.fixture
def group(register, make_trip, join):
    alice = register("alice")
    bob = register("bob")
    trip = make_trip(alice)
    join(bob, trip["id"])
    return alice, bob, trip


def test_create_expense_defaults_to_current_user(client, group):
    alice, _, trip = group
    response = client.post(
        f"/api/expenses/{trip['id']}",
        json={"description": "Airport taxi", "amount": "1200.50", "date": "2030-01-10"},
        headers=alice["headers"]
    )
    assert response.status_code == 201
    expense = response.json()
    assert expense["payer_id"] == alice["id"]
    assert expense["payer_username"] == "alice"
    assert expense["amount"] == "1200.50"
    assert expense["base_currency"] == "TWD"


def test_create_expense_for_another_member(client, group):
    alice, bob, trip = group
    expense = client.post(
        f"/api/expenses/{trip['id']}",
        json={"description": "Groceries", "amount": 300, "payer_id": bob["id"]},
        headers=alice["headers"]
    ).json()
    assert expense["payer_id"] == bob["id"]


def test_payer_must_be_member(client, register, group):
    alice, _, trip = group
    outsider = register("outsider")
    response = client.post(
        f"/api/expenses/{trip['id']}",
        json={"description": "Nope", "amount": 10, "payer_id": outsider["id"]},
        headers=alice["headers"]
    )
    assert response.status_code == 422


@pytest.mark.parametrize("amount", [0, -5, "abc"])
def test_invalid_amount(client, group, amount):
    alice, _, trip = group
    response = client.post(
        f"/api/expenses/{trip['id']}",
        json={"description": "Bad", "amount": amount},
        headers=alice["headers"]
    )
    assert response.status_code == 422


def test_list_newest_first(client, group):
    alice, _, trip = group
    url = f"/api/expenses/{trip['id']}"
    client.post(url, json={"description": "Day 1", "amount": 10, "date": "2030-01-10"}, headers=alice["headers"])
    client.post(url, json={"description": "Day 3", "amount": 10, "date": "2030-01-12"}, headers=alice["headers"])
    client.post(url, json={"description": "Day 2", "amount": 10, "date": "2030-01-11"}, headers=alice["headers"])

    expenses = client.get(url, headers=alice["headers"]).json()
    assert [e["description"] for e in expenses] == ["Day 3", "Day 2", "Day 1"]


def test_update_expense(client, group):
    alice, bob, trip = group
    url = f"/api/expenses/{trip['id']}"
    expense = client.post(url, json={"description": "Dinner", "amount": 100}, headers=alice["headers"]).json()

    response = client.patch(
        f"{url}/{expense['id']}", json={"amount": "150.25", "payer_id": bob["id"]}, headers=bob["headers"]
    )
    assert response.status_code == 200
    assert response.json()["amount"] == "150.25"
    assert response.json()["payer_username"] == "bob"
    assert response.json()["description"] == "Dinner"


def test_delete_expense(client, group):
    alice, _, trip = group
    url = f"/api/expenses/{trip['id']}"
    expense = client.post(url, json={"description": "Oops", "amount": 1}, headers=alice["headers"]).json()

    assert client.delete(f"{url}/{expense['id']}", headers=alice["headers"]).status_code == 200
    assert client.get(url, headers=alice["headers"]).json() == []
    assert client.delete(f"{url}/{expense['id']}", headers=alice["headers"]).status_code == 404
