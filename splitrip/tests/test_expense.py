"""
Tests for expense endpoints.
"""
from decimal import Decimal


def new_trip(client, headers, name="Cusco"):
    return client.post("/api/trips", json={"name": name}, headers=headers).json()


def test_create_expense_in_settlement_currency(client, register, rate_provider):
    headers = register("owner@example.com")
    response = client.post("/api/expenses", json={"name": "taxi", "amount": "50.00"}, headers=headers)
    assert response.status_code == 201
    body = response.json()
    assert body["currency"] == "BRL"
    assert body["trip_id"] is None
    assert Decimal(body["amount_settlement"]) == Decimal("50.00")
    assert body["conversion_status"] == "identity"
    assert rate_provider.calls == []


def test_create_expense_converts_foreign_currency(client, register):
    headers = register("owner@example.com")
    trip = new_trip(client, headers)
    response = client.post(
        "/api/expenses",
        json={"name": "museum", "amount": "100.00", "currency": "usd", "trip_id": trip["id"]},
        headers=headers
    )
    assert response.status_code == 201
    body = response.json()
    assert body["currency"] == "USD"
    assert Decimal(body["amount_settlement"]) == Decimal("500")
    assert Decimal(body["exchange_rate"]) == Decimal("5")
    assert body["conversion_status"] == "converted"


def test_create_expense_when_rates_unavailable(client, register, rate_provider):
    rate_provider.down = True
    headers = register("owner@example.com")
    response = client.post(
        "/api/expenses",
        json={"name": "museum", "amount": "100.00", "currency": "USD"},
        headers=headers
    )
    assert response.status_code == 201
    body = response.json()
    assert Decimal(body["amount_settlement"]) == Decimal("100.00")
    assert body["exchange_rate"] is None
    assert body["conversion_status"] == "unconverted"


def test_create_expense_validation(client, register):
    headers = register("owner@example.com")
    for payload in (
        {"name": "free", "amount": "0"},
        {"name": "refund", "amount": "-10"},
        {"name": "", "amount": "10"},
        {"name": "odd", "amount": "10", "currency": "DOLLARS"},
        {"amount": "10"},
    ):
        response = client.post("/api/expenses", json=payload, headers=headers)
        assert response.status_code == 400, payload
        assert response.json()["error"] == "validation_error"
    assert client.get("/api/expenses", headers=headers).json() == []


def test_create_expense_on_foreign_trip_rejected(client, register):
    owner = register("owner@example.com")
    stranger = register("stranger@example.com")
    trip = new_trip(client, owner)

    response = client.post(
        "/api/expenses",
        json={"name": "sneaky", "amount": "10", "trip_id": trip["id"]},
        headers=stranger
    )
    assert response.status_code == 404
    assert client.get("/api/expenses", headers=stranger).json() == []


def test_list_expenses_by_trip(client, register):
    headers = register("owner@example.com")
    trip = new_trip(client, headers)
    on_trip = client.post("/api/expenses", json={"name": "a", "amount": "1", "trip_id": trip["id"]}, headers=headers).json()
    client.post("/api/expenses", json={"name": "b", "amount": "2"}, headers=headers)

    assert len(client.get("/api/expenses", headers=headers).json()) == 2
    filtered = client.get("/api/expenses", params={"trip_id": trip["id"]}, headers=headers).json()
    assert [e["id"] for e in filtered] == [on_trip["id"]]


def test_update_expense_renormalizes(client, register):
    headers = register("owner@example.com")
    trip = new_trip(client, headers)
    expense = client.post("/api/expenses", json={"name": "dinner", "amount": "40"}, headers=headers).json()

    response = client.patch(
        f"/api/expenses/{expense['id']}",
        json={"changes": [
            {"field": "name", "value": "late dinner"},
            {"field": "currency", "value": "EUR"},
            {"field": "trip_id", "value": trip["id"]},
        ]},
        headers=headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "late dinner"
    assert body["trip_id"] == trip["id"]
    assert Decimal(body["amount_settlement"]) == Decimal("220")
    assert body["conversion_status"] == "converted"

    detached = client.patch(
        f"/api/expenses/{expense['id']}",
        json={"changes": [{"field": "trip_id", "value": None}]},
        headers=headers
    )
    assert detached.json()["trip_id"] is None


def test_update_expense_to_foreign_trip_rejected(client, register):
    owner = register("owner@example.com")
    stranger = register("stranger@example.com")
    foreign_trip = new_trip(client, stranger)
    expense = client.post("/api/expenses", json={"name": "dinner", "amount": "40"}, headers=owner).json()

    response = client.patch(
        f"/api/expenses/{expense['id']}",
        json={"changes": [
            {"field": "name", "value": "moved"},
            {"field": "trip_id", "value": foreign_trip["id"]},
        ]},
        headers=owner
    )
    assert response.status_code == 404
    unchanged = client.get(f"/api/expenses/{expense['id']}", headers=owner).json()
    assert unchanged["name"] == "dinner"
    assert unchanged["trip_id"] is None


def test_delete_expense(client, register):
    owner = register("owner@example.com")
    stranger = register("stranger@example.com")
    expense = client.post("/api/expenses", json={"name": "snack", "amount": "5"}, headers=owner).json()

    assert client.delete(f"/api/expenses/{expense['id']}", headers=stranger).status_code == 404
    assert client.delete(f"/api/expenses/{expense['id']}", headers=owner).status_code == 204
    assert client.get(f"/api/expenses/{expense['id']}", headers=owner).status_code == 404


def test_expenses_require_authentication(client):
    response = client.post("/api/expenses", json={"name": "x", "amount": "1"})
    assert response.status_code == 401


def test_sub_cent_amount_rejected(client, register):
    headers = register("owner@example.com")
    for amount in ("0.001", "10.005"):
        response = client.post("/api/expenses", json={"name": "gum", "amount": amount}, headers=headers)
        assert response.status_code == 400, amount
        assert response.json()["error"] == "validation_error"
    assert client.get("/api/expenses", headers=headers).json() == []


def test_update_to_sub_cent_amount_rejected(client, register):
    headers = register("owner@example.com")
    expense = client.post("/api/expenses", json={"name": "coffee", "amount": "4.50"}, headers=headers).json()

    response = client.patch(
        f"/api/expenses/{expense['id']}",
        json={"changes": [{"field": "amount", "value": "4.505"}]},
        headers=headers
    )
    assert response.status_code == 400
    unchanged = client.get(f"/api/expenses/{expense['id']}", headers=headers).json()
    assert Decimal(unchanged["amount"]) == Decimal("4.50")
    assert Decimal(unchanged["amount_settlement"]) == Decimal("4.50")


def test_trailing_zero_amount_accepted(client, register):
    headers = register("owner@example.com")
    response = client.post("/api/expenses", json={"name": "tea", "amount": "3.5000"}, headers=headers)
    assert response.status_code == 201
    assert Decimal(response.json()["amount"]) == Decimal("3.50")
