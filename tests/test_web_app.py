"""Mini README: Tests for the FastAPI dashboard.

The application is built around an in-memory session so each test starts
from a clean ledger. Intent routes redirect back to the dashboard; the JSON
state endpoint is used to check what the rendering layer would receive.
"""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from pocketledger.interface import create_application
from pocketledger.session import TrackerSession
from pocketledger.storage import TRANSACTIONS_KEY, MemoryStore


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def client(store: MemoryStore):
    app = create_application(session=TrackerSession(store))
    with TestClient(app) as test_client:
        yield test_client


def _submit(client: TestClient, **fields: str):
    client.post("/form/show")
    return client.post("/form/submit", data=fields)


def test_dashboard_renders_empty_state(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "Expense Tracker" in response.text
    assert "No transactions found" in response.text


def test_intents_redirect_to_dashboard(client: TestClient) -> None:
    response = client.post("/form/show", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_create_and_filter_through_http(client: TestClient) -> None:
    _submit(client, type="expense", amount="50", description="Groceries", category="Food", date="2024-01-15")
    response = _submit(
        client, type="income", amount="3000", description="Salary", category="Salary", date="2024-01-01"
    )

    assert response.status_code == 200
    assert "+$3000.00" in response.text
    state = client.get("/api/state").json()
    assert state["totals"] == {"total_income": 3000.0, "total_expenses": 50.0, "balance": 2950.0}
    assert state["form_mode"] == "hidden"

    client.post("/filter", data={"type": "expense"})
    state = client.get("/api/state").json()
    assert [row["description"] for row in state["filtered_transactions"]] == ["Groceries"]

    client.post("/filter", data={"month": "2024-02"})
    assert client.get("/api/state").json()["filtered_transactions"] == []

    client.post("/filter/clear-month")
    assert client.get("/api/state").json()["filter"]["month"] == ""


def test_invalid_submit_keeps_form_open(client: TestClient) -> None:
    response = _submit(client, type="expense", amount="12", description="", category="Food", date="2024-01-15")

    assert response.status_code == 200
    state = client.get("/api/state").json()
    assert state["form_mode"] == "adding"
    assert state["form"]["amount"] == "12"
    assert state["transactions"] == []


def test_edit_and_delete(client: TestClient, store: MemoryStore) -> None:
    _submit(client, type="expense", amount="50", description="Groceries", category="Food", date="2024-01-15")
    transaction_id = client.get("/api/state").json()["transactions"][0]["id"]

    client.post(f"/transactions/{transaction_id}/edit")
    state = client.get("/api/state").json()
    assert state["form_mode"] == "editing"
    assert state["editing_id"] == transaction_id

    response = client.post(
        "/form/submit",
        data={"type": "expense", "amount": "75", "description": "Groceries", "category": "Food", "date": "2024-01-15"},
    )
    assert "Add New Transaction" in response.text
    state = client.get("/api/state").json()
    assert state["transactions"][0]["id"] == transaction_id
    assert state["formatted_totals"]["total_expenses"] == "$75.00"

    client.post(f"/transactions/{transaction_id}/delete")
    assert client.get("/api/state").json()["transactions"] == []
    assert json.loads(store.items[TRANSACTIONS_KEY]) == []


def test_form_type_switch_resets_category(client: TestClient) -> None:
    client.post("/form/show")
    client.post("/form/submit", data={"category": "Food", "amount": ""})
    client.post("/form/type", data={"type": "income"})

    state = client.get("/api/state").json()
    assert state["form"]["category"] == ""
    assert state["form_categories"][0] == "Salary"


def test_currency_and_theme(client: TestClient) -> None:
    _submit(client, type="expense", amount="5", description="Coffee", category="Food", date="2024-01-15")

    response = client.post("/currency", data={"code": "EUR"})
    assert "-€5.00" in response.text
    client.post("/theme", data={"theme": "dark"})
    state = client.get("/api/state").json()
    assert state["currency_symbol"] == "€"
    assert state["theme"] == "dark"

    assert client.post("/currency", data={"code": "BTC"}).status_code == 400
    assert client.post("/theme", data={"theme": "sepia"}).status_code == 400
    assert client.post("/filter", data={"month": "2024-99"}).status_code == 400


def test_unknown_ids_are_ignored(client: TestClient) -> None:
    assert client.post("/transactions/123/delete").status_code == 200
    assert client.post("/transactions/123/edit").status_code == 200
    assert client.get("/api/state").json()["form_mode"] == "hidden"


def test_edit_with_blank_field_is_ignored(client: TestClient) -> None:
    """A cleared field on the edit form rejects the edit instead of keeping the old value."""

    _submit(client, type="expense", amount="50", description="Groceries", category="Food", date="2024-01-15")
    before = client.get("/api/state").json()["transactions"][0]

    client.post(f"/transactions/{before['id']}/edit")
    client.post(
        "/form/submit",
        data={"type": "expense", "amount": "75", "description": "", "category": "Food", "date": "2024-01-15"},
    )

    state = client.get("/api/state").json()
    assert state["form_mode"] == "editing"
    assert state["editing_id"] == before["id"]
    assert state["form"]["description"] == ""
    assert state["form"]["amount"] == "75"
    assert state["transactions"] == [before]


def test_edit_with_missing_fields_is_ignored(client: TestClient) -> None:
    _submit(client, type="expense", amount="50", description="Groceries", category="Food", date="2024-01-15")
    before = client.get("/api/state").json()["transactions"][0]

    client.post(f"/transactions/{before['id']}/edit")
    client.post("/form/submit", data={"amount": "75"})

    state = client.get("/api/state").json()
    assert state["form_mode"] == "editing"
    assert state["transactions"] == [before]
    assert state["totals"]["total_expenses"] == 50.0
