"""Mini README: Tests for the tracker session.

Structure:
    * form flow - hidden/adding/editing transitions and silent rejection.
    * persistence - every mutation is written and reloaded by a new session.
    * view state - the dictionary handed to the rendering layer.
"""

from __future__ import annotations

import json

import pytest

from pocketledger.finance import Creating, Editing, Idle
from pocketledger.session import TrackerSession
from pocketledger.storage import CURRENCY_KEY, THEME_KEY, TRANSACTIONS_KEY, MemoryStore


def _add(session: TrackerSession, **fields) -> None:
    session.show_form()
    session.update_form(**fields)
    session.submit_form()


@pytest.fixture()
def session() -> TrackerSession:
    session = TrackerSession(MemoryStore())
    _add(session, amount="50", description="Groceries", category="Food", date="2024-01-15")
    _add(
        session,
        transaction_type="income",
        amount="3000",
        description="Salary",
        category="Salary",
        date="2024-01-01",
    )
    return session


def test_form_starts_hidden_and_opens_empty() -> None:
    session = TrackerSession()
    assert isinstance(session.form_state, Idle)

    session.show_form()

    assert isinstance(session.form_state, Creating)
    assert session.pending_form.amount == ""


def test_invalid_submit_keeps_form_open_with_values() -> None:
    session = TrackerSession()
    session.show_form()
    session.update_form(amount="12", description="Cinema")

    assert session.submit_form() is None
    assert isinstance(session.form_state, Creating)
    assert session.pending_form.description == "Cinema"
    assert len(session.ledger) == 0


def test_cancel_clears_pending_form(session: TrackerSession) -> None:
    session.show_form()
    session.update_form(amount="9")
    session.cancel_form()

    assert isinstance(session.form_state, Idle)
    session.show_form()
    assert session.pending_form.amount == ""


def test_scenario_through_session(session: TrackerSession) -> None:
    state = session.view_state()
    assert state["formatted_totals"] == {
        "total_income": "$3000.00",
        "total_expenses": "$50.00",
        "balance": "$2950.00",
    }

    session.set_filter(transaction_type="expense")
    assert [row["description"] for row in session.view_state()["filtered_transactions"]] == ["Groceries"]

    session.set_filter(transaction_type="all", month="2024-02")
    assert session.view_state()["filtered_transactions"] == []


def test_edit_flow_preserves_id(session: TrackerSession) -> None:
    groceries = session.ledger.list_transactions()[0]

    assert session.begin_edit(groceries.transaction_id) is True
    assert isinstance(session.form_state, Editing)
    assert session.pending_form.description == "Groceries"

    session.update_form(amount="75")
    updated = session.submit_form()

    assert updated.transaction_id == groceries.transaction_id
    assert isinstance(session.form_state, Idle)
    assert session.view_state()["formatted_totals"]["total_expenses"] == "$75.00"
    assert session.view_state()["formatted_totals"]["total_income"] == "$3000.00"


def test_begin_edit_unknown_id_is_noop(session: TrackerSession) -> None:
    assert session.begin_edit(1) is False
    assert isinstance(session.form_state, Idle)


def test_delete_while_editing_closes_form(session: TrackerSession) -> None:
    salary = session.ledger.list_transactions()[1]
    session.begin_edit(salary.transaction_id)

    assert session.delete(salary.transaction_id) is True

    assert isinstance(session.form_state, Idle)
    assert len(session.ledger) == 1
    assert session.view_state()["totals"]["total_income"] == 0.0
    assert session.delete(salary.transaction_id) is False


def test_mutations_are_persisted_and_reloaded() -> None:
    store = MemoryStore()
    session = TrackerSession(store)
    _add(session, amount="19.99", description="Book", category="Shopping", date="2024-05-04")
    session.set_currency("gbp")
    session.set_theme("dark")

    stored = json.loads(store.items[TRANSACTIONS_KEY])
    assert stored[0]["description"] == "Book"
    assert stored[0]["amount"] == pytest.approx(19.99)
    assert store.items[CURRENCY_KEY] == "GBP"
    assert store.items[THEME_KEY] == "dark"

    reloaded = TrackerSession(store)
    assert reloaded.currency == "GBP"
    assert reloaded.theme == "dark"
    assert reloaded.ledger.list_transactions() == session.ledger.list_transactions()
    assert reloaded.filter.transaction_type == "all"


def test_invalid_submit_does_not_write() -> None:
    store = MemoryStore()
    session = TrackerSession(store)
    session.show_form()
    session.update_form(amount="abc", description="Oops", category="Food")

    session.submit_form()

    assert store.write_count == 0


def test_unsupported_currency_and_theme_raise() -> None:
    session = TrackerSession()
    with pytest.raises(ValueError):
        session.set_currency("XYZ")
    with pytest.raises(ValueError):
        session.set_theme("sepia")
    assert session.currency == "USD"


def test_bad_stored_values_fall_back_to_defaults() -> None:
    store = MemoryStore(
        {
            CURRENCY_KEY: "ZZZ",
            THEME_KEY: "neon",
            TRANSACTIONS_KEY: json.dumps(
                [
                    {"id": 1, "amount": "oops", "description": "x", "category": "Food", "date": "2024-01-01", "type": "expense"},
                    {"id": 2, "amount": 4, "description": "Bus", "category": "Transportation", "date": "2024-01-02", "type": "expense"},
                    {"id": 2, "amount": 4, "description": "Bus", "category": "Transportation", "date": "2024-01-02", "type": "expense"},
                ]
            ),
        }
    )

    session = TrackerSession(store)

    assert session.currency == "USD"
    assert session.theme == "system"
    assert [transaction.transaction_id for transaction in session.ledger.list_transactions()] == [2]


def test_seeding_only_applies_without_stored_data() -> None:
    assert len(TrackerSession(seed_demo_data=True).ledger) == 2
    store = MemoryStore({TRANSACTIONS_KEY: "[]"})
    assert len(TrackerSession(store, seed_demo_data=True).ledger) == 0


def test_default_currency_is_used_when_nothing_stored() -> None:
    assert TrackerSession(default_currency="inr").currency == "INR"


def test_close_flushes_everything() -> None:
    store = MemoryStore()
    session = TrackerSession(store, seed_demo_data=True)

    session.close()

    assert len(json.loads(store.items[TRANSACTIONS_KEY])) == 2
    assert store.items[CURRENCY_KEY] == "USD"


def test_view_state_describes_form(session: TrackerSession) -> None:
    session.show_form()
    session.update_form(transaction_type="income")

    state = session.view_state()

    assert state["form_mode"] == "adding"
    assert state["form"]["type"] == "income"
    assert state["form_categories"][0] == "Salary"
    assert state["currency_symbol"] == "$"
    assert state["editing_id"] is None
    assert len(state["transactions"]) == 2


def test_stored_records_with_wrongly_typed_fields_are_skipped() -> None:
    store = MemoryStore(
        {
            TRANSACTIONS_KEY: json.dumps(
                [
                    {"id": None, "amount": 5, "description": "Bus", "category": "Transportation", "date": "2024-01-02", "type": "expense"},
                    {"id": [3], "amount": 5, "description": "Bus", "category": "Transportation", "date": "2024-01-02", "type": "expense"},
                    {"id": 4, "amount": 5, "description": "Bus", "category": "Transportation", "date": None, "type": "expense"},
                    {"id": 5, "amount": 7, "description": "Taxi", "category": "Transportation", "date": "2024-01-03", "type": "expense"},
                ]
            )
        }
    )

    session = TrackerSession(store)

    assert [transaction.transaction_id for transaction in session.ledger.list_transactions()] == [5]


def test_fill_form_replaces_every_field(session: TrackerSession) -> None:
    groceries = session.ledger.list_transactions()[0]
    session.begin_edit(groceries.transaction_id)

    session.fill_form(amount="75", category="Food", date="2024-01-15")

    assert session.pending_form.description == ""
    assert session.pending_form.transaction_type.value == "expense"
    assert session.submit_form() is None
    assert isinstance(session.form_state, Editing)
    assert session.ledger.get_transaction(groceries.transaction_id) == groceries


def test_fill_form_ignored_while_hidden() -> None:
    session = TrackerSession()
    session.fill_form(amount="5")
    assert isinstance(session.form_state, Idle)
