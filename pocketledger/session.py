"""Mini README: The tracker session tying ledger, filter and persistence together.

Structure:
    * THEMES - supported colour schemes for the dashboard.
    * TrackerSession - owns the ledger, filter, currency, theme and form
      state; dispatches user intents and writes through to persistence.

One session exists per running dashboard. Every intent runs to completion
before the next one is handled, and each mutation of the transaction list,
currency or theme is saved immediately. ``view_state`` hands the rendering
layer a plain dictionary describing everything it needs to draw.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .finance import (
    CURRENCY_SYMBOLS,
    DEFAULT_CURRENCY,
    Creating,
    Editing,
    FinanceLedger,
    FormState,
    Idle,
    PendingForm,
    Transaction,
    TransactionFilter,
    TransactionType,
    categories_for,
    filter_categories,
    format_amount,
    format_transaction_amount,
)
from .finance.currency import available_currencies, normalise_currency
from .logging_utils import get_logger
from .storage import MemoryStore, PersistenceProvider

LOGGER = get_logger(__name__)

THEMES = ("light", "dark", "system")
DEFAULT_THEME = "system"


def _normalise_theme(theme: str) -> str:
    try:
        normalised = theme.strip().lower()
    except AttributeError as error:
        raise ValueError(f"Unsupported theme: {theme}") from error
    if normalised not in THEMES:
        raise ValueError(f"Unsupported theme: {theme}")
    return normalised


class TrackerSession:
    """Single-user tracker session backed by a persistence provider."""

    def __init__(
        self,
        store: Optional[PersistenceProvider] = None,
        *,
        seed_demo_data: bool = False,
        default_currency: str = DEFAULT_CURRENCY,
        ledger: Optional[FinanceLedger] = None,
    ) -> None:
        self.store = store if store is not None else MemoryStore()
        stored = self.store.load()

        if ledger is not None:
            self.ledger = ledger
        elif stored.transactions is not None:
            self.ledger = FinanceLedger(self._restore(stored.transactions))
        elif seed_demo_data:
            self.ledger = FinanceLedger.with_demo_data()
        else:
            self.ledger = FinanceLedger()

        self.currency = self._restore_currency(stored.currency, default_currency)
        self.theme = self._restore_theme(stored.theme)
        self.filter = TransactionFilter()
        self.form_state: FormState = Idle()
        LOGGER.info(
            "Session started with %s transactions (currency=%s, backend=%s)",
            len(self.ledger),
            self.currency,
            self.store.backend_name,
        )

    @staticmethod
    def _restore(records) -> list:
        transactions = []
        seen = set()
        for record in records:
            try:
                transaction = Transaction.from_dict(record)
            except ValueError as error:
                LOGGER.warning("Skipping unreadable stored transaction %r: %s", record, error)
                continue
            if transaction.transaction_id in seen:
                LOGGER.warning("Skipping duplicate stored transaction %s", transaction.transaction_id)
                continue
            seen.add(transaction.transaction_id)
            transactions.append(transaction)
        return transactions

    @staticmethod
    def _restore_currency(stored: Optional[str], default: str) -> str:
        for candidate in (stored, default):
            if not candidate:
                continue
            try:
                return normalise_currency(candidate)
            except ValueError:
                LOGGER.warning("Ignoring unsupported currency %r", candidate)
        return DEFAULT_CURRENCY

    @staticmethod
    def _restore_theme(stored: Optional[str]) -> str:
        if not stored:
            return DEFAULT_THEME
        try:
            return _normalise_theme(stored)
        except ValueError:
            LOGGER.warning("Ignoring unsupported theme %r", stored)
            return DEFAULT_THEME

    # -- persistence ---------------------------------------------------------

    def _persist_transactions(self) -> None:
        self.store.save_transactions(self.ledger.export_records())

    def close(self) -> None:
        """Flush everything to the store before the process exits."""

        self._persist_transactions()
        self.store.save_currency(self.currency)
        self.store.save_theme(self.theme)
        self.store.flush()
        LOGGER.info("Session closed; %s transactions flushed", len(self.ledger))

    # -- form intents --------------------------------------------------------

    @property
    def pending_form(self) -> Optional[PendingForm]:
        if isinstance(self.form_state, (Creating, Editing)):
            return self.form_state.form
        return None

    def show_form(self) -> None:
        """Open an empty add form unless a form is already open."""

        if isinstance(self.form_state, Idle):
            self.form_state = Creating(form=PendingForm())

    def cancel_form(self) -> None:
        self.form_state = Idle()

    def begin_edit(self, transaction_id: int) -> bool:
        """Open the form pre-filled from ``transaction_id``; ``False`` when unknown."""

        transaction = self.ledger.find_transaction(transaction_id)
        if transaction is None:
            LOGGER.debug("Cannot edit unknown transaction %s", transaction_id)
            return False
        self.form_state = Editing(
            transaction_id=transaction_id, form=PendingForm.from_transaction(transaction)
        )
        return True

    def update_form(self, **fields: Any) -> None:
        """Apply typed values to the open form; ignored while the form is hidden."""

        state = self.form_state
        if isinstance(state, Creating):
            self.form_state = Creating(form=state.form.updated(**fields))
        elif isinstance(state, Editing):
            self.form_state = Editing(
                transaction_id=state.transaction_id, form=state.form.updated(**fields)
            )

    def fill_form(
        self,
        *,
        amount: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[str] = None,
        transaction_type: Optional[str] = None,
    ) -> None:
        """Replace the open form with exactly the submitted values.

        Missing fields become blank rather than keeping what the form held
        before, so a cleared field fails validation on submit. A missing
        type keeps the form's current type.
        """

        pending = self.pending_form
        if pending is None:
            return
        form = PendingForm(
            amount=amount or "",
            description=description or "",
            category=category or "",
            date=date or "",
            transaction_type=(
                pending.transaction_type
                if transaction_type is None
                else TransactionType.from_str(transaction_type)
            ),
        )
        state = self.form_state
        if isinstance(state, Editing):
            self.form_state = Editing(transaction_id=state.transaction_id, form=form)
        else:
            self.form_state = Creating(form=form)

    def submit_form(self) -> Optional[Transaction]:
        """Create or edit from the pending form.

        Invalid forms leave the state untouched so the entered values stay
        visible. On success the form closes.
        """

        state = self.form_state
        if isinstance(state, Creating):
            transaction = self.ledger.create(state.form)
        elif isinstance(state, Editing):
            if self.ledger.find_transaction(state.transaction_id) is None:
                # The record vanished while editing; nothing left to update.
                self.form_state = Idle()
                return None
            transaction = self.ledger.edit(state.transaction_id, state.form)
        else:
            return None
        if transaction is None:
            return None
        self._persist_transactions()
        self.form_state = Idle()
        return transaction

    def delete(self, transaction_id: int) -> bool:
        removed = self.ledger.delete(transaction_id)
        if removed:
            self._persist_transactions()
            if isinstance(self.form_state, Editing) and self.form_state.transaction_id == transaction_id:
                self.form_state = Idle()
        return removed

    # -- display settings ----------------------------------------------------

    def set_filter(self, **changes: Optional[str]) -> TransactionFilter:
        self.filter = self.filter.updated(**changes)
        LOGGER.debug("Filter updated to %s", self.filter)
        return self.filter

    def clear_month_filter(self) -> TransactionFilter:
        self.filter = self.filter.clear_month()
        return self.filter

    def set_currency(self, code: str) -> str:
        self.currency = normalise_currency(code)
        self.store.save_currency(self.currency)
        LOGGER.info("Display currency set to %s", self.currency)
        return self.currency

    def set_theme(self, theme: str) -> str:
        self.theme = _normalise_theme(theme)
        self.store.save_theme(self.theme)
        return self.theme

    # -- rendering -----------------------------------------------------------

    def _row(self, transaction: Transaction) -> Dict[str, Any]:
        row = transaction.as_dict()
        row["formatted_amount"] = format_transaction_amount(transaction, self.currency)
        return row

    def view_state(self) -> Dict[str, Any]:
        """Everything the rendering layer draws, recomputed from current state."""

        totals = self.ledger.totals()
        form = self.pending_form
        editing_id = (
            self.form_state.transaction_id if isinstance(self.form_state, Editing) else None
        )
        return {
            "transactions": [self._row(transaction) for transaction in self.ledger.list_transactions()],
            "filtered_transactions": [
                self._row(transaction) for transaction in self.ledger.filtered(self.filter)
            ],
            "totals": totals.as_dict(),
            "formatted_totals": {
                "total_income": format_amount(totals.total_income, self.currency),
                "total_expenses": format_amount(totals.total_expenses, self.currency),
                "balance": format_amount(totals.balance, self.currency),
            },
            "filter": self.filter.as_dict(),
            "filter_categories": filter_categories(self.filter.transaction_type),
            "currency": self.currency,
            "currency_symbol": CURRENCY_SYMBOLS[self.currency],
            "currencies": available_currencies(),
            "theme": self.theme,
            "themes": list(THEMES),
            "form_mode": self.form_state.mode,
            "form": form.as_dict() if form else None,
            "form_categories": categories_for(form.transaction_type) if form else [],
            "editing_id": editing_id,
        }
