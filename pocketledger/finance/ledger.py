"""Mini README: In-memory finance ledger supporting income and expenses.

Structure:
    * Transaction - immutable record of one income or expense event.
    * LedgerTotals - income, expense and balance derived from the ledger.
    * FinanceLedger - owns the collection and applies create/edit/delete.

The ledger validates submitted forms and silently ignores the ones that do
not describe a complete transaction: the caller keeps the form open and the
collection is left untouched. Totals and the filtered view are computed
from scratch on every call instead of being cached.
"""

from __future__ import annotations

import math
import re
import time
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from .categories import TransactionType, is_valid_category
from .filters import TransactionFilter, apply_filter
from .forms import PendingForm

LOGGER = get_logger(__name__)

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True, slots=True)
class Transaction:
    """Represent a ledger entry."""

    transaction_id: int
    transaction_type: TransactionType
    description: str
    category: str
    amount: Decimal
    occurred_on: date

    @property
    def is_income(self) -> bool:
        return self.transaction_type is TransactionType.INCOME

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction in the persisted record layout."""

        return {
            "id": self.transaction_id,
            "amount": float(self.amount),
            "description": self.description,
            "category": self.category,
            "date": self.occurred_on.isoformat(),
            "type": self.transaction_type.value,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "Transaction":
        """Rebuild a transaction from a stored record, raising ``ValueError`` if malformed."""

        try:
            amount = parse_amount(payload["amount"])
            if amount is None:
                raise ValueError(f"Invalid stored amount: {payload['amount']!r}")
            return cls(
                transaction_id=int(payload["id"]),  # type: ignore[arg-type]
                transaction_type=TransactionType.from_str(str(payload["type"])),
                description=str(payload["description"]),
                category=str(payload["category"]),
                amount=amount,
                occurred_on=_parse_date(payload["date"]),
            )
        except KeyError as error:
            raise ValueError(f"Stored transaction is missing field {error}") from error
        except TypeError as error:
            raise ValueError(f"Stored transaction has a field of the wrong type: {error}") from error


@dataclass(frozen=True, slots=True)
class LedgerTotals:
    """Aggregates shown on the statistics cards."""

    total_income: Decimal
    total_expenses: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expenses

    def as_dict(self) -> Dict[str, float]:
        return {
            "total_income": float(self.total_income),
            "total_expenses": float(self.total_expenses),
            "balance": float(self.balance),
        }


def parse_amount(value: object) -> Optional[Decimal]:
    """Parse a user or stored amount; ``None`` when it is not a finite, non-negative number."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = repr(value)
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    if Decimal(repr(float(amount))) != amount:
        # Persisted as a JSON number; reject digits a float cannot carry.
        return None
    return amount.copy_abs()


def _parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not _ISO_DATE.fullmatch(value):
            raise ValueError(f"Dates must look like yyyy-mm-dd, got {value!r}")
        return date.fromisoformat(value)
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


def build_transaction(form: PendingForm, transaction_id: int) -> Optional[Transaction]:
    """Turn a pending form into a transaction, or ``None`` when the form is incomplete."""

    if not form.amount or not form.description or not form.category:
        return None
    amount = parse_amount(form.amount)
    if amount is None:
        LOGGER.debug("Rejected form with unparseable amount %r", form.amount)
        return None
    if not is_valid_category(form.transaction_type, form.category):
        LOGGER.debug(
            "Rejected category %r for %s transaction", form.category, form.transaction_type.value
        )
        return None
    try:
        occurred_on = _parse_date(form.date)
    except ValueError:
        LOGGER.debug("Rejected form with invalid date %r", form.date)
        return None
    return Transaction(
        transaction_id=transaction_id,
        transaction_type=form.transaction_type,
        description=form.description,
        category=form.category,
        amount=amount,
        occurred_on=occurred_on,
    )


class FinanceLedger:
    """Manage an ordered collection of transactions keyed by id."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._transactions: List[Transaction] = []
        self._clock = clock
        self._last_id = 0
        for transaction in transactions or ():
            self._register(transaction)
        LOGGER.debug("Finance ledger initialised with %s transactions", len(self._transactions))

    @classmethod
    def with_demo_data(cls, *, clock: Callable[[], float] = time.time) -> "FinanceLedger":
        """Return a ledger seeded with one expense and one income sample."""

        return cls(
            transactions=[
                Transaction(
                    transaction_id=1,
                    transaction_type=TransactionType.EXPENSE,
                    description="Groceries",
                    category="Food",
                    amount=Decimal("50"),
                    occurred_on=date(2024, 1, 15),
                ),
                Transaction(
                    transaction_id=2,
                    transaction_type=TransactionType.INCOME,
                    description="Salary",
                    category="Salary",
                    amount=Decimal("3000"),
                    occurred_on=date(2024, 1, 1),
                ),
            ],
            clock=clock,
        )

    def __len__(self) -> int:
        return len(self._transactions)

    def _next_id(self) -> int:
        """Millisecond timestamp, bumped when it would collide with an issued id."""

        candidate = int(self._clock() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def _register(self, transaction: Transaction) -> None:
        if self._index_of(transaction.transaction_id) is not None:
            raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
        self._transactions.append(transaction)
        self._last_id = max(self._last_id, transaction.transaction_id)

    def _index_of(self, transaction_id: int) -> Optional[int]:
        for index, transaction in enumerate(self._transactions):
            if transaction.transaction_id == transaction_id:
                return index
        return None

    def list_transactions(self) -> List[Transaction]:
        """Return transactions in insertion order."""

        return list(self._transactions)

    def find_transaction(self, transaction_id: int) -> Optional[Transaction]:
        index = self._index_of(transaction_id)
        return None if index is None else self._transactions[index]

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        transaction = self.find_transaction(transaction_id)
        if transaction is None:
            raise KeyError(f"Transaction {transaction_id} not found")
        return transaction

    def create(self, form: PendingForm) -> Optional[Transaction]:
        """Append a transaction built from ``form``; ``None`` if the form is invalid."""

        transaction = build_transaction(form, transaction_id=0)
        if transaction is None:
            return None
        transaction = replace(transaction, transaction_id=self._next_id())
        self._transactions.append(transaction)
        LOGGER.info(
            "Recorded %s %s (%s) as %s",
            transaction.transaction_type.value,
            transaction.amount,
            transaction.category,
            transaction.transaction_id,
        )
        return transaction

    def edit(self, transaction_id: int, form: PendingForm) -> Optional[Transaction]:
        """Replace the record with ``transaction_id`` in place, keeping its id."""

        index = self._index_of(transaction_id)
        if index is None:
            LOGGER.warning("Edit ignored; transaction %s not found", transaction_id)
            return None
        transaction = build_transaction(form, transaction_id=transaction_id)
        if transaction is None:
            return None
        self._transactions[index] = transaction
        LOGGER.info("Updated transaction %s", transaction_id)
        return transaction

    def delete(self, transaction_id: int) -> bool:
        """Remove the record with ``transaction_id``; ``False`` when absent."""

        index = self._index_of(transaction_id)
        if index is None:
            LOGGER.debug("Delete ignored; transaction %s not found", transaction_id)
            return False
        del self._transactions[index]
        LOGGER.info("Deleted transaction %s", transaction_id)
        return True

    def totals(self) -> LedgerTotals:
        income = Decimal("0")
        expenses = Decimal("0")
        for transaction in self._transactions:
            if transaction.is_income:
                income += transaction.amount
            else:
                expenses += transaction.amount
        return LedgerTotals(total_income=income, total_expenses=expenses)

    def filtered(self, transaction_filter: Optional[TransactionFilter] = None) -> List[Transaction]:
        """Return transactions passing ``transaction_filter``, most recent first."""

        return apply_filter(self._transactions, transaction_filter or TransactionFilter())

    def export_records(self) -> List[Dict[str, object]]:
        """Serialisable records in collection order, ready for persistence."""

        return [transaction.as_dict() for transaction in self._transactions]
