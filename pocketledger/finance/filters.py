"""Mini README: Read-time filtering of the transaction list.

Structure:
    * ALL_CATEGORIES / ALL_TYPES - sentinels meaning "do not narrow".
    * TransactionFilter - category, type and month predicates.
    * apply_filter - pure filter-then-sort used by the ledger view.

Filters are never persisted; every session starts from ``TransactionFilter()``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, TYPE_CHECKING

from .categories import TransactionType

if TYPE_CHECKING:  # pragma: no cover
    from .ledger import Transaction

ALL_CATEGORIES = "all_categories"
ALL_TYPES = "all"

_TYPE_CHOICES = {ALL_TYPES, TransactionType.INCOME.value, TransactionType.EXPENSE.value}


def _normalise_month(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    year, _, month = value.partition("-")
    if len(year) != 4 or len(month) != 2 or not (year.isdigit() and month.isdigit()):
        raise ValueError(f"Month filter must look like yyyy-mm, got {value!r}")
    if not 1 <= int(month) <= 12:
        raise ValueError(f"Month filter out of range: {value!r}")
    return value


@dataclass(frozen=True, slots=True)
class TransactionFilter:
    """Predicate set narrowing the displayed transactions."""

    category: Optional[str] = None
    transaction_type: str = ALL_TYPES
    month: Optional[str] = None

    def __post_init__(self) -> None:
        type_value = str(self.transaction_type).strip().lower()
        if type_value not in _TYPE_CHOICES:
            raise ValueError(f"Unsupported type filter: {self.transaction_type}")
        object.__setattr__(self, "transaction_type", type_value)
        object.__setattr__(self, "category", self.category or None)
        object.__setattr__(self, "month", _normalise_month(self.month))

    def updated(self, **changes: Optional[str]) -> "TransactionFilter":
        """Merge a partial update over this filter.

        Keys that are absent or ``None`` keep their current value; an explicit
        empty string clears category or month.
        """

        unknown = set(changes) - {"category", "transaction_type", "month"}
        if unknown:
            raise ValueError(f"Unknown filter fields: {', '.join(sorted(unknown))}")
        present = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **present)

    def clear_month(self) -> "TransactionFilter":
        return replace(self, month=None)

    def matches(self, transaction: "Transaction") -> bool:
        matches_category = (
            self.category is None
            or self.category == ALL_CATEGORIES
            or transaction.category == self.category
        )
        matches_type = (
            self.transaction_type == ALL_TYPES
            or transaction.transaction_type.value == self.transaction_type
        )
        matches_month = (
            self.month is None or transaction.occurred_on.isoformat()[:7] == self.month
        )
        return matches_category and matches_type and matches_month

    def as_dict(self) -> dict:
        return {
            "category": self.category or "",
            "type": self.transaction_type,
            "month": self.month or "",
        }


def apply_filter(
    transactions: Iterable["Transaction"], transaction_filter: TransactionFilter
) -> List["Transaction"]:
    """Return matching transactions, most recent date first.

    The sort is stable, so records sharing a date keep their insertion order.
    """

    matching = [transaction for transaction in transactions if transaction_filter.matches(transaction)]
    return sorted(matching, key=lambda transaction: transaction.occurred_on, reverse=True)
