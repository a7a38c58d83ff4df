"""Mini README: Transaction types and the fixed category lists.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * EXPENSE_CATEGORIES / INCOME_CATEGORIES - ordered label lists.
    * categories_for - labels valid for a given transaction type.
    * filter_categories - options offered by the category filter widget.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


class TransactionType(str, Enum):
    """Enumerate the supported transaction kinds."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Transportation",
    "Entertainment",
    "Bills",
    "Shopping",
    "Health",
    "Other",
)

INCOME_CATEGORIES: Tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investment",
    "Gift",
    "Other",
)

CATEGORIES: Dict[TransactionType, Tuple[str, ...]] = {
    TransactionType.EXPENSE: EXPENSE_CATEGORIES,
    TransactionType.INCOME: INCOME_CATEGORIES,
}


def categories_for(transaction_type: TransactionType | str) -> List[str]:
    """Return the category labels allowed for ``transaction_type``."""

    if not isinstance(transaction_type, TransactionType):
        transaction_type = TransactionType.from_str(transaction_type)
    return list(CATEGORIES[transaction_type])


def is_valid_category(transaction_type: TransactionType, category: str) -> bool:
    return category in CATEGORIES[transaction_type]


def filter_categories(type_filter: str) -> List[str]:
    """Category options for the filter dropdown given the active type filter.

    Expense labels come first unless the filter narrows to income, then income
    labels unless it narrows to expenses. ``Other`` therefore appears twice
    when both types are shown.
    """

    options: List[str] = []
    if type_filter != TransactionType.INCOME.value:
        options.extend(EXPENSE_CATEGORIES)
    if type_filter != TransactionType.EXPENSE.value:
        options.extend(INCOME_CATEGORIES)
    return options
