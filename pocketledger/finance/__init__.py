"""Mini README: Transaction store and derived statistics for Pocket Ledger.

This package owns the transaction collection and everything computed from
it: totals, the filtered history, the fixed category lists, the pending form
state machine and currency formatting. Nothing here performs I/O; the
session layer wires it to persistence and the web interface.
"""

from .categories import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    TransactionType,
    categories_for,
    filter_categories,
)
from .currency import CURRENCY_SYMBOLS, DEFAULT_CURRENCY, format_amount, format_transaction_amount
from .filters import ALL_CATEGORIES, ALL_TYPES, TransactionFilter, apply_filter
from .forms import Creating, Editing, FormState, Idle, PendingForm
from .ledger import FinanceLedger, LedgerTotals, Transaction, parse_amount

__all__ = [
    "ALL_CATEGORIES",
    "ALL_TYPES",
    "CURRENCY_SYMBOLS",
    "Creating",
    "DEFAULT_CURRENCY",
    "EXPENSE_CATEGORIES",
    "Editing",
    "FinanceLedger",
    "FormState",
    "INCOME_CATEGORIES",
    "Idle",
    "LedgerTotals",
    "PendingForm",
    "Transaction",
    "TransactionFilter",
    "TransactionType",
    "apply_filter",
    "categories_for",
    "filter_categories",
    "format_amount",
    "format_transaction_amount",
    "parse_amount",
]
