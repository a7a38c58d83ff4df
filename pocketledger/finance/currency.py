"""Mini README: Display currencies and amount formatting.

Structure:
    * CURRENCY_SYMBOLS - ordered mapping of supported codes to symbols.
    * normalise_currency - validate and upper-case a currency code.
    * format_amount / format_transaction_amount - render amounts for the UI.

The currency is a display setting only. Nothing in this module converts
values between currencies; the same stored number is shown with a different
symbol.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .ledger import Transaction

DEFAULT_CURRENCY = "USD"

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "C$",
}

_CENTS = Decimal("0.01")


def normalise_currency(code: str) -> str:
    """Return the upper-case code, raising ``ValueError`` when unsupported."""

    try:
        normalised = code.strip().upper()
    except AttributeError as error:
        raise ValueError(f"Unsupported currency: {code}") from error
    if normalised not in CURRENCY_SYMBOLS:
        raise ValueError(f"Unsupported currency: {code}")
    return normalised


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS[normalise_currency(code)]


def available_currencies() -> List[Tuple[str, str]]:
    """Return ``(code, symbol)`` pairs in display order."""

    return list(CURRENCY_SYMBOLS.items())


def format_amount(amount: Decimal | float | int, currency: str) -> str:
    """Render ``amount`` with the currency symbol and exactly two decimals.

    Rounding is half-up on the decimal value, so ``2.345`` renders as
    ``2.35``. Negative values keep their sign after the symbol (``$-4.00``),
    which is how the balance card shows an overdrawn ledger.
    """

    quantised = Decimal(str(amount)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    if quantised.is_zero():
        quantised = quantised.copy_abs()
    return f"{currency_symbol(currency)}{quantised}"


def format_transaction_amount(transaction: "Transaction", currency: str) -> str:
    """Prefix ``+`` for income and ``-`` for expense rows."""

    sign = "+" if transaction.is_income else "-"
    return f"{sign}{format_amount(transaction.amount, currency)}"
