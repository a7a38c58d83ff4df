"""Mini README: Pending transaction forms and the form state machine.

Structure:
    * PendingForm - raw, as-typed values of the add/edit form.
    * Idle / Creating / Editing - tagged states of the form panel.
    * FormState - union of the three states.

Values stay as strings until the ledger validates them on submit, so an
invalid submission can be shown back to the user exactly as entered.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, Union

from .categories import TransactionType


def _today() -> str:
    return date.today().isoformat()


@dataclass(frozen=True, slots=True)
class PendingForm:
    """User-entered transaction fields awaiting validation."""

    amount: str = ""
    description: str = ""
    category: str = ""
    date: str = field(default_factory=_today)
    transaction_type: TransactionType = TransactionType.EXPENSE

    @classmethod
    def from_transaction(cls, transaction) -> "PendingForm":
        """Pre-fill a form from an existing ledger transaction."""

        return cls(
            amount=str(transaction.amount),
            description=transaction.description,
            category=transaction.category,
            date=transaction.occurred_on.isoformat(),
            transaction_type=transaction.transaction_type,
        )

    def with_type(self, transaction_type: TransactionType | str) -> "PendingForm":
        """Switch the type; the category is cleared whenever the type changes."""

        if not isinstance(transaction_type, TransactionType):
            transaction_type = TransactionType.from_str(transaction_type)
        if transaction_type is self.transaction_type:
            return self
        return replace(self, transaction_type=transaction_type, category="")

    def updated(self, **fields: object) -> "PendingForm":
        """Return a copy with the supplied fields changed.

        ``transaction_type`` goes through :meth:`with_type` first so a type
        change still clears the category unless a category is supplied in
        the same update.
        """

        form = self
        if fields.get("transaction_type") is not None:
            form = form.with_type(fields.pop("transaction_type"))  # type: ignore[arg-type]
        else:
            fields.pop("transaction_type", None)
        changes: Dict[str, str] = {}
        for key in ("amount", "description", "category", "date"):
            value = fields.pop(key, None)
            if value is not None:
                changes[key] = str(value)
        if fields:
            raise ValueError(f"Unknown form fields: {', '.join(sorted(fields))}")
        return replace(form, **changes) if changes else form

    def as_dict(self) -> Dict[str, str]:
        return {
            "amount": self.amount,
            "description": self.description,
            "category": self.category,
            "date": self.date,
            "type": self.transaction_type.value,
        }


@dataclass(frozen=True, slots=True)
class Idle:
    """Form hidden; nothing pending."""

    mode = "hidden"


@dataclass(frozen=True, slots=True)
class Creating:
    """Adding a new transaction."""

    form: PendingForm
    mode = "adding"


@dataclass(frozen=True, slots=True)
class Editing:
    """Editing the transaction identified by ``transaction_id``."""

    transaction_id: int
    form: PendingForm
    mode = "editing"


FormState = Union[Idle, Creating, Editing]
