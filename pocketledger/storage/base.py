"""Mini README: Abstract persistence provider for Pocket Ledger.

Structure:
    * StoredState - raw values read back at startup.
    * PersistenceProvider - key-value contract plus the ledger-specific
      load/save helpers built on top of it.

Backends only implement ``get_item``/``set_item``, mirroring a browser's
``localStorage``. Transactions live under ``expenses`` as a JSON array,
the currency under ``currency`` as a bare code, the theme under ``theme``.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

TRANSACTIONS_KEY = "expenses"
CURRENCY_KEY = "currency"
THEME_KEY = "theme"


@dataclass(slots=True)
class StoredState:
    """Values found in the store; ``None`` where nothing was saved."""

    transactions: Optional[List[Dict[str, object]]] = None
    currency: Optional[str] = None
    theme: Optional[str] = None


class PersistenceProvider(ABC):
    """Base interface for key-value backends holding the ledger."""

    backend_name: str = "generic"

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the raw string stored under ``key`` or ``None``."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    def flush(self) -> None:
        """Hook for backends that buffer writes."""

    def load(self) -> StoredState:
        """Read transactions, currency and theme once at startup."""

        state = StoredState(
            transactions=self._load_transactions(),
            currency=self.get_item(CURRENCY_KEY) or None,
            theme=self.get_item(THEME_KEY) or None,
        )
        LOGGER.debug(
            "Loaded state from %s backend: %s transactions, currency=%s theme=%s",
            self.backend_name,
            "no" if state.transactions is None else len(state.transactions),
            state.currency,
            state.theme,
        )
        return state

    def _load_transactions(self) -> Optional[List[Dict[str, object]]]:
        raw = self.get_item(TRANSACTIONS_KEY)
        if not raw:
            return None
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as error:
            LOGGER.warning("Stored transactions are not valid JSON (%s); ignoring", error)
            return None
        if not isinstance(records, list):
            LOGGER.warning("Stored transactions are not a list; ignoring")
            return None
        return [record for record in records if isinstance(record, dict)]

    def save_transactions(self, records: List[Dict[str, object]]) -> None:
        self.set_item(TRANSACTIONS_KEY, json.dumps(records))

    def save_currency(self, code: str) -> None:
        self.set_item(CURRENCY_KEY, code)

    def save_theme(self, theme: str) -> None:
        self.set_item(THEME_KEY, theme)
