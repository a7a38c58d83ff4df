"""Mini README: Persistence providers for Pocket Ledger.

``PersistenceProvider`` defines the key-value contract; ``JsonFileStore``
writes to disk and ``MemoryStore`` keeps everything in the process.
``create_store`` picks one from the runtime settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import CURRENCY_KEY, THEME_KEY, TRANSACTIONS_KEY, PersistenceProvider, StoredState
from .json_store import JsonFileStore
from .memory_store import MemoryStore

if TYPE_CHECKING:  # pragma: no cover
    from ..configuration import PocketLedgerSettings


def create_store(settings: "PocketLedgerSettings") -> PersistenceProvider:
    """Return the backend matching ``settings.persist``."""

    if settings.persist:
        return JsonFileStore(settings.storage_path)
    return MemoryStore()


__all__ = [
    "CURRENCY_KEY",
    "JsonFileStore",
    "MemoryStore",
    "PersistenceProvider",
    "StoredState",
    "THEME_KEY",
    "TRANSACTIONS_KEY",
    "create_store",
]
