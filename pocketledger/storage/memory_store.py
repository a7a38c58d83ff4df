"""Mini README: In-memory backend for throwaway sessions and tests."""

from __future__ import annotations

from typing import Dict, Optional

from .base import PersistenceProvider


class MemoryStore(PersistenceProvider):
    """Dictionary-backed store; contents vanish with the process."""

    backend_name = "memory"

    def __init__(self, items: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(items or {})
        self.write_count = 0

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.write_count += 1
