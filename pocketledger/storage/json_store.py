"""Mini README: JSON file backend for the persistence provider.

Structure:
    * JsonFileStore - keeps every key in one JSON object on disk.

The whole file is rewritten after each ``set_item`` through a temporary file
and an atomic rename, so a crash mid-write leaves the previous state intact.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

from ..logging_utils import get_logger
from .base import PersistenceProvider

LOGGER = get_logger(__name__)


class JsonFileStore(PersistenceProvider):
    """Persist ledger keys to a single JSON document."""

    backend_name = "json-file"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._items: Dict[str, str] = self._read()
        LOGGER.debug("JSON store opened at %s with keys %s", self.path, sorted(self._items))

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as error:
            LOGGER.warning("Ledger file %s is corrupt (%s); starting empty", self.path, error)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Ledger file %s does not hold an object; starting empty", self.path)
            return {}
        return {str(key): str(value) for key, value in payload.items()}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._write()

    def flush(self) -> None:
        self._write()

    def _write(self) -> None:
        temporary = self.path.with_suffix(self.path.suffix + ".tmp")
        temporary.write_text(json.dumps(self._items, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(temporary, self.path)
