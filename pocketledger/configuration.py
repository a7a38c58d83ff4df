"""Mini README: Centralised configuration models and helpers for Pocket Ledger.

Structure:
    * PocketLedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``POCKETLEDGER_``), locate the ledger file, and choose service ports. The
    configuration is cached so validation runs only once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings

from .finance.currency import CURRENCY_SYMBOLS, DEFAULT_CURRENCY


class PocketLedgerSettings(BaseSettings):
    """Runtime configuration for the Pocket Ledger tracker."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted ledger file.",
    )
    storage_filename: str = Field(
        "ledger.json",
        description="File name of the JSON key-value store inside the data directory.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the dashboard to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the dashboard listens on.",
        ge=1,
        le=65535,
    )
    default_currency: str = Field(
        DEFAULT_CURRENCY,
        description="Currency code used when nothing has been stored yet.",
    )
    persist: bool = Field(
        True,
        description="Write transactions to disk; disable for a throwaway in-memory session.",
    )
    seed_demo_data: bool = Field(
        False,
        description="Start an empty ledger with two sample transactions.",
    )

    class Config:
        env_prefix = "POCKETLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @validator("default_currency", pre=True)
    def _check_currency(cls, value: str) -> str:
        code = str(value).strip().upper()
        if code not in CURRENCY_SYMBOLS:
            raise ValueError(f"Unsupported currency: {value}")
        return code

    @property
    def storage_path(self) -> Path:
        """Full path of the JSON store."""

        return self.data_directory / self.storage_filename


@lru_cache()
def get_settings() -> PocketLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return PocketLedgerSettings()
