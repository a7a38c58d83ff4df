"""Mini README: Core package initializer for Pocket Ledger.

Pocket Ledger is a small personal finance tracker: income and expense
transactions, running totals, and a filterable history rendered in the
browser. The package re-exports the pieces most callers need so scripts can
build a session without learning the module layout.
"""

from .logging_utils import get_logger
from .session import TrackerSession

__all__ = ["TrackerSession", "get_logger"]

__version__ = "0.3.0"
