"""Mini README: Application-wide logging helpers for Pocket Ledger.

Structure:
    * get_logger - factory returning module loggers with shared formatting.
    * configure_root_logger - explicit root level control for entry points.

Usage:
    Every module creates ``LOGGER = get_logger(__name__)``. The first call
    attaches a single stream handler to the root logger at INFO; entry
    points may later call ``configure_root_logger`` to pick a different
    level. Reloading the web app in development never duplicates handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_HANDLER: Optional[logging.Handler] = None


def _ensure_handler() -> bool:
    """Install the shared handler; ``True`` only on the call that installed it."""

    global _HANDLER
    if _HANDLER is not None:
        return False

    _HANDLER = logging.StreamHandler()
    _HANDLER.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logging.getLogger().addHandler(_HANDLER)
    return True


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Set the root level, installing the shared handler if needed."""

    _ensure_handler()
    logging.getLogger().setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    if _ensure_handler():
        logging.getLogger().setLevel(logging.INFO)
    return logging.getLogger(name)
