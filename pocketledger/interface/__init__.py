"""Mini README: Interactive interfaces for Pocket Ledger.

Exports the FastAPI application factory that serves the browser
dashboard. The CLI entry point lives in ``ledger_cli.py`` at the project root.
"""

from .web_app import create_application

__all__ = ["create_application"]
