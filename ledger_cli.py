"""Mini README: Entry point CLI for Pocket Ledger.

This script exposes a Typer CLI with two commands: ``run`` starts the
FastAPI dashboard under uvicorn, ``summary`` prints the totals of the stored
ledger without starting a server. Settings come from ``POCKETLEDGER_``
environment variables or a ``.env`` file.
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
import uvicorn

from pocketledger.configuration import get_settings
from pocketledger.finance import TransactionFilter, format_amount, format_transaction_amount
from pocketledger.logging_utils import configure_root_logger
from pocketledger.session import TrackerSession
from pocketledger.storage import create_store

cli = typer.Typer(help="Track income and expenses from the browser.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the dashboard using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(logging.DEBUG if settings.environment == "development" else logging.INFO)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Pocket Ledger on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "pocketledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary(
    currency: Optional[str] = typer.Option(None, help="Display currency code (defaults to the stored one)."),
    month: Optional[str] = typer.Option(None, help="Only list transactions from this yyyy-mm month."),
) -> None:
    """Print totals and the most recent transactions from the stored ledger."""

    settings = get_settings()
    session = TrackerSession(
        create_store(settings),
        seed_demo_data=settings.seed_demo_data,
        default_currency=settings.default_currency,
    )
    try:
        code = session.currency if currency is None else currency
        totals = session.ledger.totals()
        typer.echo(f"Income:   {format_amount(totals.total_income, code)}")
        typer.echo(f"Expenses: {format_amount(totals.total_expenses, code)}")
        typer.echo(f"Balance:  {format_amount(totals.balance, code)}")
        for transaction in session.ledger.filtered(TransactionFilter(month=month)):
            typer.echo(
                f"{transaction.occurred_on.isoformat()}  "
                f"{format_transaction_amount(transaction, code):>14}  "
                f"{transaction.category:<14} {transaction.description}"
            )
    except ValueError as error:
        raise typer.BadParameter(str(error)) from error


if __name__ == "__main__":
    cli()
