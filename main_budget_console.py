"""Mini README: Command line entry point for BudgetBite.

This script exposes a Typer CLI that records expenses in the local ledger
file, prints the derived analytics, writes CSV/PNG/PDF exports and starts
the FastAPI service. The budget is session scoped and never stored, so the
``summary`` and ``export`` commands accept it as an option.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from budgetbite.analytics import compute_analytics
from budgetbite.configuration import get_settings
from budgetbite.export import REGISTRY
from budgetbite.ledger import LedgerStore
from budgetbite.logging_utils import configure_root_logger
from budgetbite.storage import LedgerPersistenceError

cli = typer.Typer(help="Record expenses and export BudgetBite ledgers.")


def _open_store() -> LedgerStore:
    configure_root_logger()
    return LedgerStore.from_settings()


def _fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger()

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting BudgetBite on {effective_host}:{effective_port}.\n"
        f"Ledger API available at http://{browser_host}:{effective_port}/ledger"
    )
    uvicorn.run(
        "budgetbite.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def add(name: str, amount: str) -> None:
    """Record an expense NAME costing AMOUNT."""

    store = _open_store()
    try:
        expense = store.add_expense(name, amount)
    except LedgerPersistenceError as error:
        _fail(str(error))
    if expense is None:
        _fail(f"Ignored: '{name}' / '{amount}' is not a valid expense.")
    typer.echo(f"Added {expense.name} {store.currency.symbol}{expense.amount:g} (id {expense.expense_id})")


@cli.command()
def remove(expense_id: int) -> None:
    """Remove the expense with EXPENSE_ID."""

    store = _open_store()
    try:
        removed = store.remove_expense(expense_id)
    except LedgerPersistenceError as error:
        _fail(str(error))
    typer.echo(f"Removed {expense_id}" if removed else f"No expense with id {expense_id}")


@cli.command()
def clear(yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt.")) -> None:
    """Delete every expense."""

    if not yes:
        typer.confirm("Delete all transactions? This action is permanent.", abort=True)
    store = _open_store()
    try:
        store.clear_all()
    except LedgerPersistenceError as error:
        _fail(str(error))
    typer.echo("Ledger cleared.")


@cli.command()
def currency(code: str) -> None:
    """Select the display currency (USD, BDT, EUR or GBP)."""

    store = _open_store()
    try:
        selected = store.set_currency(code)
    except (ValueError, LedgerPersistenceError) as error:
        _fail(str(error))
    typer.echo(f"Currency set to {selected.code} ({selected.symbol})")


@cli.command()
def summary(budget: float = typer.Option(0.0, help="Session budget to measure against.")) -> None:
    """Print totals and per-item budget shares."""

    store = _open_store()
    try:
        store.set_budget(budget)
    except ValueError as error:
        _fail(str(error))
    analytics = compute_analytics(store.snapshot())
    symbol = store.currency.symbol
    typer.echo(f"Total spent:   {symbol}{analytics.total:,.2f}")
    typer.echo(f"Budget:        {symbol}{store.budget:,.2f} ({analytics.usage_percent:.1f}% used)")
    typer.echo(f"Safe to spend: {symbol}{analytics.safe_to_spend:,.2f}")
    for item in analytics.per_item:
        if item.placeholder:
            typer.echo("No transactions yet.")
            break
        typer.echo(f"  {item.color}  {item.name:<24} {symbol}{item.amount:,.2f}  {item.budget_share_percent}%")


@cli.command()
def export(
    kind: str = typer.Argument(..., help="table/csv, image/png or document/pdf."),
    budget: float = typer.Option(0.0, help="Session budget used for percentages."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory for the artifact."),
) -> None:
    """Write an export artifact for the current ledger."""

    store = _open_store()
    try:
        store.set_budget(budget)
        exporter = REGISTRY.create(kind)
    except (ValueError, KeyError) as error:
        _fail(str(error))
    artifact = exporter.export(store.snapshot())
    destination = artifact.write_to(output_dir or get_settings().resolved_export_directory)
    typer.echo(f"Saved {destination}")


if __name__ == "__main__":
    cli()
