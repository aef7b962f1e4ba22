"""Helpers shared by the CLI commands."""

import sqlite3
import sys
import tomllib
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from spendbook.config import Settings, load_settings
from spendbook.dates import normalize_date, today_string
from spendbook.domain.entries import ExpenseEntry, IncomeEntry
from spendbook.domain.report import format_money
from spendbook.domain.validation import EntryError
from spendbook.log import set_level
from spendbook.store.schema import get_db_path
from spendbook.tracker import ExpenseTracker

console = Console()


def get_settings() -> Settings:
    """Load settings, exiting with a message if the config file is broken."""
    try:
        settings = load_settings()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {e}[/red]", style="bold")
        sys.exit(1)
    set_level(settings.log_level)
    return settings


def open_tracker(settings: Settings | None = None) -> ExpenseTracker:
    """Open the tracker on the default database, exiting on database errors."""
    try:
        return ExpenseTracker.open(get_db_path(), settings or get_settings())
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def fail_with_entry_error(error: EntryError | None) -> None:
    """Print an entry error and exit."""
    message = error.message if error else "Entry rejected."
    console.print(f"[red]{message}[/red]")
    sys.exit(1)


def resolve_date(raw_date: str | None) -> str:
    """Normalize a date option, defaulting to today. Exits on bad input."""
    if not raw_date:
        return today_string()
    try:
        return normalize_date(raw_date)
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)


def expense_table(title: str, expenses: Sequence[ExpenseEntry], currency: str) -> Table:
    """Build a rich table of expenses."""
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Payment", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Note", style="white")

    for expense in expenses:
        table.add_row(
            expense.id[:8],
            expense.date,
            expense.category,
            expense.payment_mode,
            f"[red]{format_money(expense.amount, currency)}[/red]",
            expense.description or "[dim]-[/dim]",
        )
    return table


def income_table(title: str, income: Sequence[IncomeEntry], currency: str) -> Table:
    """Build a rich table of income entries."""
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Source", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Note", style="white")

    for entry in income:
        table.add_row(
            entry.id[:8],
            entry.date,
            entry.source,
            f"[green]{format_money(entry.amount, currency)}[/green]",
            entry.note or "[dim]-[/dim]",
        )
    return table


def resolve_entry_id(prefix: str, ids: Sequence[str]) -> str | None:
    """Resolve a full id or unique id prefix (as shown in tables).

    Returns:
        The matching id, or None if nothing or more than one id matches.
    """
    if not prefix:
        return None
    if prefix in ids:
        return prefix
    matches = [entry_id for entry_id in ids if entry_id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None
