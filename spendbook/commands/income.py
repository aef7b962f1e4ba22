"""Income commands (add, edit, delete, clear, list)."""

import sqlite3
import sys

import typer

from spendbook.commands.common import (
    console,
    fail_with_entry_error,
    income_table,
    open_tracker,
    resolve_entry_id,
)
from spendbook.dates import today_string
from spendbook.domain.aggregate import sum_amounts
from spendbook.domain.report import format_money


def add_command(amount: str, source: str, date: str | None = None, note: str = "") -> None:
    """Add an income entry.

    Args:
        amount: Amount received (positive number).
        source: Income source.
        date: Income date; defaults to today.
        note: Optional note.
    """
    tracker = open_tracker()

    try:
        entry, error = tracker.add_income(
            {"amount": amount, "source": source, "date": date or today_string(), "note": note}
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if entry is None:
        fail_with_entry_error(error)
        return

    console.print("[green]✓[/green] Income added:")
    console.print(f"  ID: {entry.id}")
    console.print(f"  Date: {entry.date}")
    console.print(f"  Source: {entry.source}")
    console.print(f"  Amount: {format_money(entry.amount, tracker.settings.currency)}")
    if entry.note:
        console.print(f"  Note: {entry.note}")


def edit_command(
    entry_id: str,
    amount: str | None = None,
    source: str | None = None,
    date: str | None = None,
    note: str | None = None,
) -> None:
    """Edit an income entry. Options that are not given keep their current value."""
    tracker = open_tracker()

    full_id = resolve_entry_id(entry_id, [e.id for e in tracker.income])
    current = next((e for e in tracker.income if e.id == full_id), None)
    if current is None:
        console.print(f"[red]Income entry {entry_id} not found[/red]")
        sys.exit(1)

    raw = {
        "amount": amount if amount is not None else current.amount,
        "source": source if source is not None else current.source,
        "date": date if date is not None else current.date,
        "note": note if note is not None else current.note,
    }

    try:
        entry, error = tracker.update_income(current.id, raw)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if entry is None:
        fail_with_entry_error(error)
        return

    currency = tracker.settings.currency
    console.print(f"[green]✓[/green] Updated income {entry.id}:")
    console.print(f"  {entry.date}  {entry.source}  {format_money(entry.amount, currency)}")


def delete_command(entry_id: str) -> None:
    """Delete an income entry by id (or unique id prefix)."""
    tracker = open_tracker()

    full_id = resolve_entry_id(entry_id, [e.id for e in tracker.income])
    try:
        deleted = tracker.delete_income(full_id) if full_id else False
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if deleted:
        console.print(f"[green]✓[/green] Deleted income {full_id}")
    else:
        console.print(f"[yellow]No income entry matching '{entry_id}'[/yellow]")


def clear_command(yes: bool = False) -> None:
    """Remove all income entries after confirmation."""
    tracker = open_tracker()

    if not tracker.income:
        console.print("[dim]No income to clear[/dim]")
        return

    if not yes and not typer.confirm("Remove all income entries? This cannot be undone.", default=False):
        console.print("[dim]Nothing removed[/dim]")
        return

    try:
        tracker.clear_income()
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] All income removed")


def list_command(limit: int | None = None) -> None:
    """List income entries, newest first."""
    tracker = open_tracker()

    income = sorted(tracker.income, key=lambda e: e.date, reverse=True)
    if not income:
        console.print("[yellow]No income recorded[/yellow]")
        return

    shown = income[:limit] if limit else income
    currency = tracker.settings.currency
    console.print(income_table(f"Income (showing {len(shown)} of {len(income)})", shown, currency))
    console.print(f"\n[bold]Total income:[/bold] {format_money(sum_amounts(income), currency)}")
