"""Expense commands (add, edit, delete, clear, list, daily, breakdown)."""

import sqlite3
import sys

import typer

from spendbook.commands.common import (
    console,
    expense_table,
    fail_with_entry_error,
    open_tracker,
    resolve_date,
    resolve_entry_id,
)
from spendbook.dates import today_string
from spendbook.domain.models import Money
from spendbook.domain.report import calculate_histogram_bar_length, format_money
from spendbook.tracker import ExpenseTracker


def apply_list_filters(
    tracker: ExpenseTracker,
    query: str | None = None,
    category: str | None = None,
    payment_mode: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    sort_by: str | None = None,
) -> None:
    """Set the tracker filter from command-line options."""
    changes: dict[str, str] = {
        "query": query or "",
        "category": category or "",
        "payment_mode": payment_mode or "",
        "from_date": resolve_date(from_date) if from_date else "",
        "to_date": resolve_date(to_date) if to_date else "",
    }
    if sort_by:
        changes["sort_by"] = sort_by
    tracker.set_filter(**changes)


def add_command(
    amount: str,
    category: str,
    payment_mode: str,
    date: str | None = None,
    description: str = "",
) -> None:
    """Add an expense.

    Args:
        amount: Amount spent (positive number).
        category: Expense category.
        payment_mode: How the expense was paid.
        date: Expense date; defaults to today.
        description: Optional note.
    """
    tracker = open_tracker()

    try:
        entry, error = tracker.add_expense(
            {
                "amount": amount,
                "category": category,
                "paymentMode": payment_mode,
                "date": date or today_string(),
                "description": description,
            }
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if entry is None:
        fail_with_entry_error(error)
        return

    currency = tracker.settings.currency
    console.print("[green]✓[/green] Expense added:")
    console.print(f"  ID: {entry.id}")
    console.print(f"  Date: {entry.date}")
    console.print(f"  Category: {entry.category}")
    console.print(f"  Payment: {entry.payment_mode}")
    console.print(f"  Amount: {format_money(entry.amount, currency)}")
    if entry.description:
        console.print(f"  Note: {entry.description}")


def edit_command(
    entry_id: str,
    amount: str | None = None,
    category: str | None = None,
    payment_mode: str | None = None,
    date: str | None = None,
    description: str | None = None,
) -> None:
    """Edit an expense. Options that are not given keep their current value."""
    tracker = open_tracker()

    full_id = resolve_entry_id(entry_id, [e.id for e in tracker.expenses])
    current = next((e for e in tracker.expenses if e.id == full_id), None)
    if current is None:
        console.print(f"[red]Expense {entry_id} not found[/red]")
        sys.exit(1)

    raw = {
        "amount": amount if amount is not None else current.amount,
        "category": category if category is not None else current.category,
        "paymentMode": payment_mode if payment_mode is not None else current.payment_mode,
        "date": date if date is not None else current.date,
        "description": description if description is not None else current.description,
    }

    try:
        entry, error = tracker.update_expense(current.id, raw)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if entry is None:
        fail_with_entry_error(error)
        return

    currency = tracker.settings.currency
    console.print(f"[green]✓[/green] Updated expense {entry.id}:")
    console.print(f"  {entry.date}  {entry.category}  {entry.payment_mode}  {format_money(entry.amount, currency)}")


def delete_command(entry_id: str) -> None:
    """Delete an expense by id (or unique id prefix)."""
    tracker = open_tracker()

    full_id = resolve_entry_id(entry_id, [e.id for e in tracker.expenses])
    try:
        deleted = tracker.delete_expense(full_id) if full_id else False
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if deleted:
        console.print(f"[green]✓[/green] Deleted expense {full_id}")
    else:
        console.print(f"[yellow]No expense matching '{entry_id}'[/yellow]")


def clear_command(yes: bool = False) -> None:
    """Remove all expenses after confirmation."""
    tracker = open_tracker()

    if not tracker.expenses:
        console.print("[dim]No expenses to clear[/dim]")
        return

    if not yes and not typer.confirm("Remove all expenses? This cannot be undone.", default=False):
        console.print("[dim]Nothing removed[/dim]")
        return

    try:
        tracker.clear_expenses()
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] All expenses removed")


def list_command(
    query: str | None = None,
    category: str | None = None,
    payment_mode: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    sort_by: str | None = None,
    by_date: bool = False,
) -> None:
    """List expenses matching the filters."""
    tracker = open_tracker()
    apply_list_filters(tracker, query, category, payment_mode, from_date, to_date, sort_by)
    currency = tracker.settings.currency

    expenses = tracker.get_filtered_sorted_expenses()
    if not expenses:
        console.print("[yellow]No expenses found[/yellow]")
        return

    if by_date:
        for group in tracker.get_date_groups():
            title = f"{group.date} ({format_money(group.total, currency)})"
            console.print(expense_table(title, group.items, currency))
    else:
        console.print(expense_table(f"Expenses ({len(expenses)} items)", expenses, currency))

    console.print(f"\n[bold]Total spent (filtered):[/bold] {format_money(tracker.total_filtered(), currency)}")
    console.print(f"[dim]All time: {format_money(tracker.total_all_time(), currency)}[/dim]")


def daily_command(date: str | None = None) -> None:
    """Show the total spent on one day (default today)."""
    tracker = open_tracker()
    day = resolve_date(date)
    currency = tracker.settings.currency

    tracker.set_filter(from_date=day, to_date=day)
    expenses = tracker.get_filtered_sorted_expenses()

    if expenses:
        console.print(expense_table(f"Expenses on {day}", expenses, currency))
    console.print(f"[bold]Spent on {day}:[/bold] {format_money(tracker.get_daily_total(day), currency)}")


def breakdown_command(
    query: str | None = None,
    category: str | None = None,
    payment_mode: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    histogram: bool = True,
) -> None:
    """Show expense totals per category for the filtered expenses."""
    tracker = open_tracker()
    apply_list_filters(tracker, query, category, payment_mode, from_date, to_date)
    currency = tracker.settings.currency

    totals = tracker.get_category_totals()
    if not totals:
        console.print("[dim]Add expenses to see totals.[/dim]")
        return

    console.print("[bold red]Expenses by category:[/bold red]\n")
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    max_amount = Money(max(totals.values()))
    bar_width = 30

    for name, amount in ordered:
        amount_display = format_money(amount, currency)
        if histogram:
            bar = "█" * calculate_histogram_bar_length(amount, max_amount, bar_width)
            console.print(f"  {name:20} {amount_display:>12} {bar}")
        else:
            console.print(f"  {name}: {amount_display}")

    console.print(f"\n  [bold]Total:[/bold] {format_money(tracker.total_filtered(), currency)}")
