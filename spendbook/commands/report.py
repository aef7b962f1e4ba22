"""Report and export commands for monthly summaries."""

import sys
from pathlib import Path

import pandas as pd
from rich.table import Table

from spendbook.commands.common import console, expense_table, income_table, open_tracker
from spendbook.dates import format_month_label, is_valid_month
from spendbook.domain.entries import ExpenseEntry, IncomeEntry, expense_to_record, income_to_record
from spendbook.domain.models import Month
from spendbook.domain.report import MonthlyReport, format_money, render_month_document

EXPORT_FORMATS = ("md", "csv")


def format_savings_with_color(savings: float, currency: str) -> str:
    """Format savings, red when negative and green otherwise."""
    text = format_money(savings, currency)
    if savings < 0:
        return f"[red]{text}[/red]"
    return f"[green]{text}[/green]"


def format_top(name: str, amount: float, currency: str) -> str:
    """Format a top category/source cell, or a dim 'none' marker."""
    if not name:
        return "[dim]none[/dim]"
    return f"{name} ({format_money(amount, currency)})"


def reports_table(reports: list[MonthlyReport], currency: str) -> Table:
    """Build a rich table with one row per monthly report."""
    table = Table(title="Monthly reports")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Savings", justify="right")
    table.add_column("Top category", style="magenta")
    table.add_column("Top source", style="magenta")

    for report in reports:
        table.add_row(
            format_month_label(report.month),
            f"[green]{format_money(report.total_income, currency)}[/green]",
            f"[red]{format_money(report.total_expense, currency)}[/red]",
            format_savings_with_color(report.savings, currency),
            format_top(report.top_category, report.top_category_amount, currency),
            format_top(report.top_source, report.top_source_amount, currency),
        )
    return table


def parse_month_option(month: str) -> Month:
    """Validate a YYYY-MM option, exiting on bad input."""
    if not is_valid_month(month):
        console.print(f"[red]Invalid month '{month}' (expected YYYY-MM)[/red]")
        sys.exit(1)
    return Month(month)


def report_command(month: str | None = None) -> None:
    """Show monthly income, spending and savings.

    Args:
        month: Optional month (YYYY-MM) to show in detail; otherwise every month.
    """
    tracker = open_tracker()
    currency = tracker.settings.currency

    if month is None:
        reports = tracker.get_monthly_reports()
        if not reports:
            console.print("[dim]No entries yet[/dim]")
            return
        console.print(reports_table(reports, currency))
        console.print("[dim]Savings exclude credit card spending.[/dim]")
        return

    report, expenses, income = tracker.month_export(parse_month_option(month))
    console.print(f"[bold cyan]{format_month_label(report.month)}[/bold cyan]\n")
    console.print(f"  [bold]Income:[/bold]   {format_money(report.total_income, currency)}")
    console.print(f"  [bold]Expenses:[/bold] {format_money(report.total_expense, currency)}")
    console.print(f"  [bold]Savings:[/bold]  {format_savings_with_color(report.savings, currency)}")
    console.print(f"  [bold]Top category:[/bold] {format_top(report.top_category, report.top_category_amount, currency)}")
    console.print(f"  [bold]Top source:[/bold]   {format_top(report.top_source, report.top_source_amount, currency)}\n")

    if expenses:
        console.print(expense_table("Expenses", sorted(expenses, key=lambda e: e.date), currency))
    if income:
        console.print(income_table("Income", sorted(income, key=lambda e: e.date), currency))


def month_frame(expenses: list[ExpenseEntry], income: list[IncomeEntry]) -> pd.DataFrame:
    """Combine a month's entries into one DataFrame for CSV export.

    Expenses and income share date/amount/note columns; the kind column tells
    them apart.
    """
    rows = [
        {
            "kind": "expense",
            "date": record["date"],
            "category": record["category"],
            "payment_mode": record["paymentMode"],
            "source": "",
            "amount": record["amount"],
            "note": record["description"],
            "id": record["id"],
        }
        for record in map(expense_to_record, expenses)
    ]
    rows += [
        {
            "kind": "income",
            "date": record["date"],
            "category": "",
            "payment_mode": "",
            "source": record["source"],
            "amount": record["amount"],
            "note": record["note"],
            "id": record["id"],
        }
        for record in map(income_to_record, income)
    ]
    columns = ["kind", "date", "category", "payment_mode", "source", "amount", "note", "id"]
    frame = pd.DataFrame(rows, columns=columns)
    return frame.sort_values(["date", "kind"], kind="stable").reset_index(drop=True)


def export_command(month: str, output: str | None = None, export_format: str = "md") -> None:
    """Export a month's report and entries.

    Args:
        month: Month to export (YYYY-MM).
        output: Output file. If None, prints to the terminal.
        export_format: 'md' for a Markdown report, 'csv' for the entries as CSV.
    """
    if export_format not in EXPORT_FORMATS:
        console.print(f"[red]Unknown format '{export_format}' (use {' or '.join(EXPORT_FORMATS)})[/red]")
        sys.exit(1)

    tracker = open_tracker()
    report, expenses, income = tracker.month_export(parse_month_option(month))

    if export_format == "csv":
        content = month_frame(expenses, income).to_csv(index=False)
    else:
        content = render_month_document(report, expenses, income, tracker.settings.currency)

    if output is None:
        console.print(content, markup=False, highlight=False, soft_wrap=True, end="")
        return

    path = Path(output).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {format_month_label(report.month)} to: {path}")
