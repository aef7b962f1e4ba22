"""CLI entry point for spendbook."""

import typer

from spendbook.commands import expenses, income
from spendbook.commands.admin import backup_command, init_command
from spendbook.commands.report import export_command, report_command
from spendbook.log import set_level

app = typer.Typer(
    name="spendbook",
    help="spendbook - Track every expense, see where the money goes",
    add_completion=False,
)

income_app = typer.Typer(help="Record and manage your income.")
app.add_typer(income_app, name="income")

SORT_HELP = "Sort by dateDesc, dateAsc, amountDesc or amountAsc"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show log messages"),
) -> None:
    """spendbook - Track every expense, see where the money goes."""
    if verbose:
        set_level("INFO", lock=True)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize spendbook database and configuration."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount spent"),
    category: str = typer.Argument(..., help="Expense category"),
    payment_mode: str = typer.Argument(..., help="Payment mode (e.g. Cash, 'Credit Card')"),
    date: str = typer.Option(None, "--date", "-d", help="Expense date (default: today)"),
    description: str = typer.Option("", "--description", "-m", help="Optional note"),
) -> None:
    """Add an expense."""
    expenses.add_command(amount, category, payment_mode, date, description)


@app.command()
def edit(
    entry_id: str = typer.Argument(..., help="Expense id or id prefix"),
    amount: str = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", help="New category"),
    payment_mode: str = typer.Option(None, "--payment-mode", help="New payment mode"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    description: str = typer.Option(None, "--description", "-m", help="New note"),
) -> None:
    """Edit an expense."""
    expenses.edit_command(entry_id, amount, category, payment_mode, date, description)


@app.command()
def delete(
    entry_id: str = typer.Argument(..., help="Expense id or id prefix"),
) -> None:
    """Delete an expense."""
    expenses.delete_command(entry_id)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Remove all your expenses."""
    expenses.clear_command(yes)


@app.command(name="list")
def list_expenses(
    query: str = typer.Option(None, "--query", "-q", help="Search category, payment mode and note"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    payment_mode: str = typer.Option(None, "--payment-mode", "-p", help="Only this payment mode"),
    from_date: str = typer.Option(None, "--from", help="Earliest date (inclusive)"),
    to_date: str = typer.Option(None, "--to", help="Latest date (inclusive)"),
    sort_by: str = typer.Option(None, "--sort", "-s", help=SORT_HELP),
    by_date: bool = typer.Option(False, "--by-date", help="Group your expenses by day"),
) -> None:
    """List your expenses with filters."""
    expenses.list_command(query, category, payment_mode, from_date, to_date, sort_by, by_date)


@app.command()
def daily(
    date: str = typer.Option(None, "--date", "-d", help="Day to total (default: today)"),
) -> None:
    """Show how much you spent on one day."""
    expenses.daily_command(date)


@app.command()
def breakdown(
    query: str = typer.Option(None, "--query", "-q", help="Search category, payment mode and note"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    payment_mode: str = typer.Option(None, "--payment-mode", "-p", help="Only this payment mode"),
    from_date: str = typer.Option(None, "--from", help="Earliest date (inclusive)"),
    to_date: str = typer.Option(None, "--to", help="Latest date (inclusive)"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show your spending per category."""
    expenses.breakdown_command(query, category, payment_mode, from_date, to_date, histogram)


@app.command()
def report(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """Show your monthly income, spending and savings."""
    report_command(month)


@app.command()
def export(
    month: str = typer.Argument(..., help="Month to export (YYYY-MM)"),
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: print)"),
    export_format: str = typer.Option("md", "--format", "-f", help="Export format: md or csv"),
) -> None:
    """Export a month's report and entries."""
    export_command(month, output, export_format)


@income_app.command(name="add")
def income_add(
    amount: str = typer.Argument(..., help="Amount received"),
    source: str = typer.Argument(..., help="Income source"),
    date: str = typer.Option(None, "--date", "-d", help="Income date (default: today)"),
    note: str = typer.Option("", "--note", "-m", help="Optional note"),
) -> None:
    """Add an income entry."""
    income.add_command(amount, source, date, note)


@income_app.command(name="edit")
def income_edit(
    entry_id: str = typer.Argument(..., help="Income id or id prefix"),
    amount: str = typer.Option(None, "--amount", help="New amount"),
    source: str = typer.Option(None, "--source", help="New source"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    note: str = typer.Option(None, "--note", "-m", help="New note"),
) -> None:
    """Edit an income entry."""
    income.edit_command(entry_id, amount, source, date, note)


@income_app.command(name="list")
def income_list(
    limit: int = typer.Option(None, "--limit", "-n", help="Maximum entries to show"),
) -> None:
    """List your income."""
    income.list_command(limit)


@income_app.command(name="delete")
def income_delete(
    entry_id: str = typer.Argument(..., help="Income id or id prefix"),
) -> None:
    """Delete an income entry."""
    income.delete_command(entry_id)


@income_app.command(name="clear")
def income_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Remove all your income entries."""
    income.clear_command(yes)


if __name__ == "__main__":
    app()
