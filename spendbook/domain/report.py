"""Pure functions for monthly reports and report documents.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are Money (decimal currency units).
"""

from collections.abc import Sequence
from dataclasses import dataclass

from spendbook.dates import format_month_label
from spendbook.domain.aggregate import (
    month_key_of,
    savings_eligible,
    sum_amounts,
    top_by_amount,
    totals_by_key,
)
from spendbook.domain.entries import ExpenseEntry, IncomeEntry
from spendbook.domain.models import Money, Month


@dataclass(frozen=True)
class MonthlyReport:
    """Immutable income, expense and savings summary for one month.

    An empty top_category or top_source means the month has no entries on
    that side.
    """

    month: Month
    total_expense: Money
    total_income: Money
    savings: Money
    top_category: str
    top_category_amount: Money
    top_source: str
    top_source_amount: Money


def entries_for_month(entries: Sequence[ExpenseEntry], month: Month) -> list[ExpenseEntry]:
    """Select the expenses dated in a month."""
    return [entry for entry in entries if month_key_of(entry.date) == month]


def income_for_month(entries: Sequence[IncomeEntry], month: Month) -> list[IncomeEntry]:
    """Select the income entries dated in a month."""
    return [entry for entry in entries if month_key_of(entry.date) == month]


def build_month_report(
    expenses: Sequence[ExpenseEntry],
    income: Sequence[IncomeEntry],
    month: Month,
) -> MonthlyReport:
    """Build the report for a single month.

    Savings count only cash-like spending: credit card expenses are part of
    total_expense but not of the savings base.

    Args:
        expenses: All expenses (filtered to the month here).
        income: All income entries (filtered to the month here).
        month: Month key in YYYY-MM format.

    Returns:
        MonthlyReport for the month (all zeros if it has no entries).
    """
    month_expenses = entries_for_month(expenses, month)
    month_income = income_for_month(income, month)

    total_expense = sum_amounts(month_expenses)
    total_income = sum_amounts(month_income)
    savings_base = sum_amounts(e for e in month_expenses if savings_eligible(e))

    top_category = top_by_amount(totals_by_key(month_expenses, lambda e: e.category))
    top_source = top_by_amount(totals_by_key(month_income, lambda e: e.source))

    return MonthlyReport(
        month=month,
        total_expense=total_expense,
        total_income=total_income,
        savings=Money(total_income - savings_base),
        top_category=top_category.name,
        top_category_amount=top_category.amount,
        top_source=top_source.name,
        top_source_amount=top_source.amount,
    )


def report_months(expenses: Sequence[ExpenseEntry], income: Sequence[IncomeEntry]) -> list[Month]:
    """List distinct month keys present in either collection, newest first."""
    months = {month_key_of(e.date) for e in expenses} | {month_key_of(e.date) for e in income}
    return sorted(months, reverse=True)


def build_monthly_reports(
    expenses: Sequence[ExpenseEntry],
    income: Sequence[IncomeEntry],
) -> list[MonthlyReport]:
    """Build one report per month that has any expense or income.

    Args:
        expenses: All expenses.
        income: All income entries.

    Returns:
        Reports ordered by month, most recent first.
    """
    return [build_month_report(expenses, income, month) for month in report_months(expenses, income)]


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def format_money(amount: Money | float, currency: str = "$") -> str:
    """Format an amount for display, e.g. $1,234.50 or -$12.00."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency}{abs(amount):,.2f}"


def render_month_document(
    report: MonthlyReport,
    expenses: Sequence[ExpenseEntry],
    income: Sequence[IncomeEntry],
    currency: str = "$",
) -> str:
    """Render a month's report and entries as a Markdown document.

    Args:
        report: The month's report.
        expenses: Expenses to list (entries outside the month are dropped).
        income: Income entries to list (entries outside the month are dropped).
        currency: Currency symbol for amounts.

    Returns:
        Markdown text.
    """
    month_expenses = sorted(entries_for_month(expenses, report.month), key=lambda e: e.date)
    month_income = sorted(income_for_month(income, report.month), key=lambda e: e.date)

    lines = [
        f"# Monthly report: {format_month_label(report.month)}",
        "",
        "## Summary",
        "",
        f"- Total income: {format_money(report.total_income, currency)}",
        f"- Total expenses: {format_money(report.total_expense, currency)}",
        f"- Savings: {format_money(report.savings, currency)}",
    ]

    if report.top_category:
        lines.append(
            f"- Top category: {report.top_category} ({format_money(report.top_category_amount, currency)})"
        )
    else:
        lines.append("- Top category: none")

    if report.top_source:
        lines.append(f"- Top source: {report.top_source} ({format_money(report.top_source_amount, currency)})")
    else:
        lines.append("- Top source: none")

    lines += ["", "## Expenses", ""]
    if month_expenses:
        lines += ["| Date | Category | Payment | Amount | Note |", "| --- | --- | --- | ---: | --- |"]
        for e in month_expenses:
            lines.append(
                f"| {e.date} | {e.category} | {e.payment_mode} | {format_money(e.amount, currency)} "
                f"| {e.description or '-'} |"
            )
    else:
        lines.append("No expenses recorded.")

    lines += ["", "## Income", ""]
    if month_income:
        lines += ["| Date | Source | Amount | Note |", "| --- | --- | ---: | --- |"]
        for i in month_income:
            lines.append(f"| {i.date} | {i.source} | {format_money(i.amount, currency)} | {i.note or '-'} |")
    else:
        lines.append("No income recorded.")

    return "\n".join(lines) + "\n"
