"""Pure filtering and sorting of expense entries.

This module contains the functional core for the expense list view:
- No I/O operations
- No side effects (inputs are never mutated)
- Stable ordering: entries that compare equal keep their input order
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from spendbook.domain.entries import ExpenseEntry


class SortKey(str, Enum):
    """Supported orderings for the expense list."""

    DATE_DESC = "dateDesc"
    DATE_ASC = "dateAsc"
    AMOUNT_DESC = "amountDesc"
    AMOUNT_ASC = "amountAsc"

    @classmethod
    def parse(cls, value: "str | SortKey | None") -> "SortKey":
        """Parse a sort key, falling back to newest first for unknown values."""
        if isinstance(value, SortKey):
            return value
        for key in cls:
            if key.value == value:
                return key
        return cls.DATE_DESC


@dataclass(frozen=True)
class FilterSpec:
    """Active filter and sort criteria. Empty fields mean no constraint."""

    query: str = ""
    category: str = ""
    payment_mode: str = ""
    from_date: str = ""
    to_date: str = ""
    sort_by: SortKey = SortKey.DATE_DESC


def search_text(expense: ExpenseEntry) -> str:
    """Build the lower-cased text that free-text queries search in."""
    return f"{expense.description} {expense.category} {expense.payment_mode}".lower().strip()


def matches_filter(expense: ExpenseEntry, spec: FilterSpec) -> bool:
    """Check whether an expense passes every enabled criterion.

    Args:
        expense: Expense to test.
        spec: Filter criteria.

    Returns:
        True if the expense should be shown.
    """
    if spec.category and expense.category != spec.category:
        return False
    if spec.payment_mode and expense.payment_mode != spec.payment_mode:
        return False
    # ISO dates compare chronologically as strings
    if spec.from_date and expense.date < spec.from_date:
        return False
    if spec.to_date and expense.date > spec.to_date:
        return False

    query = spec.query.strip().lower()
    if not query:
        return True
    return query in search_text(expense)


def filter_entries(entries: Iterable[ExpenseEntry], spec: FilterSpec) -> list[ExpenseEntry]:
    """Select the expenses matching a filter, keeping their relative order.

    Args:
        entries: Expenses to filter.
        spec: Filter criteria.

    Returns:
        New list of matching expenses.
    """
    return [expense for expense in entries if matches_filter(expense, spec)]


def sort_entries(entries: Sequence[ExpenseEntry], sort_by: "SortKey | str" = SortKey.DATE_DESC) -> list[ExpenseEntry]:
    """Sort expenses by the chosen key.

    Python's sort is stable, including with reverse=True, so ties keep their
    input order for every key.

    Args:
        entries: Expenses to sort.
        sort_by: Sort key (unknown keys sort newest first).

    Returns:
        New sorted list.
    """
    key = SortKey.parse(sort_by)
    if key is SortKey.DATE_ASC:
        return sorted(entries, key=lambda e: e.date)
    if key is SortKey.AMOUNT_DESC:
        return sorted(entries, key=lambda e: e.amount, reverse=True)
    if key is SortKey.AMOUNT_ASC:
        return sorted(entries, key=lambda e: e.amount)
    return sorted(entries, key=lambda e: e.date, reverse=True)


def apply_filter(entries: Iterable[ExpenseEntry], spec: FilterSpec) -> list[ExpenseEntry]:
    """Filter then sort expenses according to a FilterSpec."""
    return sort_entries(filter_entries(entries, spec), spec.sort_by)
