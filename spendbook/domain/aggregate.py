"""Pure aggregation functions over expense and income entries.

This module contains the functional core for totals and groupings:
- No I/O operations (no database, no console, no files)
- No side effects
- Single linear passes with explicit accumulators

Amounts are Money (decimal currency units).
"""

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from spendbook.domain.entries import ExpenseEntry, IncomeEntry
from spendbook.domain.models import CREDIT_CARD, CategoryName, Money, Month

E = TypeVar("E", ExpenseEntry, IncomeEntry)
K = TypeVar("K", bound=Hashable)


@dataclass
class Group(Generic[E]):
    """Entries sharing a key, with their running total."""

    items: list[E] = field(default_factory=list)
    total: Money = Money(0)

    def add(self, entry: E) -> None:
        self.items.append(entry)
        self.total = Money(self.total + entry.amount)


@dataclass(frozen=True)
class Top:
    """The key with the greatest total. Empty name means none."""

    name: str
    amount: Money


@dataclass(frozen=True)
class DateGroup:
    """Immutable group of expenses recorded on one date."""

    date: str
    items: list[ExpenseEntry]
    total: Money


def sum_amounts(entries: Iterable[E]) -> Money:
    """Sum entry amounts.

    Args:
        entries: Entries to sum.

    Returns:
        Total amount, 0 for no entries.
    """
    return Money(sum((entry.amount for entry in entries), 0.0))


def group_by_key(entries: Iterable[E], key_fn: Callable[[E], K]) -> dict[K, Group[E]]:
    """Group entries by key, keeping each group's items in input order.

    Args:
        entries: Entries to group (already sorted as the caller wants items).
        key_fn: Function returning the group key of an entry.

    Returns:
        Dictionary of key to Group.
    """
    groups: dict[K, Group[E]] = {}
    for entry in entries:
        key = key_fn(entry)
        if key not in groups:
            groups[key] = Group()
        groups[key].add(entry)
    return groups


def totals_by_key(entries: Iterable[E], key_fn: Callable[[E], K]) -> dict[K, Money]:
    """Total entry amounts per key.

    Args:
        entries: Entries to total.
        key_fn: Function returning the key of an entry.

    Returns:
        Dictionary of key to total amount.
    """
    totals: dict[K, Money] = {}
    for entry in entries:
        key = key_fn(entry)
        totals[key] = Money(totals.get(key, 0.0) + entry.amount)
    return totals


def top_by_amount(totals: Mapping[K, Money]) -> Top:
    """Find the key with the strictly greatest total.

    Args:
        totals: Dictionary of key to total amount.

    Returns:
        Top entry; ties keep the first key encountered, empty input gives Top("", 0).
    """
    best = Top(name="", amount=Money(0))
    found = False
    for name, amount in totals.items():
        if not found or amount > best.amount:
            best = Top(name=str(name), amount=amount)
            found = True
    return best


def group_by_date(expenses: Sequence[ExpenseEntry]) -> list[DateGroup]:
    """Cluster expenses by date, newest date first.

    Items within a date are ordered by amount, largest first.

    Args:
        expenses: Expenses to group.

    Returns:
        List of DateGroup in date-descending order.
    """
    ordered = sorted(expenses, key=lambda e: (e.date, e.amount), reverse=True)

    groups: list[DateGroup] = []
    current: list[ExpenseEntry] = []
    for expense in ordered:
        if current and current[0].date != expense.date:
            groups.append(DateGroup(date=current[0].date, items=current, total=sum_amounts(current)))
            current = []
        current.append(expense)

    if current:
        groups.append(DateGroup(date=current[0].date, items=current, total=sum_amounts(current)))

    return groups


def month_key_of(date: str) -> Month:
    """Derive the YYYY-MM month key of an ISO date."""
    return Month(date[:7])


def savings_eligible(expense: ExpenseEntry) -> bool:
    """Check whether an expense counts against cash savings.

    Credit card spend is not an immediate cash outflow.
    """
    return expense.payment_mode != CREDIT_CARD


def category_totals(expenses: Iterable[ExpenseEntry]) -> dict[CategoryName, Money]:
    """Total expenses per category."""
    return totals_by_key(expenses, lambda e: e.category)


def daily_total(expenses: Iterable[ExpenseEntry], date: str) -> Money:
    """Total of the expenses recorded on one date."""
    return sum_amounts(expense for expense in expenses if expense.date == date)
