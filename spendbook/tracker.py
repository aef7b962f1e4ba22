"""Application state and commands.

ExpenseTracker owns the expense and income collections plus the active
filter. Every change goes through a named command, and every command that
changes a collection writes it back to the store before the change becomes
visible in memory, so a failed write leaves both sides as they were.
"""

import uuid
from collections.abc import Callable, Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from spendbook.config import Settings
from spendbook.domain.aggregate import DateGroup, category_totals, daily_total, group_by_date, sum_amounts
from spendbook.domain.entries import ExpenseEntry, IncomeEntry
from spendbook.domain.filters import FilterSpec, SortKey, apply_filter
from spendbook.domain.models import CategoryName, EntryId, Money, Month
from spendbook.domain.report import (
    MonthlyReport,
    build_month_report,
    build_monthly_reports,
    entries_for_month,
    income_for_month,
)
from spendbook.domain.validation import EntryError, validate_expense, validate_income
from spendbook.log import get_logger
from spendbook.store.entries import load_expenses, load_income, save_expenses, save_income

logger = get_logger(__name__)

_FILTER_FIELDS = {"query", "category", "payment_mode", "from_date", "to_date", "sort_by"}


def new_entry_id() -> EntryId:
    """Generate a fresh unique entry id."""
    return EntryId(uuid.uuid4().hex)


class ExpenseTracker:
    """Expense and income collections with their commands and derived views."""

    def __init__(
        self,
        db_path: Path | None = None,
        settings: Settings | None = None,
        id_factory: Callable[[], EntryId] = new_entry_id,
        expenses: list[ExpenseEntry] | None = None,
        income: list[IncomeEntry] | None = None,
    ) -> None:
        self.db_path = db_path
        self.settings = settings or Settings()
        self._new_id = id_factory
        self._expenses: list[ExpenseEntry] = list(expenses or [])
        self._income: list[IncomeEntry] = list(income or [])
        self._filter = FilterSpec(sort_by=self.settings.default_sort)

    @classmethod
    def open(
        cls,
        db_path: Path | None = None,
        settings: Settings | None = None,
        id_factory: Callable[[], EntryId] = new_entry_id,
    ) -> "ExpenseTracker":
        """Load both collections from the store.

        Raises:
            sqlite3.Error: If the store cannot be read.
        """
        return cls(
            db_path=db_path,
            settings=settings,
            id_factory=id_factory,
            expenses=load_expenses(db_path),
            income=load_income(db_path),
        )

    @property
    def expenses(self) -> tuple[ExpenseEntry, ...]:
        return tuple(self._expenses)

    @property
    def income(self) -> tuple[IncomeEntry, ...]:
        return tuple(self._income)

    @property
    def filter_spec(self) -> FilterSpec:
        return self._filter

    def _commit_expenses(self, expenses: list[ExpenseEntry]) -> None:
        save_expenses(expenses, self.db_path)
        self._expenses = expenses

    def _commit_income(self, income: list[IncomeEntry]) -> None:
        save_income(income, self.db_path)
        self._income = income

    # Expense commands

    def add_expense(self, raw: Mapping[str, Any]) -> tuple[ExpenseEntry | None, EntryError | None]:
        """Validate and add an expense as the newest entry.

        Returns:
            Tuple of (entry, error). On error nothing is stored.

        Raises:
            sqlite3.Error: If the store cannot be written.
        """
        draft, error = validate_expense(raw, self.settings.categories, self.settings.payment_modes)
        if draft is None:
            return None, error

        entry = draft.with_id(self._new_id())
        self._commit_expenses([entry, *self._expenses])
        logger.info("Added expense %s (%s %.2f)", entry.id, entry.category, entry.amount)
        return entry, None

    def update_expense(
        self, entry_id: str, raw: Mapping[str, Any]
    ) -> tuple[ExpenseEntry | None, EntryError | None]:
        """Replace an expense, keeping its id and position.

        Returns:
            Tuple of (entry, error). On error nothing is stored.

        Raises:
            sqlite3.Error: If the store cannot be written.
        """
        index = next((i for i, e in enumerate(self._expenses) if e.id == entry_id), None)
        if index is None:
            return None, EntryError.ENTRY_NOT_FOUND

        draft, error = validate_expense(raw, self.settings.categories, self.settings.payment_modes)
        if draft is None:
            return None, error

        entry = draft.with_id(self._expenses[index].id)
        expenses = list(self._expenses)
        expenses[index] = entry
        self._commit_expenses(expenses)
        logger.info("Updated expense %s", entry.id)
        return entry, None

    def delete_expense(self, entry_id: str) -> bool:
        """Remove an expense by id. Unknown ids are a no-op.

        Returns:
            True if an entry was removed.

        Raises:
            sqlite3.Error: If the store cannot be written.
        """
        remaining = [e for e in self._expenses if e.id != entry_id]
        if len(remaining) == len(self._expenses):
            return False
        self._commit_expenses(remaining)
        logger.info("Deleted expense %s", entry_id)
        return True

    def clear_expenses(self) -> None:
        """Remove every expense.

        Raises:
            sqlite3.Error: If the store cannot be written.
        """
        count = len(self._expenses)
        self._commit_expenses([])
        logger.info("Cleared %d expenses", count)

    # Income commands

    def add_income(self, raw: Mapping[str, Any]) -> tuple[IncomeEntry | None, EntryError | None]:
        """Validate and add an income entry as the newest entry.

        Returns:
            Tuple of (entry, error). On error nothing is stored.

        Raises:
            sqlite3.Error: If the store cannot be written.
        """
        draft, error = validate_income(raw, self.settings.income_sources)
        if draft is None:
            return None, error

        entry = draft.with_id(self._new_id())
        self._commit_income([entry, *self._income])
        logger.info("Added income %s (%s %.2f)", entry.id, entry.source, entry.amount)
        return entry, None

    def update_income(self, entry_id: str, raw: Mapping[str, Any]) -> tuple[IncomeEntry | None, EntryError | None]:
        """Replace an income entry, keeping its id and position.

        Returns:
            Tuple of (entry, error). On error nothing is stored.

        Raises:
            sqlite3.Error: If the store cannot be written.
        """
        index = next((i for i, e in enumerate(self._income) if e.id == entry_id), None)
        if index is None:
            return None, EntryError.ENTRY_NOT_FOUND

        draft, error = validate_income(raw, self.settings.income_sources)
        if draft is None:
            return None, error

        entry = draft.with_id(self._income[index].id)
        income = list(self._income)
        income[index] = entry
        self._commit_income(income)
        logger.info("Updated income %s", entry.id)
        return entry, None

    def delete_income(self, entry_id: str) -> bool:
        """Remove an income entry by id. Unknown ids are a no-op.

        Returns:
            True if an entry was removed.

        Raises:
            sqlite3.Error: If the store cannot be written.
        """
        remaining = [e for e in self._income if e.id != entry_id]
        if len(remaining) == len(self._income):
            return False
        self._commit_income(remaining)
        logger.info("Deleted income %s", entry_id)
        return True

    def clear_income(self) -> None:
        """Remove every income entry.

        Raises:
            sqlite3.Error: If the store cannot be written.
        """
        count = len(self._income)
        self._commit_income([])
        logger.info("Cleared %d income entries", count)

    # Filter and views

    def set_filter(self, spec: FilterSpec | None = None, **changes: Any) -> FilterSpec:
        """Replace the active filter, or update some of its fields.

        Args:
            spec: New filter. If None, the current filter is the starting point.
            **changes: Field updates (query, category, payment_mode, from_date,
                to_date, sort_by).

        Returns:
            The active filter.

        Raises:
            TypeError: If an unknown filter field is given.
        """
        unknown = set(changes) - _FILTER_FIELDS
        if unknown:
            raise TypeError(f"Unknown filter fields: {', '.join(sorted(unknown))}")

        if "sort_by" in changes:
            changes["sort_by"] = SortKey.parse(changes["sort_by"])
        for key in _FILTER_FIELDS - {"sort_by"}:
            if key in changes and changes[key] is None:
                changes[key] = ""

        self._filter = replace(spec or self._filter, **changes)
        return self._filter

    def get_filtered_sorted_expenses(self) -> list[ExpenseEntry]:
        """Expenses matching the active filter, in its sort order."""
        return apply_filter(self._expenses, self._filter)

    def get_date_groups(self) -> list[DateGroup]:
        """Filtered expenses grouped by date, newest first."""
        return group_by_date(self.get_filtered_sorted_expenses())

    def get_category_totals(self) -> dict[CategoryName, Money]:
        """Category totals over the filtered expenses."""
        return category_totals(self.get_filtered_sorted_expenses())

    def total_all_time(self) -> Money:
        return sum_amounts(self._expenses)

    def total_filtered(self) -> Money:
        return sum_amounts(self.get_filtered_sorted_expenses())

    def get_daily_total(self, date: str) -> Money:
        """Total of all expenses recorded on a date."""
        return daily_total(self._expenses, date)

    def get_monthly_reports(self) -> list[MonthlyReport]:
        """Reports for every month with entries, newest first."""
        return build_monthly_reports(self._expenses, self._income)

    def month_export(self, month: Month) -> tuple[MonthlyReport, list[ExpenseEntry], list[IncomeEntry]]:
        """Report plus the month's expenses and income, for export."""
        report = build_month_report(self._expenses, self._income, month)
        return report, entries_for_month(self._expenses, month), income_for_month(self._income, month)
