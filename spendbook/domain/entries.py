"""Expense and income entries, plus their persisted record shape.

Entries are immutable. A draft is a validated entry that has not been given an
id yet; the tracker assigns one when it admits the draft into the store.

Records use the camelCase field names of the stored JSON payloads. Stored
dates are normalized to YYYY-MM-DD on the way in, and a record whose date
cannot be read is dropped like any other unusable record.
"""

import math
from dataclasses import dataclass
from typing import Any

from spendbook import dates
from spendbook.domain.models import CategoryName, EntryId, Money, PaymentMode, SourceName


@dataclass(frozen=True)
class ExpenseDraft:
    """Validated expense data without an id."""

    date: str
    category: CategoryName
    payment_mode: PaymentMode
    amount: Money
    description: str = ""

    def with_id(self, entry_id: EntryId) -> "ExpenseEntry":
        return ExpenseEntry(
            id=entry_id,
            date=self.date,
            category=self.category,
            payment_mode=self.payment_mode,
            amount=self.amount,
            description=self.description,
        )


@dataclass(frozen=True)
class IncomeDraft:
    """Validated income data without an id."""

    date: str
    source: SourceName
    amount: Money
    note: str = ""

    def with_id(self, entry_id: EntryId) -> "IncomeEntry":
        return IncomeEntry(id=entry_id, date=self.date, source=self.source, amount=self.amount, note=self.note)


@dataclass(frozen=True)
class ExpenseEntry:
    """Immutable expense entry."""

    id: EntryId
    date: str
    category: CategoryName
    payment_mode: PaymentMode
    amount: Money
    description: str = ""


@dataclass(frozen=True)
class IncomeEntry:
    """Immutable income entry."""

    id: EntryId
    date: str
    source: SourceName
    amount: Money
    note: str = ""


def _parse_record_amount(value: Any) -> Money | None:
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return None
    try:
        amount = float(value)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return Money(amount)


def _text(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    return value.strip() if isinstance(value, str) else ""


def _record_date(record: dict[str, Any]) -> str:
    raw_date = _text(record, "date")
    if not raw_date:
        return ""
    try:
        return dates.normalize_date(raw_date)
    except ValueError:
        return ""


def expense_to_record(entry: ExpenseEntry) -> dict[str, Any]:
    """Convert an expense to its persisted record.

    Args:
        entry: Expense entry.

    Returns:
        JSON-serializable dictionary.
    """
    return {
        "id": entry.id,
        "date": entry.date,
        "category": entry.category,
        "paymentMode": entry.payment_mode,
        "amount": entry.amount,
        "description": entry.description,
    }


def income_to_record(entry: IncomeEntry) -> dict[str, Any]:
    """Convert an income entry to its persisted record.

    Args:
        entry: Income entry.

    Returns:
        JSON-serializable dictionary.
    """
    return {
        "id": entry.id,
        "date": entry.date,
        "source": entry.source,
        "amount": entry.amount,
        "note": entry.note,
    }


def expense_from_record(record: Any) -> ExpenseEntry | None:
    """Parse a persisted record into an expense.

    Args:
        record: Decoded JSON value.

    Returns:
        ExpenseEntry, or None if the record is not a usable expense.
    """
    if not isinstance(record, dict):
        return None

    entry_id = _text(record, "id")
    date = _record_date(record)
    category = _text(record, "category")
    payment_mode = _text(record, "paymentMode")
    amount = _parse_record_amount(record.get("amount"))

    if not entry_id or not date or not category or not payment_mode or amount is None:
        return None

    return ExpenseEntry(
        id=EntryId(entry_id),
        date=date,
        category=CategoryName(category),
        payment_mode=PaymentMode(payment_mode),
        amount=amount,
        description=_text(record, "description"),
    )


def income_from_record(record: Any) -> IncomeEntry | None:
    """Parse a persisted record into an income entry.

    Args:
        record: Decoded JSON value.

    Returns:
        IncomeEntry, or None if the record is not a usable income entry.
    """
    if not isinstance(record, dict):
        return None

    entry_id = _text(record, "id")
    date = _record_date(record)
    source = _text(record, "source")
    amount = _parse_record_amount(record.get("amount"))

    if not entry_id or not date or not source or amount is None:
        return None

    return IncomeEntry(
        id=EntryId(entry_id),
        date=date,
        source=SourceName(source),
        amount=amount,
        note=_text(record, "note"),
    )
