"""Persistence of the expense and income collections.

Each collection is one JSON array stored under a fixed key and rewritten in
full after every change. Reading is forgiving: a missing key, a payload that
is not JSON, or JSON that is not an array all load as an empty collection.
"""

import json
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Protocol, TypeVar

from spendbook.domain.entries import (
    ExpenseEntry,
    IncomeEntry,
    expense_from_record,
    expense_to_record,
    income_from_record,
    income_to_record,
)
from spendbook.log import get_logger
from spendbook.store.queries import read_record, write_record

logger = get_logger(__name__)

EXPENSES_KEY = "spendbook.expenses.v1"
INCOME_KEY = "spendbook.income.v1"


class _Identified(Protocol):
    @property
    def id(self) -> str: ...


T = TypeVar("T", bound=_Identified)


def decode_collection(payload: str | None, parse: Callable[[Any], T | None], label: str) -> list[T]:
    """Decode a stored JSON array, dropping anything unusable.

    Args:
        payload: Raw stored payload, or None if the key is missing.
        parse: Record parser returning None for unusable records.
        label: Collection name for log messages.

    Returns:
        Parsed entries in stored order. When an id repeats, only its first
        entry is kept.
    """
    if not payload:
        return []

    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        logger.warning("Stored %s are not valid JSON, starting empty: %s", label, e)
        return []

    if not isinstance(data, list):
        logger.warning("Stored %s are not a list, starting empty", label)
        return []

    entries: list[T] = []
    seen: set[str] = set()
    for index, record in enumerate(data):
        entry = parse(record)
        if entry is None:
            logger.warning("Skipping unusable stored %s record at position %d", label, index)
            continue
        if entry.id in seen:
            logger.warning("Skipping duplicate stored %s id %s at position %d", label, entry.id, index)
            continue
        seen.add(entry.id)
        entries.append(entry)
    return entries


def decode_expenses(payload: str | None) -> list[ExpenseEntry]:
    """Decode a stored expenses payload."""
    return decode_collection(payload, expense_from_record, "expenses")


def decode_income(payload: str | None) -> list[IncomeEntry]:
    """Decode a stored income payload."""
    return decode_collection(payload, income_from_record, "income")


def encode_expenses(entries: Sequence[ExpenseEntry]) -> str:
    """Encode expenses as a JSON array."""
    return json.dumps([expense_to_record(e) for e in entries])


def encode_income(entries: Sequence[IncomeEntry]) -> str:
    """Encode income entries as a JSON array."""
    return json.dumps([income_to_record(e) for e in entries])


def load_expenses(db_path: Path | None = None) -> list[ExpenseEntry]:
    """Load the stored expenses.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored expenses, empty if nothing usable is stored.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    entries = decode_expenses(read_record(EXPENSES_KEY, db_path))
    logger.info("Loaded %d expenses", len(entries))
    return entries


def load_income(db_path: Path | None = None) -> list[IncomeEntry]:
    """Load the stored income entries.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored income entries, empty if nothing usable is stored.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    entries = decode_income(read_record(INCOME_KEY, db_path))
    logger.info("Loaded %d income entries", len(entries))
    return entries


def save_expenses(entries: Sequence[ExpenseEntry], db_path: Path | None = None) -> None:
    """Overwrite the stored expenses.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    write_record(EXPENSES_KEY, encode_expenses(entries), db_path)
    logger.info("Saved %d expenses", len(entries))


def save_income(entries: Sequence[IncomeEntry], db_path: Path | None = None) -> None:
    """Overwrite the stored income entries.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    write_record(INCOME_KEY, encode_income(entries), db_path)
    logger.info("Saved %d income entries", len(entries))

