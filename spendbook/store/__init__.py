"""Storage layer - provides persistence for the application.

This module re-exports the public storage functions for easy importing.
"""

from spendbook.store.entries import (
    EXPENSES_KEY,
    INCOME_KEY,
    load_expenses,
    load_income,
    save_expenses,
    save_income,
)
from spendbook.store.queries import read_record, write_record, write_records
from spendbook.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Records
    "read_record",
    "write_record",
    "write_records",
    # Entries
    "EXPENSES_KEY",
    "INCOME_KEY",
    "load_expenses",
    "load_income",
    "save_expenses",
    "save_income",
]
