"""Domain models and types for spendbook.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from spendbook.domain.entries import ExpenseEntry, IncomeEntry
from spendbook.domain.models import CategoryName, EntryId, Money, Month, PaymentMode, SourceName

__all__ = [
    "CategoryName",
    "EntryId",
    "ExpenseEntry",
    "IncomeEntry",
    "Money",
    "Month",
    "PaymentMode",
    "SourceName",
]
