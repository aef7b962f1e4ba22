"""Domain type definitions for spendbook.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in currency units as entered (e.g. 12.5 for $12.50)
- Month: Month in YYYY-MM format
- CategoryName: Name of an expense category
- PaymentMode: How an expense was paid
- SourceName: Name of an income source
- EntryId: Opaque unique identifier of an entry
"""

from typing import NewType

# Money amounts are decimal currency units, always positive on stored entries
Money = NewType("Money", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

PaymentMode = NewType("PaymentMode", str)

SourceName = NewType("SourceName", str)

EntryId = NewType("EntryId", str)

# Credit card spend is not an immediate cash outflow, so savings ignore it
CREDIT_CARD = PaymentMode("Credit Card")

DEFAULT_CATEGORIES: tuple[CategoryName, ...] = tuple(
    CategoryName(name)
    for name in ("Food", "Travel", "Rent", "Shopping", "Bills", "Subscriptions", "Health", "Others")
)

DEFAULT_PAYMENT_MODES: tuple[PaymentMode, ...] = tuple(
    PaymentMode(name) for name in ("Cash", "Debit Card", "Credit Card", "Bank Transfer", "PayPal", "Venmo", "Other")
)

DEFAULT_INCOME_SOURCES: tuple[SourceName, ...] = tuple(
    SourceName(name) for name in ("Salary", "Freelance", "Business", "Investments", "Gifts", "Refunds", "Other")
)
