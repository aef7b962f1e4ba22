"""Pure validation of candidate expense and income entries.

Rules are checked in a fixed order and the first violation is reported, so a
form with several problems always shows the same message first. Validation
never raises: results are (value, error) tuples with exactly one side set.
"""

import math
from collections.abc import Collection, Mapping
from enum import Enum
from typing import Any

from spendbook.dates import normalize_date
from spendbook.domain.entries import ExpenseDraft, IncomeDraft
from spendbook.domain.models import CategoryName, Money, PaymentMode, SourceName


class EntryError(Enum):
    """User-facing entry errors. The value is the message shown to the user."""

    INVALID_AMOUNT = "Enter a valid amount greater than 0."
    MISSING_CATEGORY = "Pick a category."
    MISSING_PAYMENT_MODE = "Pick a payment mode."
    MISSING_DATE = "Pick a date."
    MISSING_SOURCE = "Pick a source."
    INVALID_DATE = "Enter a real date (YYYY-MM-DD)."
    UNKNOWN_CATEGORY = "Pick one of the configured categories."
    UNKNOWN_PAYMENT_MODE = "Pick one of the configured payment modes."
    UNKNOWN_SOURCE = "Pick one of the configured income sources."
    ENTRY_NOT_FOUND = "No entry with that id."

    @property
    def message(self) -> str:
        return self.value


def parse_amount(value: Any) -> Money | None:
    """Parse an amount to a positive finite number.

    Args:
        value: Raw amount (string or number).

    Returns:
        Amount as Money, or None if not a finite number greater than 0.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return Money(amount)


def _field(raw: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return str(value).strip()
    return ""


def validate_expense(
    raw: Mapping[str, Any],
    categories: Collection[str] | None = None,
    payment_modes: Collection[str] | None = None,
) -> tuple[ExpenseDraft | None, EntryError | None]:
    """Validate and normalize a candidate expense.

    Args:
        raw: Candidate fields: amount, category, paymentMode (or payment_mode),
            date, description.
        categories: Optional allowed categories. None disables the check.
        payment_modes: Optional allowed payment modes. None disables the check.

    Returns:
        Tuple of (draft, error); draft is None when error is set.
    """
    amount = parse_amount(raw.get("amount"))
    if amount is None:
        return None, EntryError.INVALID_AMOUNT

    category = _field(raw, "category")
    if not category:
        return None, EntryError.MISSING_CATEGORY

    payment_mode = _field(raw, "paymentMode", "payment_mode")
    if not payment_mode:
        return None, EntryError.MISSING_PAYMENT_MODE

    raw_date = _field(raw, "date")
    if not raw_date:
        return None, EntryError.MISSING_DATE

    try:
        date = normalize_date(raw_date)
    except ValueError:
        return None, EntryError.INVALID_DATE

    if categories is not None and category not in categories:
        return None, EntryError.UNKNOWN_CATEGORY
    if payment_modes is not None and payment_mode not in payment_modes:
        return None, EntryError.UNKNOWN_PAYMENT_MODE

    draft = ExpenseDraft(
        date=date,
        category=CategoryName(category),
        payment_mode=PaymentMode(payment_mode),
        amount=amount,
        description=_field(raw, "description"),
    )
    return draft, None


def validate_income(
    raw: Mapping[str, Any],
    sources: Collection[str] | None = None,
) -> tuple[IncomeDraft | None, EntryError | None]:
    """Validate and normalize a candidate income entry.

    Args:
        raw: Candidate fields: amount, source, date, note.
        sources: Optional allowed income sources. None disables the check.

    Returns:
        Tuple of (draft, error); draft is None when error is set.
    """
    amount = parse_amount(raw.get("amount"))
    if amount is None:
        return None, EntryError.INVALID_AMOUNT

    source = _field(raw, "source")
    if not source:
        return None, EntryError.MISSING_SOURCE

    raw_date = _field(raw, "date")
    if not raw_date:
        return None, EntryError.MISSING_DATE

    try:
        date = normalize_date(raw_date)
    except ValueError:
        return None, EntryError.INVALID_DATE

    if sources is not None and source not in sources:
        return None, EntryError.UNKNOWN_SOURCE

    draft = IncomeDraft(
        date=date,
        source=SourceName(source),
        amount=amount,
        note=_field(raw, "note"),
    )
    return draft, None
