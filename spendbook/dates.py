"""Date utilities for spendbook.

Pure functions for date normalization, month ranges and formatting.
"""

import re
from datetime import date, datetime, timedelta

import pandas as pd

from spendbook.domain.models import Month

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")


def today_string() -> str:
    """Return today's date in YYYY-MM-DD format."""
    return date.today().isoformat()


def normalize_date(raw_date: str) -> str:
    """Normalize a date string to zero-padded ISO format (YYYY-MM-DD).

    ISO input (including unpadded forms like 2025-1-5) is parsed strictly.
    Anything else goes through pandas.to_datetime with day-first parsing, so
    31/01/2025 and 31 Jan 2025 are accepted too.

    Args:
        raw_date: Raw date string.

    Returns:
        Normalized date in YYYY-MM-DD format.

    Raises:
        ValueError: If date cannot be parsed.
    """
    text = raw_date.strip()
    if ISO_DATE_PATTERN.match(text):
        return datetime.strptime(text, "%Y-%m-%d").strftime("%Y-%m-%d")

    try:
        parsed_date = pd.to_datetime(text, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e

    if pd.isna(parsed_date):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed_date.strftime("%Y-%m-%d")


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate inclusive date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (first_day, last_day, label) where:
        - first_day: First day of month (YYYY-MM-DD)
        - last_day: Last day of month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    first_day = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    last_day = (next_month - timedelta(days=1)).strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return first_day, last_day, label


def format_month_label(month: Month) -> str:
    """Format a month key for display (e.g. "2025-01" -> "January 2025")."""
    return month_range(month)[2]


def is_valid_month(value: str) -> bool:
    """Check that a string is a YYYY-MM month key."""
    try:
        datetime.strptime(value, "%Y-%m")
    except ValueError:
        return False
    return len(value) == 7
