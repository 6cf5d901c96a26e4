"""
Date resolution for recognition output.
"""

from datetime import date
from typing import Optional

from expense_scan.models.receipt import DateValue


def format_date_value(date_value: DateValue, today: Optional[date] = None) -> str:
    """
    Render a structured date as YYYY-MM-DD.

    Missing components are filled in rather than rejected: the year falls
    back to the current year, month and day fall back to 1. A zero
    component counts as missing.

    Args:
        date_value: Structured date from the recognition service
        today: Reference date for the year fallback (defaults to today)

    Returns:
        Date in YYYY-MM-DD format

    Examples:
        >>> format_date_value(DateValue(year=2024, month=3))
        '2024-03-01'
    """
    year = date_value.year or (today or date.today()).year
    month = date_value.month or 1
    day = date_value.day or 1
    return f"{year:04d}-{month:02d}-{day:02d}"


def resolve_date(
    mention_text: Optional[str],
    date_value: Optional[DateValue] = None,
    today: Optional[date] = None
) -> Optional[str]:
    """Structured date when present, otherwise the trimmed text as-is."""
    if date_value is not None:
        return format_date_value(date_value, today=today)
    if not mention_text:
        return None
    return mention_text.strip() or None
