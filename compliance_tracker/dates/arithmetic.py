"""Calendar arithmetic on ``datetime.date`` values."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta


def add_days(value: date, days: int) -> date:
    """Return ``value`` shifted by ``days`` calendar days."""
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Return ``value`` shifted by whole calendar months.

    The day of month is clamped to the last day of the target month, so
    January 31 plus one month is the last day of February.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def add_years(value: date, years: int) -> date:
    """Return ``value`` shifted by whole years (Feb 29 clamps to Feb 28)."""
    return add_months(value, years * 12)


def parse_date(value: object) -> date | None:
    """Parse a persisted or user-supplied date.

    Accepts ``date``/``datetime`` instances, ISO dates (``2024-01-01``) and
    ISO timestamps, including the ``2024-01-01T00:00:00.000Z`` form written
    by browser storage.

    Raises
    ------
    ValueError
        If ``value`` is not a recognisable date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Cannot interpret {value!r} as a date")

    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        # Browser storage writes UTC; the calendar day is the local one.
        parsed = parsed.astimezone()
    return parsed.date()
