"""Gregorian <-> Bikram Sambat conversion for display and date navigation.

All deadline computation happens on Gregorian ``datetime.date`` values. The
Bikram Sambat (BS) representation only exists for display, so everything in
this module accepts and returns Gregorian dates except :class:`BSDate`.

Month-length tables come from the ``nepali_datetime`` package, which covers
BS years 1975-2100.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

import nepali_datetime

from compliance_tracker.exceptions import CalendarConversionError

logger = logging.getLogger(__name__)

NEPALI_MONTHS = (
    "Baishakh",
    "Jestha",
    "Ashadh",
    "Shrawan",
    "Bhadra",
    "Ashwin",
    "Kartik",
    "Mangsir",
    "Poush",
    "Magh",
    "Falgun",
    "Chaitra",
)


@dataclass(frozen=True)
class BSDate:
    """A Bikram Sambat calendar date (``month`` is 1-based)."""

    year: int
    month: int
    day: int

    @property
    def month_name(self) -> str:
        return NEPALI_MONTHS[self.month - 1]

    def __str__(self) -> str:
        return f"{self.year} {self.month_name} {self.day}"


def to_bikram_sambat(value: date) -> BSDate:
    """Convert a Gregorian date to its BS equivalent.

    Raises
    ------
    CalendarConversionError
        If ``value`` lies outside the supported BS range.
    """
    try:
        converted = nepali_datetime.date.from_datetime_date(value)
    except (ValueError, OverflowError, KeyError, IndexError) as exc:
        raise CalendarConversionError(f"{value.isoformat()} is outside the supported BS range") from exc
    return BSDate(converted.year, converted.month, converted.day)


def to_gregorian(year: int, month: int, day: int, *, strict: bool = False) -> date:
    """Convert a BS date to Gregorian.

    Invalid input falls back to today's date unless ``strict`` is set, in
    which case :class:`CalendarConversionError` is raised.
    """
    try:
        return nepali_datetime.date(year, month, day).to_datetime_date()
    except (ValueError, OverflowError, TypeError, KeyError, IndexError) as exc:
        if strict:
            raise CalendarConversionError(f"Invalid BS date {year}-{month}-{day}") from exc
        logger.warning("Invalid BS date %s-%s-%s, falling back to today: %s", year, month, day, exc)
        return date.today()


def format_nepali_date(value: date) -> str:
    """Format as ``"2081 Baishakh 1"``."""
    try:
        return str(to_bikram_sambat(value))
    except CalendarConversionError:
        logger.warning("Cannot format %s in BS, showing Gregorian date", value)
        return value.isoformat()


def format_nepali_date_short(value: date) -> str:
    """Format as ``"2081-1-1"``."""
    try:
        bs = to_bikram_sambat(value)
    except CalendarConversionError:
        logger.warning("Cannot format %s in BS, showing Gregorian date", value)
        return value.isoformat()
    return f"{bs.year}-{bs.month}-{bs.day}"


def format_nepali_date_with_english(value: date) -> str:
    """Format as ``"2081 Baishakh 1 (Apr 13, 2024)"``."""
    return f"{format_nepali_date(value)} ({value.strftime('%b %d, %Y')})"


def nepali_month_name(value: date) -> str:
    return to_bikram_sambat(value).month_name


def nepali_year(value: date) -> int:
    return to_bikram_sambat(value).year


def nepali_day(value: date) -> int:
    return to_bikram_sambat(value).day


def bs_month_start(value: date) -> date:
    """Gregorian date of the first day of the BS month containing ``value``."""
    bs = to_bikram_sambat(value)
    return to_gregorian(bs.year, bs.month, 1, strict=True)


def previous_bs_month(value: date) -> date:
    """Gregorian date of the first day of the previous BS month."""
    bs = to_bikram_sambat(value)
    year, month = (bs.year - 1, 12) if bs.month == 1 else (bs.year, bs.month - 1)
    return to_gregorian(year, month, 1, strict=True)


def next_bs_month(value: date) -> date:
    """Gregorian date of the first day of the next BS month."""
    bs = to_bikram_sambat(value)
    year, month = (bs.year + 1, 1) if bs.month == 12 else (bs.year, bs.month + 1)
    return to_gregorian(year, month, 1, strict=True)
