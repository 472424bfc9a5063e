"""Date arithmetic and Bikram Sambat conversion."""

from compliance_tracker.dates.arithmetic import add_days, add_months, add_years, parse_date
from compliance_tracker.dates.nepali import (
    NEPALI_MONTHS,
    BSDate,
    format_nepali_date,
    format_nepali_date_short,
    format_nepali_date_with_english,
    to_bikram_sambat,
    to_gregorian,
)

__all__ = [
    "BSDate",
    "NEPALI_MONTHS",
    "add_days",
    "add_months",
    "add_years",
    "format_nepali_date",
    "format_nepali_date_short",
    "format_nepali_date_with_english",
    "parse_date",
    "to_bikram_sambat",
    "to_gregorian",
]
