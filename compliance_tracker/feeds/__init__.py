"""Deadline feeds consumed by dashboards and reminders."""

from compliance_tracker.feeds.summary import ComplianceSummary, summarize
from compliance_tracker.feeds.upcoming import (
    compute_upcoming,
    deadlines_on,
    deadlines_within,
    iter_deadlines,
    wrap_compliance,
    wrap_loan,
    wrap_vehicle,
)

__all__ = [
    "ComplianceSummary",
    "compute_upcoming",
    "deadlines_on",
    "deadlines_within",
    "iter_deadlines",
    "summarize",
    "wrap_compliance",
    "wrap_loan",
    "wrap_vehicle",
]
