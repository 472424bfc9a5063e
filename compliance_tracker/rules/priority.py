"""Urgency classification shared by derivation rules, feeds and display."""

from __future__ import annotations

from datetime import date

from compliance_tracker.dates.arithmetic import add_days
from compliance_tracker.models.enums import ObligationStatus, Priority, Urgency

DEFAULT_SOON_WINDOW_DAYS = 14


def classify_urgency(
    due_date: date,
    today: date,
    status: ObligationStatus = ObligationStatus.PENDING,
    soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
) -> Urgency:
    """Classify a deadline against ``today``.

    Parameters
    ----------
    due_date : date
        Deadline date.
    today : date
        Reference date, normally the live current date.
    status : ObligationStatus
        Completed deadlines are always ``Urgency.COMPLETED``.
    soon_window_days : int
        Deadlines due before ``today + soon_window_days`` are ``SOON``.

    Returns
    -------
    Urgency
        One of completed, overdue, due-today, soon or pending.
    """
    if status == ObligationStatus.COMPLETED:
        return Urgency.COMPLETED
    if today > due_date:
        return Urgency.OVERDUE
    if today == due_date:
        return Urgency.DUE_TODAY
    if due_date < add_days(today, soon_window_days):
        return Urgency.SOON
    return Urgency.PENDING


def urgency_priority(urgency: Urgency, *, soon_tier: bool = True) -> Priority:
    """Map a display urgency onto the three-level priority tier."""
    if urgency is Urgency.OVERDUE:
        return Priority.URGENT
    if urgency in (Urgency.DUE_TODAY, Urgency.SOON) and soon_tier:
        return Priority.SOON
    return Priority.NORMAL


def priority_for(
    due_date: date,
    today: date,
    *,
    soon_tier: bool = True,
    soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
) -> Priority:
    """Priority snapshot of a pending deadline.

    Rules with a short filing window pass ``soon_tier=False`` so they only
    ever report normal or urgent.
    """
    urgency = classify_urgency(due_date, today, soon_window_days=soon_window_days)
    return urgency_priority(urgency, soon_tier=soon_tier)
