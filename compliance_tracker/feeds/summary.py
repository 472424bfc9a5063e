"""Dashboard counters for the statutory checklist."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from compliance_tracker.models import ComplianceItem, Urgency
from compliance_tracker.rules.priority import classify_urgency


@dataclass(frozen=True)
class ComplianceSummary:
    total: int
    completed: int
    pending: int
    overdue: int
    due_today: int

    @property
    def completion_percentage(self) -> int:
        if self.total == 0:
            return 0
        # Half-up rounding
        return (self.completed * 100 + self.total // 2) // self.total


def summarize(items: Iterable[ComplianceItem], today: date) -> ComplianceSummary:
    """Count checklist items by live urgency as of ``today``."""
    urgencies = [classify_urgency(item.due_date, today, item.status) for item in items]
    completed = urgencies.count(Urgency.COMPLETED)
    return ComplianceSummary(
        total=len(urgencies),
        completed=completed,
        pending=len(urgencies) - completed,
        overdue=urgencies.count(Urgency.OVERDUE),
        due_today=urgencies.count(Urgency.DUE_TODAY),
    )
