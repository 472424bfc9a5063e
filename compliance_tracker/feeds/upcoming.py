"""Merged deadline feeds across compliance items, loans and vehicles."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator
from datetime import date

from compliance_tracker.dates.arithmetic import add_days
from compliance_tracker.models import (
    ComplianceItem,
    Deadline,
    LoanRepayment,
    ObligationKind,
    ObligationStatus,
    VehicleRenewal,
)
from compliance_tracker.rules.priority import (
    DEFAULT_SOON_WINDOW_DAYS,
    classify_urgency,
    urgency_priority,
)

DEFAULT_WINDOW_SIZE = 5


def wrap_compliance(item: ComplianceItem) -> Deadline:
    return Deadline(
        kind=ObligationKind.COMPLIANCE,
        id=item.id,
        title=item.title,
        category=item.category,
        due_date=item.due_date,
        status=item.status,
        priority=item.priority,
        payload=dataclasses.replace(item),
    )


def wrap_loan(
    loan: LoanRepayment, today: date, soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS
) -> Deadline:
    urgency = classify_urgency(loan.next_due_date, today, loan.status, soon_window_days)
    return Deadline(
        kind=ObligationKind.LOAN,
        id=loan.id,
        title=loan.loan_name,
        category="Loan Repayment",
        due_date=loan.next_due_date,
        status=loan.status,
        priority=urgency_priority(urgency),
        payload=dataclasses.replace(loan),
    )


def wrap_vehicle(
    vehicle: VehicleRenewal, today: date, soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS
) -> Deadline:
    urgency = classify_urgency(vehicle.next_renewal_date, today, vehicle.status, soon_window_days)
    return Deadline(
        kind=ObligationKind.VEHICLE,
        id=vehicle.id,
        title=f"{vehicle.vehicle_name} Renewal",
        category="Vehicle Renewal",
        due_date=vehicle.next_renewal_date,
        status=vehicle.status,
        priority=urgency_priority(urgency),
        payload=dataclasses.replace(vehicle),
    )


def iter_deadlines(
    items: Iterable[ComplianceItem],
    loans: Iterable[LoanRepayment],
    vehicles: Iterable[VehicleRenewal],
    today: date,
    soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
) -> Iterator[Deadline]:
    """Yield every obligation wrapped as a :class:`Deadline`.

    Order is compliance items, then loans, then vehicles; sorting by due
    date downstream is stable, so this is also the tie-break order.
    """
    for item in items:
        yield wrap_compliance(item)
    for loan in loans:
        yield wrap_loan(loan, today, soon_window_days)
    for vehicle in vehicles:
        yield wrap_vehicle(vehicle, today, soon_window_days)


def compute_upcoming(
    items: Iterable[ComplianceItem],
    loans: Iterable[LoanRepayment],
    vehicles: Iterable[VehicleRenewal],
    today: date,
    window_size: int = DEFAULT_WINDOW_SIZE,
    soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
) -> list[Deadline]:
    """Pending deadlines strictly after ``today``, soonest first, capped.

    Overdue and due-today obligations never appear here; the checklist and
    summary report them.
    """
    upcoming = [
        deadline
        for deadline in iter_deadlines(items, loans, vehicles, today, soon_window_days)
        if deadline.status == ObligationStatus.PENDING and deadline.due_date > today
    ]
    upcoming.sort(key=lambda deadline: deadline.due_date)
    return upcoming[:window_size]


def deadlines_within(
    items: Iterable[ComplianceItem],
    loans: Iterable[LoanRepayment],
    vehicles: Iterable[VehicleRenewal],
    today: date,
    days: int = 30,
    soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
) -> list[Deadline]:
    """Pending deadlines with ``today < due < today + days``, uncapped."""
    horizon = add_days(today, days)
    found = [
        deadline
        for deadline in iter_deadlines(items, loans, vehicles, today, soon_window_days)
        if deadline.status == ObligationStatus.PENDING and today < deadline.due_date < horizon
    ]
    found.sort(key=lambda deadline: deadline.due_date)
    return found


def deadlines_on(
    items: Iterable[ComplianceItem],
    loans: Iterable[LoanRepayment],
    vehicles: Iterable[VehicleRenewal],
    day: date,
    today: date | None = None,
) -> list[Deadline]:
    """All deadlines falling on ``day``, whatever their status."""
    reference = today or day
    return [
        deadline
        for deadline in iter_deadlines(items, loans, vehicles, reference)
        if deadline.due_date == day
    ]
