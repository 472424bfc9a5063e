"""Obligation models: statutory items, loan repayments, vehicle renewals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

from compliance_tracker.exceptions import InvalidObligationError
from compliance_tracker.models.enums import (
    ObligationKind,
    ObligationStatus,
    Priority,
    RepaymentFrequency,
)


@dataclass
class ComplianceItem:
    """Statutory obligation produced by a derivation rule.

    ``id`` is the catalog key of the rule that produced the item, so it is
    stable across regenerations. Only ``status`` is persisted.
    """

    id: str
    category: str
    title: str
    description: str
    due_date: date
    status: ObligationStatus = ObligationStatus.PENDING
    priority: Priority = Priority.NORMAL  # Snapshot taken at derivation time
    requires_vat: bool = False


@dataclass
class LoanRepayment:
    """Perpetual repayment schedule for a business loan."""

    id: str
    loan_name: str
    start_date: date
    amount: Decimal
    frequency: RepaymentFrequency
    next_due_date: date
    status: ObligationStatus = ObligationStatus.PENDING

    def __post_init__(self) -> None:
        if not self.loan_name.strip():
            raise InvalidObligationError("Loan name must not be empty")
        try:
            self.amount = Decimal(str(self.amount))
        except InvalidOperation as exc:
            raise InvalidObligationError(f"Loan amount must be a number, got {self.amount!r}") from exc
        if not self.amount.is_finite() or self.amount <= 0:
            raise InvalidObligationError(f"Loan amount must be positive, got {self.amount}")
        try:
            self.frequency = RepaymentFrequency(self.frequency)
            self.status = ObligationStatus(self.status)
        except ValueError as exc:
            raise InvalidObligationError(str(exc)) from exc


@dataclass
class VehicleRenewal:
    """Annual registration renewal (bluebook) for a business vehicle."""

    id: str
    vehicle_name: str
    registration_number: str
    last_renewal_date: date
    next_renewal_date: date
    status: ObligationStatus = ObligationStatus.PENDING

    def __post_init__(self) -> None:
        if not self.vehicle_name.strip():
            raise InvalidObligationError("Vehicle name must not be empty")
        try:
            self.status = ObligationStatus(self.status)
        except ValueError as exc:
            raise InvalidObligationError(str(exc)) from exc


@dataclass(frozen=True)
class Deadline:
    """Any obligation in the common shape used by feeds and reminders.

    ``kind`` tells consumers which collection ``id`` belongs to, so completion
    can be routed without parsing identifiers.
    """

    kind: ObligationKind
    id: str
    title: str
    category: str
    due_date: date
    status: ObligationStatus
    priority: Priority
    payload: ComplianceItem | LoanRepayment | VehicleRenewal

    @property
    def display_id(self) -> str:
        """Presentation key, e.g. ``loan-<id>``; compliance ids are unprefixed."""
        if self.kind is ObligationKind.COMPLIANCE:
            return self.id
        return f"{self.kind.value}-{self.id}"
