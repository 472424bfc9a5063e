"""Enumeration types for compliance tracking entities."""

from enum import Enum


class BusinessType(str, Enum):
    PHYSICAL_GOODS = "physical-goods"
    SERVICE_BASED = "service-based"
    COMBINED = "combined"


class ObligationStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Priority(str, Enum):
    NORMAL = "normal"
    SOON = "soon"
    URGENT = "urgent"


class Urgency(str, Enum):
    """Live display state of a deadline, evaluated against today's date."""

    COMPLETED = "completed"
    OVERDUE = "overdue"
    DUE_TODAY = "due-today"
    SOON = "soon"
    PENDING = "pending"


class RepaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    HALF_YEARLY = "half-yearly"
    ANNUALLY = "annually"

    @property
    def months(self) -> int:
        """Length of one repayment period in calendar months."""
        return _FREQUENCY_MONTHS[self]


_FREQUENCY_MONTHS = {
    RepaymentFrequency.MONTHLY: 1,
    RepaymentFrequency.QUARTERLY: 3,
    RepaymentFrequency.HALF_YEARLY: 6,
    RepaymentFrequency.ANNUALLY: 12,
}


class ObligationKind(str, Enum):
    COMPLIANCE = "compliance"
    LOAN = "loan"
    VEHICLE = "vehicle"
