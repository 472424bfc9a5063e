"""Domain models for compliance tracking."""

from compliance_tracker.models.enums import (
    BusinessType,
    ObligationKind,
    ObligationStatus,
    Priority,
    RepaymentFrequency,
    Urgency,
)
from compliance_tracker.models.obligations import (
    ComplianceItem,
    Deadline,
    LoanRepayment,
    VehicleRenewal,
)
from compliance_tracker.models.profile import BusinessProfile

__all__ = [
    "BusinessProfile",
    "BusinessType",
    "ComplianceItem",
    "Deadline",
    "LoanRepayment",
    "ObligationKind",
    "ObligationStatus",
    "Priority",
    "RepaymentFrequency",
    "Urgency",
    "VehicleRenewal",
]
