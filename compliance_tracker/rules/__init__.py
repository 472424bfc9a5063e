"""Deadline derivation and urgency classification."""

from compliance_tracker.rules.compliance import (
    COMPLIANCE_CATALOG,
    COMPLIANCE_IDS,
    ComplianceRule,
    derive_compliance_items,
    next_vat_return_date,
    requires_vat_registration,
)
from compliance_tracker.rules.priority import classify_urgency, priority_for, urgency_priority

__all__ = [
    "COMPLIANCE_CATALOG",
    "COMPLIANCE_IDS",
    "ComplianceRule",
    "classify_urgency",
    "derive_compliance_items",
    "next_vat_return_date",
    "priority_for",
    "requires_vat_registration",
    "urgency_priority",
]
