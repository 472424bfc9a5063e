"""Statutory deadline derivation for Nepali businesses.

Each :class:`ComplianceRule` describes one catalog entry: when it applies,
how its due date follows from the registration date, and which priority
tiers it can reach. :func:`derive_compliance_items` evaluates the catalog
from scratch; nothing here keeps state between calls.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date

from compliance_tracker.dates.arithmetic import add_days, add_months
from compliance_tracker.models import (
    BusinessProfile,
    BusinessType,
    ComplianceItem,
    ObligationStatus,
    Priority,
)
from compliance_tracker.rules.priority import DEFAULT_SOON_WINDOW_DAYS, priority_for

# Annual turnover (NPR) above which VAT registration is mandatory
VAT_TURNOVER_THRESHOLDS: dict[BusinessType, int] = {
    BusinessType.PHYSICAL_GOODS: 5_000_000,
    BusinessType.SERVICE_BASED: 2_000_000,
    BusinessType.COMBINED: 2_000_000,
}

# Months (1-based) whose 25th is a quarterly VAT return deadline
VAT_RETURN_FILING_MONTHS = (4, 8, 12)
VAT_RETURN_FILING_DAY = 25


def requires_vat_registration(profile: BusinessProfile) -> bool:
    """Whether the business must register for VAT (or already has)."""
    if profile.has_vat:
        return True
    return profile.turnover >= VAT_TURNOVER_THRESHOLDS[profile.type]


def next_vat_return_date(today: date) -> date:
    """Due date of the next quarterly VAT return.

    The 25th of the first filing month strictly after the current month.
    December rolls over to April of the following year, so being on the
    25th of a filing month never selects that same month.
    """
    for month in VAT_RETURN_FILING_MONTHS:
        if month > today.month:
            return date(today.year, month, VAT_RETURN_FILING_DAY)
    return date(today.year + 1, VAT_RETURN_FILING_MONTHS[0], VAT_RETURN_FILING_DAY)


def _always(profile: BusinessProfile) -> bool:
    return True


def _has_vat(profile: BusinessProfile) -> bool:
    return profile.has_vat


@dataclass(frozen=True)
class ComplianceRule:
    """One entry of the statutory catalog."""

    id: str
    category: str
    title: str
    description: str
    due: Callable[[date, date], date]  # (registration_date, today) -> due date
    soon_tier: bool = True
    always_urgent: bool = False
    requires_vat: bool = False
    applies: Callable[[BusinessProfile], bool] = _always

    def priority(self, due_date: date, today: date, soon_window_days: int) -> Priority:
        if self.always_urgent:
            return Priority.URGENT
        return priority_for(
            due_date, today, soon_tier=self.soon_tier, soon_window_days=soon_window_days
        )

    def build(
        self,
        registration_date: date,
        today: date,
        status: ObligationStatus,
        soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
    ) -> ComplianceItem:
        due_date = self.due(registration_date, today)
        return ComplianceItem(
            id=self.id,
            category=self.category,
            title=self.title,
            description=self.description,
            due_date=due_date,
            status=status,
            priority=self.priority(due_date, today, soon_window_days),
            requires_vat=self.requires_vat,
        )


COMPLIANCE_CATALOG: tuple[ComplianceRule, ...] = (
    ComplianceRule(
        id="pan-registration",
        category="Registration",
        title="PAN Registration",
        description=(
            "Register your business with the Inland Revenue Department to obtain "
            "a Permanent Account Number (PAN)."
        ),
        due=lambda registered, today: registered,
        always_urgent=True,
    ),
    ComplianceRule(
        id="vat-registration",
        category="Registration",
        title="VAT Registration",
        description="Register for Value Added Tax (VAT) with the IRD.",
        due=lambda registered, today: add_days(registered, 30),
        soon_tier=False,
        requires_vat=True,
        applies=requires_vat_registration,
    ),
    ComplianceRule(
        id="board-formation",
        category="Companies Act Compliance",
        title="Formation of Board of Directors",
        description=(
            "Form the Board of Directors and submit meeting minutes confirming "
            "appointments to OCR."
        ),
        due=lambda registered, today: add_months(registered, 3),
    ),
    ComplianceRule(
        id="auditor-appointment",
        category="Companies Act Compliance",
        title="Appointment of Auditor",
        description="Appoint an auditor and submit the details to OCR.",
        due=lambda registered, today: add_months(registered, 3),
    ),
    ComplianceRule(
        id="share-allotment",
        category="Companies Act Compliance",
        title="Share Allotment and Share Lagat",
        description="Complete share allotment and submit details to OCR.",
        due=lambda registered, today: add_months(registered, 3),
    ),
    ComplianceRule(
        id="director-disclosure",
        category="Companies Act Compliance",
        title="Director's Disclosure",
        description="Submit director disclosures to OCR within seven days of assuming office.",
        due=lambda registered, today: add_days(registered, 7),
        soon_tier=False,
    ),
    ComplianceRule(
        id="office-address",
        category="Companies Act Compliance",
        title="Registered Office Address",
        description="Submit registered office address details to OCR.",
        due=lambda registered, today: add_months(registered, 3),
    ),
    ComplianceRule(
        id="bank-account",
        category="Banking",
        title="Company Bank Account Opening",
        description="Open a company bank account immediately after registration.",
        due=lambda registered, today: registered,
        soon_tier=False,
    ),
    ComplianceRule(
        id="ward-registration",
        category="Registration",
        title="Ward Office Registration",
        description="Register your business with the local ward office.",
        due=lambda registered, today: add_days(registered, 15),
        soon_tier=False,
    ),
    ComplianceRule(
        id="vat-returns",
        category="Tax Compliance",
        title="Quarterly VAT Returns",
        description=(
            "File quarterly VAT returns (Purchase and Sale Register) by the 25th "
            "of the month following each quarter."
        ),
        due=lambda registered, today: next_vat_return_date(today),
        requires_vat=True,
        applies=_has_vat,
    ),
)

COMPLIANCE_IDS = tuple(rule.id for rule in COMPLIANCE_CATALOG)


def derive_compliance_items(
    profile: BusinessProfile,
    today: date,
    saved_statuses: Mapping[str, str] | None = None,
    soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
) -> list[ComplianceItem]:
    """Build the statutory checklist for ``profile`` as of ``today``.

    Parameters
    ----------
    profile : BusinessProfile
        Snapshot of the onboarded business.
    today : date
        Reference date for priorities and the VAT return cycle.
    saved_statuses : Mapping[str, str] | None
        Persisted ``id -> status`` map; only ``"completed"`` overrides the
        default pending status.
    soon_window_days : int
        Width of the "soon" priority window.

    Returns
    -------
    list[ComplianceItem]
        Items in catalog order, empty when no registration date is known.
    """
    if profile.registration_date is None:
        return []

    statuses = saved_statuses or {}
    items = []
    for rule in COMPLIANCE_CATALOG:
        if not rule.applies(profile):
            continue
        status = (
            ObligationStatus.COMPLETED
            if statuses.get(rule.id) == ObligationStatus.COMPLETED.value
            else ObligationStatus.PENDING
        )
        items.append(rule.build(profile.registration_date, today, status, soon_window_days))
    return items
