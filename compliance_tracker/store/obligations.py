"""Obligation registry: statutory items, loan repayments and vehicle renewals.

The registry owns all three obligation collections and their persisted
mirrors. Compliance items are rebuilt from the profile whenever an input
changes; only their completion statuses are stored. Loans and vehicles are
user-authored and persisted as full collections after every mutation.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Callable
from datetime import date
from decimal import Decimal

from compliance_tracker.dates.arithmetic import add_months, add_years
from compliance_tracker.exceptions import InvalidObligationError
from compliance_tracker.feeds.upcoming import DEFAULT_WINDOW_SIZE, compute_upcoming
from compliance_tracker.models import (
    BusinessProfile,
    ComplianceItem,
    Deadline,
    LoanRepayment,
    ObligationKind,
    ObligationStatus,
    RepaymentFrequency,
    VehicleRenewal,
)
from compliance_tracker.persistence import KeyValueStore, StoreKey, load_json, save_json
from compliance_tracker.rules.compliance import derive_compliance_items
from compliance_tracker.rules.priority import DEFAULT_SOON_WINDOW_DAYS
from compliance_tracker.serialization import loan_from_record, to_record, vehicle_from_record
from compliance_tracker.store.profile import BusinessProfileStore

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Time-based unique identifier for user-authored obligations."""
    return uuid.uuid1().hex


class ObligationRegistry:
    """Derives, persists and mutates every tracked obligation.

    Parameters
    ----------
    store : KeyValueStore
        Persistent store shared with the profile store.
    profiles : BusinessProfileStore
        Source of the profile snapshot used for derivation.
    clock : Callable[[], date]
        Returns the current date; injectable for tests.
    upcoming_limit : int
        Number of entries kept in the upcoming-deadline feed.
    soon_window_days : int
        Width of the "soon" priority window.
    """

    def __init__(
        self,
        store: KeyValueStore,
        profiles: BusinessProfileStore,
        *,
        clock: Callable[[], date] = date.today,
        upcoming_limit: int = DEFAULT_WINDOW_SIZE,
        soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
    ) -> None:
        self._store = store
        self._profiles = profiles
        self._clock = clock
        self.upcoming_limit = upcoming_limit
        self.soon_window_days = soon_window_days

        self._statuses: dict[str, str] = {}
        self._items: list[ComplianceItem] = []
        self._loans: list[LoanRepayment] = []
        self._vehicles: list[VehicleRenewal] = []
        self._upcoming: list[Deadline] = []
        self._derived_on: date | None = None
        self._pinned_today: date | None = None

    # --- Lifecycle ---

    def initialize(self) -> None:
        """Load persisted collections and derive the statutory checklist."""
        self._loans = self._load_collection(StoreKey.LOAN_REPAYMENTS, loan_from_record)
        self._vehicles = self._load_collection(StoreKey.VEHICLE_RENEWALS, vehicle_from_record)

        statuses = load_json(self._store, StoreKey.COMPLIANCE_STATUSES, {})
        self._statuses = {str(k): str(v) for k, v in statuses.items()}

        logger.info(
            "Loaded %d loan repayments, %d vehicle renewals, %d compliance statuses",
            len(self._loans),
            len(self._vehicles),
            len(self._statuses),
        )
        self.refresh()

    def refresh(self, today: date | None = None) -> None:
        """Rebuild compliance items from scratch and recompute the feed.

        Passing ``today`` pins the evaluation date: later reads and mutations
        keep using it instead of the clock until ``refresh()`` is called
        without a date.
        """
        self._pinned_today = today
        today = self._today()
        self._items = derive_compliance_items(
            self._profiles.profile,
            today,
            self._statuses,
            soon_window_days=self.soon_window_days,
        )
        self._derived_on = today
        self._recompute_upcoming(today)
        logger.debug("Derived %d compliance items as of %s", len(self._items), today)

    def on_profile_changed(self, profile: BusinessProfile) -> None:
        """Profile listener: regenerate everything derived from the profile."""
        self.refresh(self._pinned_today)

    # --- Views ---

    @property
    def compliance_items(self) -> list[ComplianceItem]:
        self._ensure_current()
        return [dataclasses.replace(item) for item in self._items]

    @property
    def loan_repayments(self) -> list[LoanRepayment]:
        return [dataclasses.replace(loan) for loan in self._loans]

    @property
    def vehicle_renewals(self) -> list[VehicleRenewal]:
        return [dataclasses.replace(vehicle) for vehicle in self._vehicles]

    @property
    def upcoming_deadlines(self) -> list[Deadline]:
        self._ensure_current()
        return [
            dataclasses.replace(deadline, payload=dataclasses.replace(deadline.payload))
            for deadline in self._upcoming
        ]

    def get_compliance_item(self, item_id: str) -> ComplianceItem | None:
        item = self._find(self._items, item_id)
        return dataclasses.replace(item) if item else None

    def get_loan_repayment(self, loan_id: str) -> LoanRepayment | None:
        loan = self._find(self._loans, loan_id)
        return dataclasses.replace(loan) if loan else None

    def get_vehicle_renewal(self, vehicle_id: str) -> VehicleRenewal | None:
        vehicle = self._find(self._vehicles, vehicle_id)
        return dataclasses.replace(vehicle) if vehicle else None

    # --- Compliance items ---

    def mark_compliance_completed(self, item_id: str) -> bool:
        """Mark a statutory item completed. Unknown ids are ignored."""
        return self._set_compliance_status(item_id, ObligationStatus.COMPLETED)

    def mark_compliance_pending(self, item_id: str) -> bool:
        """Reopen a statutory item. Unknown ids are ignored."""
        return self._set_compliance_status(item_id, ObligationStatus.PENDING)

    # --- Loan repayments ---

    def add_loan_repayment(
        self,
        loan_name: str,
        start_date: date,
        amount: Decimal | int | float | str,
        frequency: RepaymentFrequency | str,
        next_due_date: date | None = None,
    ) -> LoanRepayment:
        """Create a repayment schedule; the first due date defaults to ``start_date``."""
        loan = LoanRepayment(
            id=generate_id(),
            loan_name=loan_name,
            start_date=start_date,
            amount=amount,
            frequency=frequency,
            next_due_date=next_due_date or start_date,
        )
        self._loans.append(loan)
        self._save_loans()
        logger.info(
            "Added loan repayment %s (%s, %s)",
            loan.id,
            loan.loan_name,
            loan.frequency.value,
            extra={"obligation_id": loan.id, "obligation_kind": ObligationKind.LOAN.value},
        )
        return dataclasses.replace(loan)

    def update_loan_repayment(self, loan: LoanRepayment) -> bool:
        """Replace the loan with the same id. Unknown ids are ignored."""
        index = self._index(self._loans, loan.id)
        if index is None:
            logger.debug("Ignoring update of unknown loan repayment %s", loan.id)
            return False
        self._loans[index] = dataclasses.replace(loan)
        self._save_loans()
        return True

    def remove_loan_repayment(self, loan_id: str) -> bool:
        before = len(self._loans)
        self._loans = [loan for loan in self._loans if loan.id != loan_id]
        removed = len(self._loans) != before
        self._save_loans()
        if removed:
            logger.info(
                "Removed loan repayment %s",
                loan_id,
                extra={"obligation_id": loan_id, "obligation_kind": ObligationKind.LOAN.value},
            )
        return removed

    def mark_loan_repayment_complete(self, loan_id: str) -> bool:
        """Advance the schedule by one period; the loan stays pending."""
        loan = self._find(self._loans, loan_id)
        if loan is None:
            logger.debug("Ignoring completion of unknown loan repayment %s", loan_id)
            return False
        loan.next_due_date = add_months(loan.next_due_date, loan.frequency.months)
        loan.status = ObligationStatus.PENDING
        self._save_loans()
        logger.info(
            "Loan repayment %s paid, next due %s",
            loan_id,
            loan.next_due_date,
            extra={"obligation_id": loan_id, "obligation_kind": ObligationKind.LOAN.value},
        )
        return True

    # --- Vehicle renewals ---

    def add_vehicle_renewal(
        self,
        vehicle_name: str,
        registration_number: str,
        last_renewal_date: date,
        next_renewal_date: date | None = None,
    ) -> VehicleRenewal:
        """Track a vehicle; the next renewal defaults to one year after the last."""
        vehicle = VehicleRenewal(
            id=generate_id(),
            vehicle_name=vehicle_name,
            registration_number=registration_number,
            last_renewal_date=last_renewal_date,
            next_renewal_date=next_renewal_date or add_years(last_renewal_date, 1),
        )
        self._vehicles.append(vehicle)
        self._save_vehicles()
        logger.info(
            "Added vehicle renewal %s (%s)",
            vehicle.id,
            vehicle.registration_number,
            extra={"obligation_id": vehicle.id, "obligation_kind": ObligationKind.VEHICLE.value},
        )
        return dataclasses.replace(vehicle)

    def update_vehicle_renewal(self, vehicle: VehicleRenewal) -> bool:
        index = self._index(self._vehicles, vehicle.id)
        if index is None:
            logger.debug("Ignoring update of unknown vehicle renewal %s", vehicle.id)
            return False
        self._vehicles[index] = dataclasses.replace(vehicle)
        self._save_vehicles()
        return True

    def remove_vehicle_renewal(self, vehicle_id: str) -> bool:
        before = len(self._vehicles)
        self._vehicles = [vehicle for vehicle in self._vehicles if vehicle.id != vehicle_id]
        removed = len(self._vehicles) != before
        self._save_vehicles()
        if removed:
            logger.info(
                "Removed vehicle renewal %s",
                vehicle_id,
                extra={"obligation_id": vehicle_id, "obligation_kind": ObligationKind.VEHICLE.value},
            )
        return removed

    def mark_vehicle_renewal_complete(self, vehicle_id: str) -> bool:
        """Record a renewal today; the next one falls due a year from today."""
        vehicle = self._find(self._vehicles, vehicle_id)
        if vehicle is None:
            logger.debug("Ignoring completion of unknown vehicle renewal %s", vehicle_id)
            return False
        today = self._today()
        vehicle.last_renewal_date = today
        vehicle.next_renewal_date = add_years(today, 1)
        vehicle.status = ObligationStatus.PENDING
        self._save_vehicles()
        logger.info(
            "Vehicle %s renewed, next renewal %s",
            vehicle_id,
            vehicle.next_renewal_date,
            extra={"obligation_id": vehicle_id, "obligation_kind": ObligationKind.VEHICLE.value},
        )
        return True

    # --- Cross-collection ---

    def complete_deadline(self, deadline: Deadline) -> bool:
        """Complete any obligation from the merged feed, routed by kind."""
        if deadline.kind is ObligationKind.COMPLIANCE:
            return self.mark_compliance_completed(deadline.id)
        if deadline.kind is ObligationKind.LOAN:
            return self.mark_loan_repayment_complete(deadline.id)
        return self.mark_vehicle_renewal_complete(deadline.id)

    # --- Internals ---

    def _set_compliance_status(self, item_id: str, status: ObligationStatus) -> bool:
        item = self._find(self._items, item_id)
        if item is None:
            logger.debug("Ignoring status change of unknown compliance item %s", item_id)
            return False
        item.status = status
        self._statuses[item_id] = status.value
        save_json(self._store, StoreKey.COMPLIANCE_STATUSES, self._statuses)
        logger.info(
            "Compliance item %s marked %s",
            item_id,
            status.value,
            extra={"obligation_id": item_id, "obligation_kind": ObligationKind.COMPLIANCE.value},
        )
        self._recompute_upcoming(self._today())
        return True

    def _save_loans(self) -> None:
        save_json(self._store, StoreKey.LOAN_REPAYMENTS, [to_record(loan) for loan in self._loans])
        self._recompute_upcoming(self._today())

    def _save_vehicles(self) -> None:
        save_json(
            self._store,
            StoreKey.VEHICLE_RENEWALS,
            [to_record(vehicle) for vehicle in self._vehicles],
        )
        self._recompute_upcoming(self._today())

    def _recompute_upcoming(self, today: date) -> None:
        self._upcoming = compute_upcoming(
            self._items,
            self._loans,
            self._vehicles,
            today,
            window_size=self.upcoming_limit,
            soon_window_days=self.soon_window_days,
        )

    def _today(self) -> date:
        return self._pinned_today or self._clock()

    def _ensure_current(self) -> None:
        # Priorities are date-dependent, so a new day means a new derivation.
        if self._derived_on is not None and self._derived_on != self._today():
            self.refresh()

    def _load_collection(self, key: StoreKey, decode: Callable[[dict], object]) -> list:
        records = load_json(self._store, key, [])
        loaded = []
        for record in records:
            try:
                loaded.append(decode(record))
            except (KeyError, TypeError, ValueError, InvalidObligationError) as exc:
                logger.warning("Skipping malformed %s record: %s", key.value, exc)
        return loaded

    @staticmethod
    def _find(collection: list, item_id: str):
        for entry in collection:
            if entry.id == item_id:
                return entry
        return None

    @staticmethod
    def _index(collection: list, item_id: str) -> int | None:
        for index, entry in enumerate(collection):
            if entry.id == item_id:
                return index
        return None
