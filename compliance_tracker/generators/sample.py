"""Generate demo business profiles, loans and vehicles."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from compliance_tracker.dates.arithmetic import add_months, add_years
from compliance_tracker.generators.base import BaseGenerator
from compliance_tracker.models import (
    BusinessProfile,
    BusinessType,
    LoanRepayment,
    RepaymentFrequency,
    VehicleRenewal,
)
from compliance_tracker.store.obligations import generate_id


class SampleDataGenerator(BaseGenerator):
    """Generate realistic-looking demo data for a Nepali small business."""

    BUSINESS_TYPES = list(BusinessType)
    BUSINESS_TYPE_WEIGHTS = [0.45, 0.35, 0.20]

    NAME_SUFFIXES = ["Traders", "Suppliers", "Enterprises", "Udhyog", "Pvt. Ltd.", "Services"]

    # Annual turnover ranges (NPR); spans both sides of the VAT thresholds
    TURNOVER_RANGE = (500_000, 12_000_000)

    LOAN_NAMES = ["Working Capital Loan", "Machinery Loan", "Overdraft", "Vehicle Loan", "Term Loan"]
    VEHICLES = ["Delivery Van", "Pickup Truck", "Motorcycle", "Office Car", "Tempo"]

    # Zonal plate prefixes and vehicle class letters
    PLATE_PREFIXES = ["Ba", "Ga", "Lu", "Ko", "Me", "Na", "Sa"]
    PLATE_CLASSES = ["Pa", "Kha", "Cha", "Ja"]

    def generate_profile(self, today: date | None = None) -> BusinessProfile:
        """Generate a business profile registered within the last two years.

        Parameters
        ----------
        today : date | None
            Reference date (defaults to ``date.today()``).

        Returns
        -------
        BusinessProfile
            Generated profile.
        """
        today = today or date.today()
        business_type = self.random.choices(
            self.BUSINESS_TYPES, weights=self.BUSINESS_TYPE_WEIGHTS, k=1
        )[0]
        turnover = self.random.randrange(*self.TURNOVER_RANGE, 50_000)

        return BusinessProfile(
            name=f"{self.fake.last_name()} {self.random.choice(self.NAME_SUFFIXES)}",
            email=self.fake.email(),
            phone=self.fake.phone_number(),
            type=business_type,
            registration_date=today - timedelta(days=self.random.randint(0, 730)),
            turnover=turnover,
            has_vat=self.random.random() < 0.4,
        )

    def generate_loan(self, today: date | None = None) -> LoanRepayment:
        """Generate a loan whose next repayment falls within the coming period."""
        today = today or date.today()
        frequency = self.random.choice(list(RepaymentFrequency))
        start_date = add_months(today, -self.random.randint(1, 24))

        next_due = start_date
        while next_due <= today:
            next_due = add_months(next_due, frequency.months)

        return LoanRepayment(
            id=generate_id(),
            loan_name=self.random.choice(self.LOAN_NAMES),
            start_date=start_date,
            amount=Decimal(self.random.randint(10, 500) * 1000),
            frequency=frequency,
            next_due_date=next_due,
        )

    def generate_vehicle(self, today: date | None = None) -> VehicleRenewal:
        """Generate a vehicle renewed some time in the past year."""
        today = today or date.today()
        last_renewal = today - timedelta(days=self.random.randint(0, 364))
        plate = (
            f"{self.random.choice(self.PLATE_PREFIXES)} {self.random.randint(1, 99)} "
            f"{self.random.choice(self.PLATE_CLASSES)} {self.random.randint(1000, 9999)}"
        )
        return VehicleRenewal(
            id=generate_id(),
            vehicle_name=self.random.choice(self.VEHICLES),
            registration_number=plate,
            last_renewal_date=last_renewal,
            next_renewal_date=add_years(last_renewal, 1),
        )

    def generate_loans(self, count: int, today: date | None = None) -> Iterator[LoanRepayment]:
        for _ in range(count):
            yield self.generate_loan(today)

    def generate_vehicles(self, count: int, today: date | None = None) -> Iterator[VehicleRenewal]:
        for _ in range(count):
            yield self.generate_vehicle(today)
