#!/usr/bin/env python3
"""Generate a sample compliance store for manual validation.

This script writes a JSON store file in the local/ folder holding a generated
business profile, loan repayments and vehicle renewals. Point the CLI at it
with ``--data-dir local`` to browse the checklist and upcoming deadlines.
"""

import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from compliance_tracker.app import create_tracker
from compliance_tracker.config import StoreConfig, TrackerConfig
from compliance_tracker.dates import format_nepali_date_with_english
from compliance_tracker.feeds import summarize
from compliance_tracker.generators import SampleDataGenerator
from compliance_tracker.logging import setup_logging


def print_summary(tracker, today: date, output_path: Path) -> None:
    """Print a summary of the generated store."""
    summary = summarize(tracker.registry.compliance_items, today)

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"  {'Compliance items':<20} {summary.total:>5} records")
    print(f"  {'Loan repayments':<20} {len(tracker.registry.loan_repayments):>5} records")
    print(f"  {'Vehicle renewals':<20} {len(tracker.registry.vehicle_renewals):>5} records")
    print(f"\nUpcoming deadlines:")
    for deadline in tracker.registry.upcoming_deadlines:
        print(f"  {format_nepali_date_with_english(deadline.due_date):<36} {deadline.title}")
    print(f"\nStore written to: {output_path}")


def main() -> None:
    """Generate the sample store."""
    output_dir = project_root / "local"
    output_dir.mkdir(exist_ok=True)

    seed = 42
    num_loans = 3
    num_vehicles = 2
    today = date.today()

    setup_logging(level="WARNING")

    print("=" * 60)
    print("Generating Sample Compliance Store")
    print("=" * 60)

    config = TrackerConfig(store=StoreConfig(backend="file", data_dir=output_dir), seed=seed)
    tracker = create_tracker(config)
    generator = SampleDataGenerator(seed=seed)

    profile = generator.generate_profile(today)
    tracker.profiles.update(
        name=profile.name,
        email=profile.email,
        phone=profile.phone,
        type=profile.type,
        registration_date=profile.registration_date,
        turnover=profile.turnover,
        has_vat=profile.has_vat,
    )
    tracker.profiles.complete_onboarding()
    print(f"Profile: {profile.name} ({profile.type.value}), registered {profile.registration_date}")

    for loan in generator.generate_loans(num_loans, today):
        tracker.registry.add_loan_repayment(
            loan.loan_name, loan.start_date, loan.amount, loan.frequency, loan.next_due_date
        )
    for vehicle in generator.generate_vehicles(num_vehicles, today):
        tracker.registry.add_vehicle_renewal(
            vehicle.vehicle_name,
            vehicle.registration_number,
            vehicle.last_renewal_date,
            vehicle.next_renewal_date,
        )

    print_summary(tracker, today, config.store.path)


if __name__ == "__main__":
    main()
