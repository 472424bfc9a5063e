"""Command-line interface for compliance-tracker."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from datetime import date
from pathlib import Path

from compliance_tracker import __version__
from compliance_tracker.app import ComplianceTracker, create_tracker
from compliance_tracker.config import TrackerConfig
from compliance_tracker.dates.nepali import format_nepali_date, format_nepali_date_short, to_bikram_sambat, to_gregorian
from compliance_tracker.exceptions import ComplianceTrackerError
from compliance_tracker.feeds import summarize
from compliance_tracker.generators import SampleDataGenerator
from compliance_tracker.logging import setup_logging
from compliance_tracker.models import BusinessType, Deadline, RepaymentFrequency
from compliance_tracker.rules.priority import classify_urgency

logger = logging.getLogger(__name__)


def _date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _show_date(value: date) -> str:
    return f"{value.isoformat()} ({format_nepali_date_short(value)} BS)"


def _print_deadlines(deadlines: list[Deadline], today: date, empty: str) -> None:
    if not deadlines:
        print(empty)
        return
    for deadline in deadlines:
        urgency = classify_urgency(deadline.due_date, today, deadline.status)
        print(
            f"  {_show_date(deadline.due_date)}  {deadline.title:<40} "
            f"[{deadline.category}] {urgency.value}  ({deadline.display_id})"
        )


# --- Command handlers ---


def cmd_profile(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    changes = {
        name: value
        for name, value in (
            ("name", args.name),
            ("email", args.email),
            ("phone", args.phone),
            ("type", args.type),
            ("registration_date", args.registration_date),
            ("turnover", args.turnover),
            ("has_vat", args.vat),
        )
        if value is not None
    }
    if changes:
        tracker.profiles.update(**changes)
    if args.complete_onboarding:
        tracker.profiles.complete_onboarding()

    profile = tracker.profiles.profile
    for field in dataclasses.fields(profile):
        value = getattr(profile, field.name)
        if isinstance(value, date):
            value = _show_date(value)
        elif isinstance(value, BusinessType):
            value = value.value
        print(f"{field.name:>18}: {value}")
    print(f"{'onboarded':>18}: {tracker.profiles.is_onboarding_complete}")
    return 0


def cmd_checklist(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    items = tracker.registry.compliance_items
    if not items:
        print("No compliance items yet: set a registration date with `profile --registration-date`.")
        return 0
    for item in items:
        urgency = classify_urgency(item.due_date, today, item.status)
        vat = " (VAT)" if item.requires_vat else ""
        print(f"{item.id:<22} {item.title}{vat}")
        print(f"{'':<22} due {_show_date(item.due_date)}  {urgency.value}, priority {item.priority.value}")
    return 0


def cmd_upcoming(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    print("Upcoming deadlines:")
    _print_deadlines(tracker.registry.upcoming_deadlines, today, "  Nothing upcoming.")
    return 0


def cmd_summary(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    summary = summarize(tracker.registry.compliance_items, today)
    print(f"Total compliance tasks: {summary.total}")
    print(f"Completed:              {summary.completed} ({summary.completion_percentage}%)")
    print(f"Due today:              {summary.due_today}")
    print(f"Overdue:                {summary.overdue}")
    return 0


def cmd_complete(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    if args.command == "complete":
        changed = tracker.registry.mark_compliance_completed(args.id)
    else:
        changed = tracker.registry.mark_compliance_pending(args.id)
    if not changed:
        print(f"No compliance item {args.id!r}.")
        return 1
    print(f"{args.id}: {tracker.registry.get_compliance_item(args.id).status.value}")
    return 0


def cmd_loan(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    registry = tracker.registry
    if args.action == "add":
        loan = registry.add_loan_repayment(
            loan_name=args.name,
            start_date=args.start,
            amount=args.amount,
            frequency=args.frequency,
            next_due_date=args.next_due,
        )
        print(f"Added {loan.loan_name} ({loan.id}), next due {_show_date(loan.next_due_date)}")
        return 0
    if args.action == "list":
        for loan in registry.loan_repayments:
            print(
                f"{loan.id}  {loan.loan_name:<30} NPR {loan.amount:>12} "
                f"{loan.frequency.value:<12} next {_show_date(loan.next_due_date)}"
            )
        return 0
    if args.action == "complete":
        ok = registry.mark_loan_repayment_complete(args.id)
    else:
        ok = registry.remove_loan_repayment(args.id)
    if not ok:
        print(f"No loan repayment {args.id!r}.")
        return 1
    print(f"Loan {args.id}: {args.action} done.")
    return 0


def cmd_vehicle(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    registry = tracker.registry
    if args.action == "add":
        vehicle = registry.add_vehicle_renewal(
            vehicle_name=args.name,
            registration_number=args.plate,
            last_renewal_date=args.last_renewal,
            next_renewal_date=args.next_renewal,
        )
        print(f"Added {vehicle.vehicle_name} ({vehicle.id}), renew by {_show_date(vehicle.next_renewal_date)}")
        return 0
    if args.action == "list":
        for vehicle in registry.vehicle_renewals:
            print(
                f"{vehicle.id}  {vehicle.vehicle_name:<20} {vehicle.registration_number:<18} "
                f"renew by {_show_date(vehicle.next_renewal_date)}"
            )
        return 0
    if args.action == "complete":
        ok = registry.mark_vehicle_renewal_complete(args.id)
    else:
        ok = registry.remove_vehicle_renewal(args.id)
    if not ok:
        print(f"No vehicle renewal {args.id!r}.")
        return 1
    print(f"Vehicle {args.id}: {args.action} done.")
    return 0


def cmd_bs(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    if args.to_gregorian:
        year, month, day = args.to_gregorian
        print(to_gregorian(year, month, day, strict=True).isoformat())
        return 0
    value = args.date or today
    bs = to_bikram_sambat(value)
    print(f"{value.isoformat()} = {format_nepali_date(value)} ({bs.year}-{bs.month:02d}-{bs.day:02d})")
    return 0


def cmd_remind(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    if args.sms:
        tracker.reminders.enable_sms_reminders(args.sms)
    print("Reminders in the next window:")
    _print_deadlines(tracker.reminders.pending_reminders(today), today, "  No upcoming deadlines.")
    sent = tracker.reminders.dispatch_due_reminders(today)
    print(f"Dispatched {sent} reminder message(s).")
    return 0


def cmd_demo(tracker: ComplianceTracker, args: argparse.Namespace, today: date) -> int:
    generator = SampleDataGenerator(seed=args.seed if args.seed is not None else tracker.config.seed)
    profile = generator.generate_profile(today)
    tracker.profiles.update(**{f.name: getattr(profile, f.name) for f in dataclasses.fields(profile)})
    for loan in generator.generate_loans(args.loans, today):
        tracker.registry.add_loan_repayment(
            loan.loan_name, loan.start_date, loan.amount, loan.frequency, loan.next_due_date
        )
    for vehicle in generator.generate_vehicles(args.vehicles, today):
        tracker.registry.add_vehicle_renewal(
            vehicle.vehicle_name,
            vehicle.registration_number,
            vehicle.last_renewal_date,
            vehicle.next_renewal_date,
        )
    print(f"Seeded demo business {profile.name!r} with {args.loans} loan(s) and {args.vehicles} vehicle(s).")
    return 0


COMMANDS = {
    "profile": cmd_profile,
    "checklist": cmd_checklist,
    "upcoming": cmd_upcoming,
    "summary": cmd_summary,
    "complete": cmd_complete,
    "reopen": cmd_complete,
    "loan": cmd_loan,
    "vehicle": cmd_vehicle,
    "bs": cmd_bs,
    "remind": cmd_remind,
    "demo": cmd_demo,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compliance-tracker",
        description="Track statutory and recurring business deadlines in Nepal",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--data-dir", type=Path, help="Directory holding the store file")
    parser.add_argument("--memory", action="store_true", help="Use a throwaway in-memory store")
    parser.add_argument("--today", type=_date, help="Evaluate deadlines as of this date")
    parser.add_argument("--log-level", help="Log level (default from LOG_LEVEL or INFO)")

    sub = parser.add_subparsers(dest="command", required=True)

    profile = sub.add_parser("profile", help="Show or update the business profile")
    profile.add_argument("--name")
    profile.add_argument("--email")
    profile.add_argument("--phone")
    profile.add_argument("--type", choices=[t.value for t in BusinessType])
    profile.add_argument("--registration-date", type=_date)
    profile.add_argument("--turnover", type=int)
    profile.add_argument("--vat", action=argparse.BooleanOptionalAction, default=None)
    profile.add_argument("--complete-onboarding", action="store_true")

    sub.add_parser("checklist", help="List statutory compliance items")
    sub.add_parser("upcoming", help="Show the next deadlines across all obligations")
    sub.add_parser("summary", help="Show checklist counters")

    for name, help_text in (("complete", "Mark a compliance item completed"), ("reopen", "Mark a compliance item pending")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("id")

    loan = sub.add_parser("loan", help="Manage loan repayments")
    loan_actions = loan.add_subparsers(dest="action", required=True)
    loan_add = loan_actions.add_parser("add")
    loan_add.add_argument("name")
    loan_add.add_argument("--start", type=_date, required=True)
    loan_add.add_argument("--amount", required=True)
    loan_add.add_argument("--frequency", choices=[f.value for f in RepaymentFrequency], default="monthly")
    loan_add.add_argument("--next-due", type=_date)
    loan_actions.add_parser("list")
    for action in ("complete", "remove"):
        loan_actions.add_parser(action).add_argument("id")

    vehicle = sub.add_parser("vehicle", help="Manage vehicle renewals")
    vehicle_actions = vehicle.add_subparsers(dest="action", required=True)
    vehicle_add = vehicle_actions.add_parser("add")
    vehicle_add.add_argument("name")
    vehicle_add.add_argument("--plate", required=True)
    vehicle_add.add_argument("--last-renewal", type=_date, required=True)
    vehicle_add.add_argument("--next-renewal", type=_date)
    vehicle_actions.add_parser("list")
    for action in ("complete", "remove"):
        vehicle_actions.add_parser(action).add_argument("id")

    bs = sub.add_parser("bs", help="Convert between Gregorian and Bikram Sambat")
    bs.add_argument("date", nargs="?", type=_date)
    bs.add_argument("--to-gregorian", nargs=3, type=int, metavar=("YEAR", "MONTH", "DAY"))

    remind = sub.add_parser("remind", help="List and dispatch today's reminders")
    remind.add_argument("--sms", metavar="PHONE", help="Enable SMS reminders to this number")

    demo = sub.add_parser("demo", help="Seed the store with generated sample data")
    demo.add_argument("--seed", type=int)
    demo.add_argument("--loans", type=int, default=2)
    demo.add_argument("--vehicles", type=int, default=1)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = TrackerConfig.from_env()
    if args.data_dir is not None:
        config.store.data_dir = args.data_dir
    if args.memory:
        config.store.backend = "memory"
    setup_logging(level=args.log_level or config.log_level, format_type=config.log_format)

    today = args.today or date.today()
    try:
        tracker = create_tracker(config, clock=lambda: today)
        return COMMANDS[args.command](tracker, args, today)
    except ComplianceTrackerError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
