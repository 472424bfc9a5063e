"""Reminder settings and scheduling on top of the obligation registry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, timedelta

from compliance_tracker.dates.nepali import format_nepali_date
from compliance_tracker.feeds.upcoming import deadlines_within, iter_deadlines
from compliance_tracker.models import Deadline, ObligationStatus
from compliance_tracker.persistence import KeyValueStore, StoreKey
from compliance_tracker.reminders.dispatch import Channel, ReminderDispatcher
from compliance_tracker.store import BusinessProfileStore, ObligationRegistry

logger = logging.getLogger(__name__)


class ReminderService:
    """Decides which reminders are due and hands them to a dispatcher.

    Reminders go out ``offsets`` days before each pending deadline (7, 3
    and 0 by default). Email goes to the profile address; SMS only when
    enabled with a phone number.
    """

    def __init__(
        self,
        store: KeyValueStore,
        profiles: BusinessProfileStore,
        registry: ObligationRegistry,
        dispatcher: ReminderDispatcher,
        *,
        clock: Callable[[], date] = date.today,
        window_days: int = 30,
        offsets: tuple[int, ...] = (7, 3, 0),
    ) -> None:
        self._store = store
        self._profiles = profiles
        self._registry = registry
        self._dispatcher = dispatcher
        self._clock = clock
        self.window_days = window_days
        self.offsets = offsets

    # --- Settings ---

    @property
    def sms_reminders_enabled(self) -> bool:
        return self._store.get(StoreKey.SMS_REMINDERS_ENABLED.value) == "true"

    @property
    def reminder_phone_number(self) -> str | None:
        return self._store.get(StoreKey.REMINDER_PHONE_NUMBER.value) or None

    def enable_sms_reminders(self, phone_number: str) -> None:
        if not phone_number.strip():
            raise ValueError("A phone number is required for SMS reminders")
        self._store.set(StoreKey.REMINDER_PHONE_NUMBER.value, phone_number.strip())
        self._store.set(StoreKey.SMS_REMINDERS_ENABLED.value, "true")
        logger.info("SMS reminders enabled for %s", phone_number.strip())

    def disable_sms_reminders(self) -> None:
        self._store.set(StoreKey.SMS_REMINDERS_ENABLED.value, "false")
        logger.info("SMS reminders disabled")

    def enable_email_reminders(self) -> str:
        """Confirm email reminders for the profile address."""
        email = self._profiles.profile.email
        if not email:
            raise ValueError("The business profile has no email address")
        logger.info("Email reminders enabled for %s", email)
        return f"Email reminders enabled for {email}"

    def send_test_reminder(self) -> str:
        email = self._profiles.profile.email
        if not email:
            raise ValueError("The business profile has no email address")
        self._dispatcher(Channel.EMAIL, email, "Test reminder: compliance reminders are set up.")
        return f"Test reminder sent to {email}"

    # --- Scheduling ---

    def pending_reminders(self, today: date | None = None) -> list[Deadline]:
        """Pending deadlines inside the reminder window, soonest first."""
        today = today or self._clock()
        return deadlines_within(
            self._registry.compliance_items,
            self._registry.loan_repayments,
            self._registry.vehicle_renewals,
            today,
            days=self.window_days,
        )

    def reminder_dates(self, deadline: Deadline) -> list[date]:
        """Dates on which reminders for ``deadline`` go out, earliest first."""
        return sorted({deadline.due_date - timedelta(days=offset) for offset in self.offsets})

    def dispatch_due_reminders(self, today: date | None = None) -> int:
        """Send every reminder scheduled for ``today``; returns the message count."""
        today = today or self._clock()
        recipients = self._recipients()
        if not recipients:
            logger.warning("No reminder recipients configured, skipping dispatch")
            return 0

        sent = 0
        for deadline in iter_deadlines(
            self._registry.compliance_items,
            self._registry.loan_repayments,
            self._registry.vehicle_renewals,
            today,
        ):
            if deadline.status != ObligationStatus.PENDING:
                continue
            if today not in self.reminder_dates(deadline):
                continue
            message = self._message(deadline, today)
            for channel, recipient in recipients:
                self._dispatcher(channel, recipient, message)
                sent += 1

        logger.info("Dispatched %d reminder(s) for %s", sent, today)
        return sent

    def _recipients(self) -> list[tuple[Channel, str]]:
        recipients = []
        email = self._profiles.profile.email
        if email:
            recipients.append((Channel.EMAIL, email))
        phone = self.reminder_phone_number
        if self.sms_reminders_enabled and phone:
            recipients.append((Channel.SMS, phone))
        return recipients

    @staticmethod
    def _message(deadline: Deadline, today: date) -> str:
        days_left = (deadline.due_date - today).days
        when = "today" if days_left == 0 else f"in {days_left} day{'s' if days_left != 1 else ''}"
        return (
            f"{deadline.title} is due {when} "
            f"({format_nepali_date(deadline.due_date)}, {deadline.due_date.isoformat()})"
        )
