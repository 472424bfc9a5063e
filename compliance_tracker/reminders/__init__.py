"""Reminder scheduling and dispatch."""

from compliance_tracker.reminders.dispatch import Channel, LoggingReminderDispatcher, ReminderDispatcher
from compliance_tracker.reminders.service import ReminderService

__all__ = ["Channel", "LoggingReminderDispatcher", "ReminderDispatcher", "ReminderService"]
