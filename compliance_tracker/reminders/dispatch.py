"""Reminder dispatch contract and the logging stub used by default."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class Channel(str, Enum):
    EMAIL = "email"
    SMS = "sms"


class ReminderDispatcher(Protocol):
    """Delivers one reminder message. Implementations must not raise on delivery failure."""

    def __call__(self, channel: Channel, recipient: str, message: str) -> None: ...


class LoggingReminderDispatcher:
    """Records reminders in the log and keeps them in ``sent``; nothing leaves the process."""

    def __init__(self) -> None:
        self.sent: list[tuple[Channel, str, str]] = []

    def __call__(self, channel: Channel, recipient: str, message: str) -> None:
        self.sent.append((channel, recipient, message))
        logger.info("Reminder (%s) to %s: %s", channel.value, recipient, message)
