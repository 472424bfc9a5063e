"""Key-value store contract and JSON helpers shared by all backends."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from compliance_tracker.exceptions import StoreError

logger = logging.getLogger(__name__)


class StoreKey(str, Enum):
    """Keys used in the persistent store."""

    BUSINESS_INFO = "businessInfo"
    ONBOARDING_COMPLETE = "onboardingComplete"
    COMPLIANCE_STATUSES = "complianceStatuses"
    LOAN_REPAYMENTS = "loanRepayments"
    VEHICLE_RENEWALS = "vehicleRenewals"
    SMS_REMINDERS_ENABLED = "smsRemindersEnabled"
    REMINDER_PHONE_NUMBER = "reminderPhoneNumber"


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous string key-value storage.

    ``set`` and ``remove`` must be durable by the time they return.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def _key(key: str | StoreKey) -> str:
    return key.value if isinstance(key, StoreKey) else key


def load_json(store: KeyValueStore, key: str | StoreKey, default: Any) -> Any:
    """Read and decode a JSON value, returning ``default`` when absent or corrupt.

    Corrupt values are logged and never raised.
    """
    raw = store.get(_key(key))
    if raw is None:
        return default
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning("Ignoring corrupt value for %s: %s", _key(key), exc)
        return default
    if default is not None and not isinstance(value, type(default)):
        logger.warning(
            "Ignoring value for %s: expected %s, found %s",
            _key(key),
            type(default).__name__,
            type(value).__name__,
        )
        return default
    return value


def save_json(store: KeyValueStore, key: str | StoreKey, value: Any) -> None:
    """Encode ``value`` as JSON and write it synchronously."""
    try:
        encoded = json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise StoreError(f"Cannot encode value for {_key(key)}: {exc}") from exc
    store.set(_key(key), encoded)
