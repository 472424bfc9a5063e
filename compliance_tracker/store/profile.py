"""Business profile store backed by the persistent key-value store."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from compliance_tracker.exceptions import InvalidProfileError
from compliance_tracker.models import BusinessProfile
from compliance_tracker.persistence import KeyValueStore, StoreKey, load_json, save_json
from compliance_tracker.serialization import profile_from_record, to_record

logger = logging.getLogger(__name__)

ProfileListener = Callable[[BusinessProfile], None]


class BusinessProfileStore:
    """Owns the onboarded business profile and the onboarding flag.

    Every update is persisted immediately and then announced to listeners
    with a copy of the new profile.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._profile = self._load()
        self._onboarding_complete = store.get(StoreKey.ONBOARDING_COMPLETE.value) == "true"
        self._listeners: list[ProfileListener] = []

    @property
    def profile(self) -> BusinessProfile:
        return dataclasses.replace(self._profile)

    @property
    def is_onboarding_complete(self) -> bool:
        return self._onboarding_complete

    def add_listener(self, listener: ProfileListener) -> None:
        """Register a callback invoked after every profile update."""
        self._listeners.append(listener)

    def update(self, **changes: object) -> BusinessProfile:
        """Apply field changes, persist, and notify listeners.

        Raises
        ------
        InvalidProfileError
            If a field name is unknown or a value is invalid.
        """
        updated = self._profile.replace(**changes)
        save_json(self._store, StoreKey.BUSINESS_INFO, to_record(updated))
        self._profile = updated
        logger.info("Business profile updated: %s", ", ".join(sorted(changes)) or "no changes")

        for listener in self._listeners:
            listener(self.profile)
        return self.profile

    def complete_onboarding(self) -> None:
        """Mark onboarding as finished."""
        if not self._profile.is_complete:
            raise InvalidProfileError("Name, email and phone are required to complete onboarding")
        self._store.set(StoreKey.ONBOARDING_COMPLETE.value, "true")
        self._onboarding_complete = True
        logger.info("Onboarding completed for %s", self._profile.name)

    def _load(self) -> BusinessProfile:
        record = load_json(self._store, StoreKey.BUSINESS_INFO, {})
        if not record:
            return BusinessProfile()
        try:
            return profile_from_record(record)
        except (InvalidProfileError, ValueError, TypeError) as exc:
            logger.warning("Stored business profile is invalid, using defaults: %s", exc)
            return BusinessProfile()
