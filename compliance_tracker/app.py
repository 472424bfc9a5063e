"""Application context: builds and wires the stores once per process."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from compliance_tracker.config import TrackerConfig
from compliance_tracker.persistence import JsonFileStore, KeyValueStore, MemoryStore
from compliance_tracker.reminders import LoggingReminderDispatcher, ReminderDispatcher, ReminderService
from compliance_tracker.store import BusinessProfileStore, ObligationRegistry

logger = logging.getLogger(__name__)


@dataclass
class ComplianceTracker:
    """Handles to every component; pass this around instead of globals."""

    config: TrackerConfig
    store: KeyValueStore
    profiles: BusinessProfileStore
    registry: ObligationRegistry
    reminders: ReminderService


def build_store(config: TrackerConfig) -> KeyValueStore:
    if config.store.backend == "memory":
        return MemoryStore()
    return JsonFileStore(config.store.path)


def create_tracker(
    config: TrackerConfig | None = None,
    *,
    store: KeyValueStore | None = None,
    dispatcher: ReminderDispatcher | None = None,
    clock: Callable[[], date] = date.today,
) -> ComplianceTracker:
    """Create an initialized tracker.

    Parameters
    ----------
    config : TrackerConfig | None
        Configuration; defaults to ``TrackerConfig()``.
    store : KeyValueStore | None
        Overrides the backend chosen by ``config``.
    dispatcher : ReminderDispatcher | None
        Reminder delivery; defaults to the logging stub.
    clock : Callable[[], date]
        Source of the current date.
    """
    config = config or TrackerConfig()
    store = store if store is not None else build_store(config)

    profiles = BusinessProfileStore(store)
    registry = ObligationRegistry(
        store,
        profiles,
        clock=clock,
        upcoming_limit=config.deadlines.upcoming_limit,
        soon_window_days=config.deadlines.soon_window_days,
    )
    profiles.add_listener(registry.on_profile_changed)
    registry.initialize()

    reminders = ReminderService(
        store,
        profiles,
        registry,
        dispatcher or LoggingReminderDispatcher(),
        clock=clock,
        window_days=config.deadlines.reminder_window_days,
        offsets=config.deadlines.reminder_offsets,
    )

    logger.debug("Tracker ready (backend=%s)", config.store.backend)
    return ComplianceTracker(
        config=config,
        store=store,
        profiles=profiles,
        registry=registry,
        reminders=reminders,
    )
