"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from compliance_tracker.models import BusinessProfile, BusinessType
from compliance_tracker.persistence import MemoryStore
from compliance_tracker.store import BusinessProfileStore, ObligationRegistry


class FakeClock:
    """Settable stand-in for ``date.today``."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed reference date."""
    return date(2024, 1, 1)


@pytest.fixture
def clock(today: date) -> FakeClock:
    return FakeClock(today)


@pytest.fixture
def memory_store() -> MemoryStore:
    """Create a fresh in-memory store for each test."""
    return MemoryStore()


@pytest.fixture
def sample_profile() -> BusinessProfile:
    """Onboarded physical-goods business registered on 2023-12-01."""
    return BusinessProfile(
        name="Himalayan Traders",
        email="owner@himalayan.example",
        phone="9801234567",
        type=BusinessType.PHYSICAL_GOODS,
        registration_date=date(2023, 12, 1),
        turnover=1_000_000,
        has_vat=False,
    )


@pytest.fixture
def profiles(memory_store: MemoryStore) -> BusinessProfileStore:
    return BusinessProfileStore(memory_store)


@pytest.fixture
def registry(
    memory_store: MemoryStore, profiles: BusinessProfileStore, clock: FakeClock
) -> ObligationRegistry:
    """Initialized registry wired to the profile store."""
    registry = ObligationRegistry(memory_store, profiles, clock=clock)
    profiles.add_listener(registry.on_profile_changed)
    registry.initialize()
    return registry
