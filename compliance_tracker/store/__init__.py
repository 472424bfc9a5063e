"""Stateful stores for the business profile and tracked obligations."""

from compliance_tracker.store.obligations import ObligationRegistry
from compliance_tracker.store.profile import BusinessProfileStore

__all__ = ["BusinessProfileStore", "ObligationRegistry"]
